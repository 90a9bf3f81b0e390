"""
Application initialization module
Handles startup tasks that must run before the first request
"""

import logging

from app.core.config import settings
from app.utils.certificate_pdf import certificate_output_dir

logger = logging.getLogger(__name__)


def init_certificate_storage() -> None:
    """Make sure rendered certificates have somewhere to go."""
    path = certificate_output_dir()
    logger.info(f"✅ Certificate storage ready: {path}")


def log_gamification_rules() -> None:
    logger.info(
        "Gamification rules: "
        f"{settings.points_per_correct_answer} pts/correct answer, "
        f"+{settings.perfect_score_bonus} perfect bonus, "
        f"{settings.xp_per_level} XP/level, "
        f"certificate at {settings.certificate_passing_score}%"
    )


def initialize_application() -> None:
    """Run all application initialization tasks."""
    logger.info("🚀 Starting application initialization...")

    init_certificate_storage()
    log_gamification_rules()

    logger.info("✅ Application initialization completed!")

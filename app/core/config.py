from pathlib import Path
from typing import List

from pydantic import Field, ValidationError, field_validator
from pydantic_settings import BaseSettings

BASE_DIR = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    # Application Information
    app_name: str = Field(default="LPK Merdeka")
    app_description: str = Field(default="Learning Management Platform")
    app_version: str = Field(default="1.0.0")
    app_url: str = Field(default="http://localhost:8000")
    frontend_url: str = Field(default="http://localhost:3000")
    debug: bool = Field(default=True)
    production: bool = Field(default=False)
    timezone: str = Field(default="UTC")
    language: str = Field(default="id")

    # Database Configuration
    db_connection: str = Field(default="postgresql")  # postgresql | sqlite
    db_host: str = Field(default="127.0.0.1")
    db_port: int = Field(default=5432)
    db_database: str = Field(default="lpk-merdeka")
    db_username: str = Field(default="home")
    db_password: str = Field(default="123")

    # Security Settings
    cors_allowed_origins: List[str] = Field(default=["http://localhost:3000"])

    # JWT Configuration
    jwt_secret: str = Field(default="your-secret-key-change-in-production")
    jwt_algorithm: str = Field(default="HS256")
    jwt_user_expiration: int = Field(default=7)
    jwt_issuer: str = Field(default="LPK Merdeka")

    # File Storage
    upload_dir: str = Field(default="storage")
    certificate_dir: str = Field(default="certificates")
    certificate_render_timeout: float = Field(default=10.0)

    # Logging
    log_level: str = Field(default="info")
    log_dir: str = Field(default="logs")

    # Rate limiting
    rate_limit_enabled: bool = Field(default=True)
    rate_limit_storage_uri: str = Field(default="memory://")
    rate_limit_default: str = Field(default="100/minute")
    quiz_submit_rate_limit: str = Field(default="20/minute")

    # Gamification
    points_per_correct_answer: int = Field(default=10)
    perfect_score_bonus: int = Field(default=50)
    daily_login_points: int = Field(default=10)
    xp_per_level: int = Field(default=500)
    certificate_passing_score: int = Field(default=70)

    # Quiz defaults
    default_question_count: int = Field(default=10)
    default_quiz_duration: int = Field(default=30)

    # ============================
    # Generic comma-separated parser
    # ============================
    @staticmethod
    def _parse_csv(value, default):
        if isinstance(value, str):
            items = [x.strip() for x in value.split(",") if x.strip()]
            return items if items else default
        if isinstance(value, list):
            return value
        return default

    @field_validator("cors_allowed_origins", mode="before")
    def validate_cors(cls, v):
        return cls._parse_csv(v, ["http://localhost:3000"])

    @field_validator("db_connection", mode="before")
    def validate_db_connection(cls, v):
        value = str(v).strip().lower()
        if value not in ("postgresql", "sqlite"):
            raise ValueError("db_connection must be 'postgresql' or 'sqlite'")
        return value

    @property
    def storage_path(self) -> Path:
        """Absolute storage root; relative paths resolve against the project root"""
        path = Path(self.upload_dir)
        return path if path.is_absolute() else BASE_DIR / path

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "case_sensitive": False,
        "extra": "ignore",
    }


def load_settings():
    try:
        return Settings()
    except ValidationError as e:
        print("❌ Validation Error:", e)
        raise


settings = load_settings()

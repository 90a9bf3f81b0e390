import logging
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from datetime import datetime
from pathlib import Path
from typing import Optional

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4, landscape
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from app.core.config import settings

logger = logging.getLogger(__name__)

PRIMARY_COLOR = colors.HexColor("#1E3A8A")  # Navy
ACCENT_COLOR = colors.HexColor("#D97706")  # Gold
TEXT_PRIMARY = colors.HexColor("#1F2937")  # Dark Gray
TEXT_SECONDARY = colors.HexColor("#6B7280")  # Medium Gray

_render_pool = ThreadPoolExecutor(max_workers=2, thread_name_prefix="certificate")


def certificate_output_dir() -> Path:
    path = settings.storage_path / settings.certificate_dir
    path.mkdir(parents=True, exist_ok=True)
    return path


def certificate_public_url(code: str) -> str:
    return f"{settings.app_url.rstrip('/')}/storage/{settings.certificate_dir}/{code}.pdf"


def discard_certificate_file(code: str) -> None:
    """Remove a rendered PDF that never made it into the certificates table"""
    path = certificate_output_dir() / f"{code}.pdf"
    try:
        path.unlink(missing_ok=True)
    except OSError as e:
        logger.warning(f"Could not remove orphan certificate {path}: {e}")
        return
    logger.info(f"Discarded certificate file for {code}")


def _fit_font_size(text: str, font: str, size: int, max_width: float) -> int:
    """Shrink the font until the text fits on one line"""
    while size > 12 and stringWidth(text, font, size) > max_width:
        size -= 2
    return size


def draw_certificate(
    pdf: canvas.Canvas, user_name: str, quiz_title: str, issued_date: datetime, code: str
) -> None:
    width, height = landscape(A4)

    # Double frame
    pdf.setStrokeColor(PRIMARY_COLOR)
    pdf.setLineWidth(6)
    pdf.rect(20, 20, width - 40, height - 40, fill=0, stroke=1)
    pdf.setStrokeColor(ACCENT_COLOR)
    pdf.setLineWidth(2)
    pdf.rect(34, 34, width - 68, height - 68, fill=0, stroke=1)

    # Header band
    pdf.setFillColor(PRIMARY_COLOR)
    pdf.rect(34, height - 120, width - 68, 86, fill=1, stroke=0)
    pdf.setFillColor(colors.white)
    pdf.setFont("Helvetica-Bold", 34)
    pdf.drawCentredString(width / 2, height - 88, "SERTIFIKAT")
    pdf.setFont("Helvetica", 12)
    pdf.drawCentredString(width / 2, height - 108, settings.app_name.upper())

    # Recipient
    pdf.setFillColor(TEXT_SECONDARY)
    pdf.setFont("Helvetica", 14)
    pdf.drawCentredString(width / 2, height - 180, "Diberikan kepada")

    name_size = _fit_font_size(user_name, "Helvetica-Bold", 30, width - 160)
    pdf.setFillColor(TEXT_PRIMARY)
    pdf.setFont("Helvetica-Bold", name_size)
    pdf.drawCentredString(width / 2, height - 225, user_name)

    pdf.setStrokeColor(ACCENT_COLOR)
    pdf.setLineWidth(1)
    pdf.line(width / 2 - 200, height - 240, width / 2 + 200, height - 240)

    # Achievement
    pdf.setFillColor(TEXT_SECONDARY)
    pdf.setFont("Helvetica", 14)
    pdf.drawCentredString(
        width / 2, height - 280, "atas keberhasilan menyelesaikan kuis"
    )

    title_size = _fit_font_size(quiz_title, "Helvetica-Bold", 22, width - 160)
    pdf.setFillColor(PRIMARY_COLOR)
    pdf.setFont("Helvetica-Bold", title_size)
    pdf.drawCentredString(width / 2, height - 315, quiz_title)

    # Footer
    pdf.setFillColor(TEXT_SECONDARY)
    pdf.setFont("Helvetica", 11)
    pdf.drawString(70, 70, f"Tanggal terbit: {issued_date.strftime('%d-%m-%Y')}")
    pdf.drawRightString(width - 70, 70, f"No. {code}")


class CertificateRenderer:
    """Renders certificate PDFs into the public storage directory"""

    def render(
        self, user_name: str, quiz_title: str, issued_date: datetime, code: str
    ) -> Optional[str]:
        """
        Draw the certificate and return its public URL.

        Returns:
            URL of the stored PDF
        """
        output_path = certificate_output_dir() / f"{code}.pdf"

        pdf = canvas.Canvas(str(output_path), pagesize=landscape(A4))
        pdf.setTitle(f"Sertifikat {quiz_title}")
        pdf.setAuthor(settings.app_name)
        draw_certificate(pdf, user_name, quiz_title, issued_date, code)
        pdf.showPage()
        pdf.save()

        logger.info(f"Certificate rendered: {output_path}")
        return certificate_public_url(code)


def render_with_timeout(
    renderer, user_name: str, quiz_title: str, issued_date: datetime, code: str,
    timeout: Optional[float] = None,
) -> Optional[str]:
    """
    Run the renderer on the worker pool, bounded by `timeout` seconds.

    Returns None when rendering fails or times out; the caller decides how
    to report that. A timed-out render keeps its pool worker until it ends,
    and its PDF is deleted then.
    """
    timeout = settings.certificate_render_timeout if timeout is None else timeout
    future = _render_pool.submit(
        renderer.render, user_name, quiz_title, issued_date, code
    )
    try:
        return future.result(timeout=timeout)
    except FutureTimeoutError:
        logger.error(f"Certificate rendering timed out after {timeout}s ({code})")
        # The worker cannot be interrupted; drop its file once it finishes
        future.add_done_callback(lambda _: discard_certificate_file(code))
        return None
    except Exception as e:
        logger.error(f"Certificate rendering failed ({code}): {e}", exc_info=True)
        discard_certificate_file(code)
        return None


certificate_renderer = CertificateRenderer()

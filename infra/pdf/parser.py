import io
import logging

import pdfplumber
from pdfminer.pdfdocument import PDFPasswordIncorrect

from domain.errors import ExtractionError

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"


def _is_password_error(exc: BaseException) -> bool:
    # pdfplumber wraps pdfminer errors; the original sits in args or __cause__
    seen = [exc, exc.__cause__, exc.__context__, *getattr(exc, "args", ())]
    return any(isinstance(e, PDFPasswordIncorrect) for e in seen)


def parse_pdf_text(data: bytes) -> str:
    text_parts = []
    with pdfplumber.open(io.BytesIO(data)) as pdf:
        for page in pdf.pages:
            t = page.extract_text() or ""
            text_parts.append(t)
    return "\n".join(text_parts)


def extract_cv_text(data: bytes) -> str:
    """Extract plain text from an uploaded CV, raising ExtractionError on failure."""
    try:
        text = parse_pdf_text(data)
    except Exception as exc:
        logger.warning("PDF extraction error: %s", exc)
        if _is_password_error(exc):
            raise ExtractionError(
                "This PDF is password-protected. Please upload an unlocked file.") from exc
        raise ExtractionError(
            "Failed to extract text from PDF. The file may be corrupted.") from exc

    if not text.strip():
        raise ExtractionError(
            "No text could be extracted from this PDF. Scanned documents are not supported.")
    return text

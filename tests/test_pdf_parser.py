import io

import pytest
from pypdf import PdfReader, PdfWriter

from conftest import make_pdf
from domain.errors import ExtractionError
from infra.pdf.parser import extract_cv_text, parse_pdf_text


def test_parse_pdf_text_reads_every_line():
    text = parse_pdf_text(make_pdf(["John Doe", "Skills: React, CSS"]))
    assert "John Doe" in text
    assert "React, CSS" in text


def test_extract_cv_text_rejects_pdf_without_text():
    with pytest.raises(ExtractionError) as exc:
        extract_cv_text(make_pdf([]))
    assert "No text could be extracted" in exc.value.message


def test_extract_cv_text_wraps_corrupted_file():
    with pytest.raises(ExtractionError) as exc:
        extract_cv_text(b"this is not a pdf at all")
    assert "Failed to extract text" in exc.value.message
    assert exc.value.__cause__ is not None


def _encrypted(data: bytes, password: str) -> bytes:
    writer = PdfWriter()
    for page in PdfReader(io.BytesIO(data)).pages:
        writer.add_page(page)
    writer.encrypt(password)
    out = io.BytesIO()
    writer.write(out)
    return out.getvalue()


def test_extract_cv_text_reports_password_protected_file():
    locked = _encrypted(make_pdf(["Skills: React, CSS"]), "s3cret")
    with pytest.raises(ExtractionError) as exc:
        extract_cv_text(locked)
    assert "password-protected" in exc.value.message
    assert exc.value.__cause__ is not None

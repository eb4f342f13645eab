# tests/conftest.py
import json
import os
import sys

import httpx
import pytest

# Ensure project root (containing app/, domain/, infra/) is in sys.path
PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), "../"))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from app.settings import Settings

STUB_SCORING_RESPONSE = (
    '{"match_percentage":67,"matched_keywords":["React","CSS"],'
    '"missing_keywords":["Node.js"],"suggestions":["Add Node.js"],'
    '"strengths":["Strong CSS"],"jd_keywords_count":3}'
)


def _pdf_escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def make_pdf(lines) -> bytes:
    """Build a one-page PDF with a Helvetica text line per entry."""
    ops = ["BT", "/F1 12 Tf", "72 720 Td"]
    for i, line in enumerate(lines):
        if i:
            ops.append("0 -16 Td")
        ops.append(f"({_pdf_escape(line)}) Tj")
    ops.append("ET")
    stream = "\n".join(ops).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length " + str(len(stream)).encode() + b" >>\nstream\n" + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]
    out = bytearray(b"%PDF-1.4\n")
    offsets = []
    for num, body in enumerate(objects, start=1):
        offsets.append(len(out))
        out += f"{num} 0 obj\n".encode() + body + b"\nendobj\n"
    xref_at = len(out)
    out += f"xref\n0 {len(objects) + 1}\n".encode()
    out += b"0000000000 65535 f \n"
    for off in offsets:
        out += f"{off:010d} 00000 n \n".encode()
    out += f"trailer\n<< /Size {len(objects) + 1} /Root 1 0 R >>\nstartxref\n{xref_at}\n%%EOF\n".encode()
    return bytes(out)


class StubLLM:
    """Chat-completion endpoint stand-in; replies are served in order."""

    def __init__(self, *replies):
        self.replies = list(replies)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append({
            "url": str(request.url),
            "headers": dict(request.headers),
            "json": json.loads(request.content),
        })
        if not self.replies:
            raise AssertionError("unexpected LLM call")
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        if isinstance(reply, httpx.Response):
            return reply
        return httpx.Response(200, json={"choices": [{"message": {"content": reply}}]})

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


@pytest.fixture
def settings():
    return Settings(
        OPENAI_API_KEY=None,
        OPENROUTER_API_KEY=None,
        PIPELINE_LOG_FILE=None,
        LLM_PROVIDER="openai",
        OPENAI_MODEL="gpt-4o-mini",
        LLM_TEMPERATURE=0.3,
        LLM_MAX_TOKENS=1500,
        SUMMARIZE_CV=False,
        MAX_UPLOAD_MB=10,
        MAX_CV_CHARS=12000,
        SESSION_TTL_MINUTES=60,
    )


@pytest.fixture
def cv_pdf():
    return make_pdf(["Jane Roe", "Skills: React, CSS"])

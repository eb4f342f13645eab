import asyncio
import logging
from typing import Callable, List, Optional

import httpx

from app.logging import PIPELINE_LOGGER
from app.settings import Settings
from domain.errors import (
    CVMatcherError,
    ExtractionError,
    LLMResponseParseError,
    MissingInputError,
)
from domain.schemas import (
    AnalysisRequest,
    AnalysisResult,
    InvalidAnalysis,
    PipelineStage,
    UploadedFile,
)
from domain.session import AnalysisSession
from infra.llm.client import choose_provider, score_match_llm, summarize_cv_llm
from infra.pdf.parser import extract_cv_text

logger = logging.getLogger(PIPELINE_LOGGER)

Extractor = Callable[[bytes], str]


def _preview(items: List[str], limit: int = 5) -> str:
    head = ", ".join(items[:limit])
    return head + (f" (+{len(items) - limit})" if len(items) > limit else "")


async def ingest_cv(
    session: AnalysisSession,
    filename: Optional[str],
    content_type: Optional[str],
    data: bytes,
    extractor: Extractor = extract_cv_text,
) -> UploadedFile:
    session.ensure_idle("upload a new file")
    session.cv.check_type(content_type)

    name = filename or "cv.pdf"
    logger.info("session %s: extracting text from %s (%d bytes)", session.id, name, len(data))
    session.cv.begin()
    session.transition(PipelineStage.EXTRACTING)
    session.notify("info", "Processing CV", "Extracting text content")
    try:
        text = await asyncio.to_thread(extractor, data)
    except ExtractionError as exc:
        session.cv.fail(exc.message)
        session.transition(PipelineStage.FAILED)
        session.last_error = exc.message
        session.notify("error", "Upload failed", exc.message)
        raise
    except (Exception, asyncio.CancelledError):
        session.cv.fail("Failed to extract text from PDF")
        session.transition(PipelineStage.FAILED)
        raise

    uploaded = UploadedFile(name=name, size_bytes=len(data), extracted_text=text)
    session.cv.complete(uploaded)
    session.transition(PipelineStage.IDLE)
    session.last_error = None
    session.notify("success", f"{name} uploaded successfully", f"{len(text)} characters extracted")
    logger.info("session %s: CV text length %d chars", session.id, len(text))
    return uploaded


def remove_cv(session: AnalysisSession) -> None:
    session.ensure_idle("remove the file")
    session.cv.remove()
    logger.info("session %s: CV removed", session.id)


def build_request(session: AnalysisSession, credential: Optional[str] = None) -> AnalysisRequest:
    if session.cv.uploaded is None or not session.cv.text:
        raise MissingInputError("Please upload a CV first")
    if not session.job_description.text.strip():
        raise MissingInputError("Please enter a job description")
    return AnalysisRequest(
        cv_text=session.cv.text,
        job_description_text=session.job_description.text,
        credential=credential or session.credential,
    )


async def run_analysis(
    session: AnalysisSession,
    settings: Settings,
    *,
    credential: Optional[str] = None,
    summarize_cv: Optional[bool] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> AnalysisResult:
    """Score the session's CV against its job description.

    Inputs are checked before any network call. With ``summarize_cv`` the CV is
    first condensed by the model and only the summary is sent for scoring.
    A failure moves the session to ``failed`` and keeps the previous result.
    """
    session.ensure_idle("start an analysis")
    request = build_request(session, credential)
    provider = choose_provider(settings, request.credential)
    if credential:
        session.credential = credential
    summarize = settings.SUMMARIZE_CV if summarize_cv is None else summarize_cv

    logger.info("=== Starting analysis for session %s ===", session.id)
    logger.info("provider=%s model=%s summarize_cv=%s", provider.name, provider.model, summarize)
    logger.info("CV text length: %d chars, JD length: %d chars",
                len(request.cv_text), len(request.job_description_text))

    try:
        cv_for_scoring = request.cv_text
        if summarize:
            session.transition(PipelineStage.SUMMARIZING)
            session.notify("info", "Processing CV", "Creating a privacy-friendly summary of your CV")
            summary = await summarize_cv_llm(request.cv_text, provider, settings, transport=transport)
            if not summary:
                raise LLMResponseParseError("Failed to process CV", "empty summary")
            logger.info("CV summary length: %d chars", len(summary))
            cv_for_scoring = summary

        session.transition(PipelineStage.SCORING)
        session.notify("info", "Analyzing match", "Comparing your CV with the job requirements")
        parsed = await score_match_llm(
            cv_for_scoring,
            request.job_description_text,
            provider,
            settings,
            summarized=summarize,
            transport=transport,
        )
        if isinstance(parsed, InvalidAnalysis):
            logger.warning("Unparseable scoring response: %s", parsed.reason)
            raise LLMResponseParseError("Failed to parse analysis results", parsed.reason)
    except Exception as exc:
        message = exc.message if isinstance(exc, CVMatcherError) else "Analysis failed unexpectedly"
        session.transition(PipelineStage.FAILED)
        session.last_error = message
        session.notify("error", "Analysis failed", message)
        logger.warning("=== Analysis failed for session %s: %s ===", session.id, message)
        raise
    except asyncio.CancelledError:
        session.transition(PipelineStage.FAILED)
        raise

    result = parsed.result
    session.result = result
    session.last_error = None
    session.transition(PipelineStage.DONE)
    session.notify("success", "Analysis complete", f"Your CV matches {result.match_percentage}% of the job requirements")
    logger.info(
        "match=%d%% matched=[%s] missing=[%s]",
        result.match_percentage,
        _preview(result.matched_keywords),
        _preview(result.missing_keywords),
    )
    logger.info("=== Analysis completed for session %s ===", session.id)
    return result

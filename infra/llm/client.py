import json
import logging
import re
from dataclasses import dataclass
from typing import Dict, Optional

import httpx
from pydantic import ValidationError

from app.settings import Settings
from domain.errors import LLMHTTPError, LLMTransportError, MissingInputError
from domain.schemas import AnalysisResult, InvalidAnalysis, ParsedAnalysis, ValidAnalysis
from infra.llm.prompts import CV_SUMMARY_PROMPT, MATCH_PROMPT

logger = logging.getLogger(__name__)

# greedy: first "{" through last "}"
_JSON_OBJECT_RE = re.compile(r"\{[\s\S]*\}")


@dataclass(frozen=True)
class ChatProvider:
    name: str
    url: str
    model: str
    api_key: str
    extra_headers: Dict[str, str]


def choose_provider(settings: Settings, credential: Optional[str] = None) -> ChatProvider:
    """Pick the chat-completion endpoint and key for one analysis.

    A caller-supplied credential wins and goes to ``LLM_PROVIDER``; otherwise
    the server-side keys are tried, OpenAI first.
    """
    if credential:
        if settings.LLM_PROVIDER.lower() == "openrouter":
            return _openrouter(settings, credential)
        return _openai(settings, credential)
    if settings.OPENAI_API_KEY:
        return _openai(settings, settings.OPENAI_API_KEY)
    if settings.OPENROUTER_API_KEY:
        return _openrouter(settings, settings.OPENROUTER_API_KEY)
    raise MissingInputError("Please enter your API key")


def _openai(settings: Settings, api_key: str) -> ChatProvider:
    return ChatProvider("openai", settings.OPENAI_CHAT_URL, settings.OPENAI_MODEL, api_key, {})


def _openrouter(settings: Settings, api_key: str) -> ChatProvider:
    headers = {"HTTP-Referer": "http://localhost", "X-Title": settings.APP_NAME}
    return ChatProvider("openrouter", settings.OPENROUTER_CHAT_URL, settings.OPENROUTER_MODEL, api_key, headers)


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        err = body.get("error")
        if isinstance(err, dict) and err.get("message"):
            return str(err["message"])
        if isinstance(err, str) and err:
            return err
    return f"API request failed with status {response.status_code}"


async def _post(
    url: str,
    headers: Dict[str, str],
    payload: Dict,
    *,
    timeout: float,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Dict:
    try:
        async with httpx.AsyncClient(timeout=timeout, transport=transport) as client:
            response = await client.post(url, headers=headers, json=payload)
    except httpx.TimeoutException as exc:
        raise LLMTransportError("The analysis service did not respond in time") from exc
    except httpx.RequestError as exc:
        raise LLMTransportError(f"Could not reach the analysis service: {exc}") from exc

    if response.is_error:
        raise LLMHTTPError(_error_message(response), response.status_code)
    try:
        return response.json()
    except ValueError as exc:
        raise LLMHTTPError("The analysis service returned a non-JSON body", response.status_code) from exc


async def chat(
    prompt: str,
    provider: ChatProvider,
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    headers = {"Authorization": f"Bearer {provider.api_key}", **provider.extra_headers}
    payload = {
        "model": provider.model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": settings.LLM_TEMPERATURE,
        "max_tokens": settings.LLM_MAX_TOKENS,
    }
    logger.debug("POST %s model=%s prompt_chars=%d", provider.url, provider.model, len(prompt))
    data = await _post(
        provider.url, headers, payload,
        timeout=settings.LLM_TIMEOUT_SECONDS, transport=transport,
    )
    try:
        return data["choices"][0]["message"]["content"] or ""
    except (KeyError, IndexError, TypeError) as exc:
        raise LLMHTTPError("The analysis service returned an unexpected response", 200) from exc


def parse_analysis_response(raw_text: str) -> ParsedAnalysis:
    match = _JSON_OBJECT_RE.search(raw_text or "")
    if not match:
        return InvalidAnalysis("response contained no JSON object")
    try:
        data = json.loads(match.group(0))
    except json.JSONDecodeError as exc:
        return InvalidAnalysis(f"response JSON could not be decoded: {exc.msg}")
    if not isinstance(data, dict):
        return InvalidAnalysis("response JSON is not an object")
    try:
        return ValidAnalysis(AnalysisResult.model_validate(data))
    except ValidationError as exc:
        fields = sorted({".".join(str(p) for p in err["loc"]) for err in exc.errors()})
        return InvalidAnalysis(f"response failed validation on: {', '.join(fields)}")


def build_summary_prompt(cv_text: str, max_chars: int) -> str:
    return CV_SUMMARY_PROMPT.format(cv_text=cv_text[:max_chars])


def build_match_prompt(cv_text: str, job_description: str, *, summarized: bool, max_chars: int) -> str:
    return MATCH_PROMPT.format(
        cv_label="CV Summary" if summarized else "CV",
        cv_text=cv_text[:max_chars],
        job_description=job_description,
    )


async def summarize_cv_llm(
    cv_text: str,
    provider: ChatProvider,
    settings: Settings,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> str:
    prompt = build_summary_prompt(cv_text, settings.MAX_CV_CHARS)
    return (await chat(prompt, provider, settings, transport=transport)).strip()


async def score_match_llm(
    cv_text: str,
    job_description: str,
    provider: ChatProvider,
    settings: Settings,
    *,
    summarized: bool = False,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> ParsedAnalysis:
    prompt = build_match_prompt(
        cv_text, job_description, summarized=summarized, max_chars=settings.MAX_CV_CHARS)
    raw = await chat(prompt, provider, settings, transport=transport)
    return parse_analysis_response(raw)

from dataclasses import dataclass
from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union


class AnalysisResult(BaseModel):
    match_percentage: int = Field(..., ge=0, le=100)
    matched_keywords: List[str]
    missing_keywords: List[str]
    suggestions: List[str]
    strengths: List[str]
    jd_keywords_count: int = Field(..., ge=0)

    @field_validator("matched_keywords", "missing_keywords", "suggestions", "strengths", mode="before")
    @classmethod
    def _ensure_list(cls, value):
        if isinstance(value, str):
            return [value]
        if isinstance(value, list) and all(isinstance(item, str) for item in value):
            return value
        raise ValueError("must be a string or list of strings")


@dataclass(frozen=True)
class ValidAnalysis:
    result: AnalysisResult


@dataclass(frozen=True)
class InvalidAnalysis:
    reason: str


ParsedAnalysis = Union[ValidAnalysis, InvalidAnalysis]


@dataclass(frozen=True)
class AnalysisRequest:
    cv_text: str
    job_description_text: str
    credential: Optional[str] = None


@dataclass(frozen=True)
class UploadedFile:
    name: str
    size_bytes: int
    extracted_text: str

    @property
    def size_mb(self) -> float:
        return round(self.size_bytes / 1024 / 1024, 2)


class FileStatus(str, Enum):
    EMPTY = "empty"
    PROCESSING = "processing"
    UPLOADED = "uploaded"
    ERROR = "error"


class PipelineStage(str, Enum):
    IDLE = "idle"
    EXTRACTING = "extracting"
    SUMMARIZING = "summarizing"
    SCORING = "scoring"
    DONE = "done"
    FAILED = "failed"


# API payloads

class JobDescriptionBody(BaseModel):
    text: str = ""


class CredentialBody(BaseModel):
    api_key: str = Field(..., min_length=1)


class AnalyzeBody(BaseModel):
    api_key: Optional[str] = None
    summarize_cv: Optional[bool] = None


class Notification(BaseModel):
    level: str
    title: str
    message: Optional[str] = None


class FileState(BaseModel):
    status: FileStatus
    name: Optional[str] = None
    size_bytes: Optional[int] = None
    size_mb: Optional[float] = None
    extracted_chars: int = 0
    error: Optional[str] = None
    hint: str


class JobDescriptionState(BaseModel):
    length: int
    ready: bool
    placeholder: str


class KeywordStats(BaseModel):
    matched_count: int
    jd_keywords_count: int
    missing_count: int


class ResultsView(BaseModel):
    match_percentage: int
    tier: str
    progress: int
    stats: KeywordStats
    matched_keywords: List[str]
    missing_keywords: List[str]
    strengths: List[str]
    suggestions: List[str]
    clipboard_text: str


class SessionStateResponse(BaseModel):
    id: str
    stage: PipelineStage
    file: FileState
    job_description: JobDescriptionState
    has_credential: bool
    can_analyze: bool
    result: Optional[ResultsView] = None
    last_error: Optional[str] = None
    notifications: List[Notification] = []


class CopyResponse(BaseModel):
    text: str

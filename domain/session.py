import logging
import time
import uuid
from collections import deque
from typing import Callable, Deque, Dict, List, Optional

from domain.errors import InvalidTransitionError, SessionBusyError, SessionNotFoundError
from domain.intake import FileIntake, JobDescriptionIntake
from domain.schemas import AnalysisResult, Notification, PipelineStage

logger = logging.getLogger(__name__)

S = PipelineStage

# stages a session may move to from each stage
TRANSITIONS: Dict[PipelineStage, frozenset] = {
    S.IDLE: frozenset({S.EXTRACTING, S.SUMMARIZING, S.SCORING}),
    S.EXTRACTING: frozenset({S.IDLE, S.FAILED}),
    S.SUMMARIZING: frozenset({S.SCORING, S.FAILED}),
    S.SCORING: frozenset({S.DONE, S.FAILED}),
    S.DONE: frozenset({S.IDLE, S.EXTRACTING, S.SUMMARIZING, S.SCORING}),
    S.FAILED: frozenset({S.IDLE, S.EXTRACTING, S.SUMMARIZING, S.SCORING}),
}

RESTING_STAGES = frozenset({S.IDLE, S.DONE, S.FAILED})

MAX_NOTIFICATIONS = 20


class AnalysisSession:
    """State owned by one visitor: CV, job description, credential, result."""

    def __init__(self, session_id: Optional[str] = None):
        self.id = session_id or f"sess_{uuid.uuid4().hex}"
        self.stage = S.IDLE
        self.cv = FileIntake()
        self.job_description = JobDescriptionIntake()
        self.credential: Optional[str] = None
        self.result: Optional[AnalysisResult] = None
        self.last_error: Optional[str] = None
        self.notifications: Deque[Notification] = deque(maxlen=MAX_NOTIFICATIONS)
        self.last_seen = 0.0

    @property
    def busy(self) -> bool:
        return self.stage not in RESTING_STAGES

    def can_analyze(self, server_key_configured: bool = False) -> bool:
        return (
            not self.busy
            and (bool(self.credential) or server_key_configured)
            and self.cv.uploaded is not None
            and bool(self.cv.text)
            and bool(self.job_description.text.strip())
        )

    def transition(self, to: PipelineStage) -> None:
        if to not in TRANSITIONS[self.stage]:
            raise InvalidTransitionError(f"cannot move from {self.stage.value} to {to.value}")
        logger.debug("session %s: %s -> %s", self.id, self.stage.value, to.value)
        self.stage = to

    def ensure_idle(self, action: str) -> None:
        if self.busy:
            raise SessionBusyError(f"Cannot {action} while {self.stage.value} is in progress")

    def notify(self, level: str, title: str, message: Optional[str] = None) -> None:
        self.notifications.append(Notification(level=level, title=title, message=message))
        log = logger.warning if level == "error" else logger.info
        log("session %s [%s] %s%s", self.id, level, title, f": {message}" if message else "")

    def drain_notifications(self) -> List[Notification]:
        out = list(self.notifications)
        self.notifications.clear()
        return out


class SessionStore:
    """In-memory sessions; a session idle for longer than ``ttl_seconds`` is dropped."""

    def __init__(self, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        self._sessions: Dict[str, AnalysisSession] = {}
        self.ttl_seconds = ttl_seconds
        self._clock = clock

    def _purge_expired(self) -> None:
        if not self.ttl_seconds:
            return
        cutoff = self._clock() - self.ttl_seconds
        # a session mid-pipeline is kept until its stage settles
        expired = [sid for sid, s in self._sessions.items() if s.last_seen < cutoff and not s.busy]
        for sid in expired:
            del self._sessions[sid]
        if expired:
            logger.info("expired %d idle session(s)", len(expired))

    def create(self) -> AnalysisSession:
        self._purge_expired()
        session = AnalysisSession()
        session.last_seen = self._clock()
        self._sessions[session.id] = session
        return session

    def get(self, session_id: str) -> AnalysisSession:
        self._purge_expired()
        session = self._sessions.get(session_id)
        if session is None:
            raise SessionNotFoundError("session not found")
        session.last_seen = self._clock()
        return session

    def discard(self, session_id: str) -> None:
        if self._sessions.pop(session_id, None) is None:
            raise SessionNotFoundError("session not found")

    def __len__(self) -> int:
        return len(self._sessions)

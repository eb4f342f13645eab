import pytest

from domain.errors import (
    InvalidTransitionError,
    SessionBusyError,
    SessionNotFoundError,
    UnsupportedFileTypeError,
)
from domain.intake import FileIntake, JobDescriptionIntake
from domain.schemas import FileStatus, PipelineStage, UploadedFile
from domain.session import AnalysisSession, SessionStore


def test_full_pipeline_path_is_allowed():
    s = AnalysisSession()
    for stage in (PipelineStage.EXTRACTING, PipelineStage.IDLE, PipelineStage.SUMMARIZING,
                  PipelineStage.SCORING, PipelineStage.DONE):
        s.transition(stage)
    assert s.stage == PipelineStage.DONE


@pytest.mark.parametrize("start,target", [
    (PipelineStage.IDLE, PipelineStage.DONE),
    (PipelineStage.EXTRACTING, PipelineStage.SCORING),
    (PipelineStage.SCORING, PipelineStage.SUMMARIZING),
])
def test_illegal_transitions_raise(start, target):
    s = AnalysisSession()
    s.stage = start
    with pytest.raises(InvalidTransitionError):
        s.transition(target)


def test_busy_while_mid_pipeline():
    s = AnalysisSession()
    s.transition(PipelineStage.SCORING)
    assert s.busy
    with pytest.raises(SessionBusyError):
        s.ensure_idle("upload a new file")


def test_can_analyze_needs_file_and_trimmed_job_description():
    s = AnalysisSession()
    assert not s.can_analyze(server_key_configured=True)
    s.cv.complete(UploadedFile(name="cv.pdf", size_bytes=10, extracted_text="React"))
    s.job_description.set("   \n ")
    assert not s.can_analyze(server_key_configured=True)
    s.job_description.set("React developer")
    assert s.can_analyze(server_key_configured=True)


def test_can_analyze_needs_some_credential():
    s = AnalysisSession()
    s.cv.complete(UploadedFile(name="cv.pdf", size_bytes=10, extracted_text="React"))
    s.job_description.set("React developer")
    assert not s.can_analyze()
    s.credential = "sk-user"
    assert s.can_analyze()


def test_notifications_are_drained_once():
    s = AnalysisSession()
    s.notify("info", "Processing CV")
    assert [n.title for n in s.drain_notifications()] == ["Processing CV"]
    assert s.drain_notifications() == []


class TestFileIntake:
    def test_check_type_accepts_pdf_only(self):
        FileIntake.check_type("application/pdf")
        FileIntake.check_type("application/pdf; charset=binary")
        with pytest.raises(UnsupportedFileTypeError):
            FileIntake.check_type("application/msword")
        with pytest.raises(UnsupportedFileTypeError):
            FileIntake.check_type(None)

    def test_remove_clears_file_and_text(self):
        intake = FileIntake()
        intake.complete(UploadedFile(name="cv.pdf", size_bytes=2048, extracted_text="React"))
        intake.remove()
        assert intake.status == FileStatus.EMPTY
        assert intake.uploaded is None
        assert intake.text == ""

    def test_fail_keeps_no_file(self):
        intake = FileIntake()
        intake.begin()
        intake.fail("Failed to extract text from PDF")
        assert intake.status == FileStatus.ERROR
        assert intake.uploaded is None
        assert intake.error == "Failed to extract text from PDF"


def test_job_description_intake():
    jd = JobDescriptionIntake()
    assert not jd.ready
    jd.set("React, Node.js, CSS")
    assert jd.length == 19
    assert jd.ready
    jd.clear()
    assert jd.text == ""
    assert jd.length == 0


def test_uploaded_file_size_mb():
    assert UploadedFile(name="a.pdf", size_bytes=1572864, extracted_text="x").size_mb == 1.5


def test_store_lifecycle():
    store = SessionStore()
    s = store.create()
    assert store.get(s.id) is s
    store.discard(s.id)
    with pytest.raises(SessionNotFoundError):
        store.get(s.id)
    with pytest.raises(SessionNotFoundError):
        store.discard(s.id)


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_idle_session_expires():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    stale = store.create()
    clock.now += 30
    fresh = store.create()
    clock.now += 45
    with pytest.raises(SessionNotFoundError):
        store.get(stale.id)
    assert store.get(fresh.id) is fresh
    assert len(store) == 1


def test_reading_a_session_keeps_it_alive():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    s = store.create()
    for _ in range(3):
        clock.now += 50
        assert store.get(s.id) is s


def test_busy_session_is_not_expired():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=60, clock=clock)
    s = store.create()
    s.transition(PipelineStage.SCORING)
    clock.now += 600
    store.create()
    assert len(store) == 2


def test_zero_ttl_never_expires():
    clock = FakeClock()
    store = SessionStore(ttl_seconds=0, clock=clock)
    s = store.create()
    clock.now += 10 ** 6
    assert store.get(s.id) is s

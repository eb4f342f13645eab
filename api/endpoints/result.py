from fastapi import APIRouter, Depends
from fastapi.responses import HTMLResponse

from api.deps import get_store
from domain.errors import ResultNotAvailableError
from domain.presenter import build_results_view, render_results_html
from domain.schemas import AnalysisResult, CopyResponse, ResultsView
from domain.session import AnalysisSession, SessionStore

router = APIRouter()


def _require_result(session: AnalysisSession) -> AnalysisResult:
    if session.result is None:
        raise ResultNotAvailableError("no analysis result yet")
    return session.result


@router.get("/sessions/{session_id}/result", response_model=ResultsView)
async def get_result(session_id: str, store: SessionStore = Depends(get_store)) -> ResultsView:
    return build_results_view(_require_result(store.get(session_id)))


@router.get("/sessions/{session_id}/result.html", response_class=HTMLResponse)
async def get_result_html(session_id: str, store: SessionStore = Depends(get_store)) -> str:
    view = build_results_view(_require_result(store.get(session_id)))
    return render_results_html(view)


@router.post("/sessions/{session_id}/result/copy", response_model=CopyResponse)
async def copy_suggestions(session_id: str, store: SessionStore = Depends(get_store)) -> CopyResponse:
    session = store.get(session_id)
    view = build_results_view(_require_result(session))
    session.notify("success", "Copied to clipboard", "Suggestions have been copied to your clipboard")
    return CopyResponse(text=view.clipboard_text)

from html import escape
from typing import List

from domain.schemas import AnalysisResult, KeywordStats, ResultsView

CLIPBOARD_HEADER = "CV Improvement Suggestions:"
BULLET = "• "


def match_tier(percentage: int) -> str:
    if percentage >= 80:
        return "good"
    if percentage >= 60:
        return "fair"
    return "poor"


def suggestions_clipboard_text(suggestions: List[str]) -> str:
    return f"{CLIPBOARD_HEADER}\n{BULLET}" + f"\n{BULLET}".join(suggestions)


def build_results_view(result: AnalysisResult) -> ResultsView:
    return ResultsView(
        match_percentage=result.match_percentage,
        tier=match_tier(result.match_percentage),
        progress=result.match_percentage,
        stats=KeywordStats(
            matched_count=len(result.matched_keywords),
            jd_keywords_count=result.jd_keywords_count,
            missing_count=len(result.missing_keywords),
        ),
        matched_keywords=list(result.matched_keywords),
        missing_keywords=list(result.missing_keywords),
        strengths=list(result.strengths),
        suggestions=list(result.suggestions),
        clipboard_text=suggestions_clipboard_text(result.suggestions),
    )


def _tags(items: List[str], kind: str) -> str:
    return "".join(f'<span class="tag tag-{kind}">{escape(k)}</span>' for k in items)


def _items(items: List[str], kind: str) -> str:
    return "".join(f'<li class="{kind}">{escape(s)}</li>' for s in items)


def render_results_html(view: ResultsView) -> str:
    """Render the results view as an HTML fragment for the browser page."""
    return f"""
    <section class="results">
        <div class="card score">
            <h2>Match Analysis</h2>
            <div class="match match-{view.tier}">{view.match_percentage}%</div>
            <p>CV-JD Match Score</p>
            <progress max="100" value="{view.progress}"></progress>
            <div class="stats">
                <div><strong>{view.stats.matched_count}</strong> Matched Keywords</div>
                <div><strong>{view.stats.jd_keywords_count}</strong> Total JD Keywords</div>
                <div><strong>{view.stats.missing_count}</strong> Missing Keywords</div>
            </div>
        </div>
        <div class="card matched">
            <h3>Matched Keywords</h3>
            <div class="tags">{_tags(view.matched_keywords, "matched")}</div>
        </div>
        <div class="card missing">
            <h3>Missing Keywords</h3>
            <div class="tags">{_tags(view.missing_keywords, "missing")}</div>
        </div>
        <div class="card strengths">
            <h3>Your Strengths</h3>
            <ol>{_items(view.strengths, "strength")}</ol>
        </div>
        <div class="card suggestions">
            <h3>Improvement Suggestions</h3>
            <ol>{_items(view.suggestions, "suggestion")}</ol>
            <textarea class="clipboard" readonly hidden>{escape(view.clipboard_text)}</textarea>
        </div>
    </section>
    """

from __future__ import annotations

from hr_assistant.schemas.analysis import AnalysisTab
from hr_assistant.schemas.views import ContentView, EmptyView, ErrorView, LoadingView, RenderableView

from .state import SessionState


def select(state: SessionState, active_tab: AnalysisTab | None = None) -> RenderableView:
    """Pick the one view to render. Precedence: loading, error, empty, content."""
    tab = active_tab or state.active_tab
    if state.analyzing:
        return LoadingView()
    if state.error:
        return ErrorView(message=state.error)
    if not state.results.populated:
        return EmptyView()

    result = state.results.get(tab.kind)
    if result is None:
        return EmptyView()
    return ContentView(tab=tab, tab_label=tab.label, kind=tab.kind, result=result)

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from .analysis import AnalysisTab
from .views import RenderableView

SourceKindValue = Literal["pasted", "uploaded"]


class PasteTextRequest(BaseModel):
    text: str = Field(default="", max_length=100000)


class SelectTabRequest(BaseModel):
    tab: AnalysisTab


class SlotView(BaseModel):
    text: str
    file_name: str
    mime_type: str
    source_kind: SourceKindValue | None = None
    parsing: bool
    error: str | None = None


class SessionView(BaseModel):
    session_id: str
    resume: SlotView
    job_description: SlotView
    analyzing: bool
    error: str | None = None
    active_tab: AnalysisTab
    active_tab_label: str
    can_analyze: bool
    view: RenderableView

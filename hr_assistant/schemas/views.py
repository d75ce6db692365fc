from __future__ import annotations

from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from .analysis import (
    AnalysisKind,
    AnalysisTab,
    CoverLetterResult,
    JobDescriptionAnalysis,
    MatchAnalysis,
    ResumeAnalysis,
)


class LoadingView(BaseModel):
    view: Literal["loading"] = "loading"
    message: str = "AI is analyzing... this may take a moment."


class ErrorView(BaseModel):
    view: Literal["error"] = "error"
    title: str = "Analysis Failed"
    message: str


class EmptyView(BaseModel):
    view: Literal["empty"] = "empty"
    title: str = "Ready for Analysis"
    message: str = 'Upload or paste a resume and job description, then click "Analyze" to see the results.'


class ContentView(BaseModel):
    view: Literal["content"] = "content"
    tab: AnalysisTab
    tab_label: str
    kind: AnalysisKind
    result: Union[MatchAnalysis, ResumeAnalysis, JobDescriptionAnalysis, CoverLetterResult]


RenderableView = Annotated[
    Union[LoadingView, ErrorView, EmptyView, ContentView],
    Field(discriminator="view"),
]

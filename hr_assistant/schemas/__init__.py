from .analysis import (
    ATS_COMPONENTS,
    CORE_ANALYSIS_KINDS,
    DEFAULT_TAB,
    RESULT_MODELS,
    AnalysisKind,
    AnalysisResult,
    AnalysisTab,
    AtsScoreComponent,
    CoverLetterResult,
    JobDescriptionAnalysis,
    MatchAnalysis,
    ResultSet,
    ResumeAnalysis,
)
from .views import ContentView, EmptyView, ErrorView, LoadingView, RenderableView

__all__ = [
    "ATS_COMPONENTS",
    "CORE_ANALYSIS_KINDS",
    "DEFAULT_TAB",
    "RESULT_MODELS",
    "AnalysisKind",
    "AnalysisResult",
    "AnalysisTab",
    "AtsScoreComponent",
    "CoverLetterResult",
    "JobDescriptionAnalysis",
    "MatchAnalysis",
    "ResultSet",
    "ResumeAnalysis",
    "ContentView",
    "EmptyView",
    "ErrorView",
    "LoadingView",
    "RenderableView",
]

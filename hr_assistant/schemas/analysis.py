from __future__ import annotations

from enum import Enum
from typing import Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class AnalysisKind(str, Enum):
    RESUME_CRITIQUE = "resume"
    JD_CRITIQUE = "jd"
    FIT_SCORE = "fit"
    COVER_LETTER = "cover_letter"


CORE_ANALYSIS_KINDS: tuple[AnalysisKind, ...] = (
    AnalysisKind.RESUME_CRITIQUE,
    AnalysisKind.JD_CRITIQUE,
    AnalysisKind.FIT_SCORE,
)


class AnalysisTab(str, Enum):
    MATCH_ANALYSIS = "match"
    ATS_SCORE = "ats"
    RESUME_ANALYSIS = "resume"
    JD_ANALYSIS = "jd"
    COVER_LETTER = "cover_letter"

    @property
    def label(self) -> str:
        return _TAB_LABELS[self]

    @property
    def kind(self) -> AnalysisKind:
        return _TAB_KINDS[self]


_TAB_LABELS = {
    AnalysisTab.MATCH_ANALYSIS: "Resume vs JD Match",
    AnalysisTab.ATS_SCORE: "ATS Score",
    AnalysisTab.RESUME_ANALYSIS: "Resume Analysis",
    AnalysisTab.JD_ANALYSIS: "JD Analysis",
    AnalysisTab.COVER_LETTER: "Cover Letter",
}

_TAB_KINDS = {
    AnalysisTab.MATCH_ANALYSIS: AnalysisKind.FIT_SCORE,
    AnalysisTab.ATS_SCORE: AnalysisKind.FIT_SCORE,
    AnalysisTab.RESUME_ANALYSIS: AnalysisKind.RESUME_CRITIQUE,
    AnalysisTab.JD_ANALYSIS: AnalysisKind.JD_CRITIQUE,
    AnalysisTab.COVER_LETTER: AnalysisKind.COVER_LETTER,
}

DEFAULT_TAB = AnalysisTab.MATCH_ANALYSIS

ATS_COMPONENTS = ("Keyword Match", "Resume Formatting", "Language & Tone", "Job Role Relevance")


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ResumeAnalysis(_WireModel):
    summary: str
    strengths: list[str]
    weaknesses: list[str]
    improvements: list[str]


class JobDescriptionAnalysis(_WireModel):
    summary: str
    key_skills: list[str]
    core_responsibilities: list[str]
    ideal_candidate_profile: str


class AtsScoreComponent(_WireModel):
    component: str
    weight: str
    score: float = Field(ge=0)
    reasoning: str


class MatchAnalysis(_WireModel):
    ats_score: float = Field(ge=0, le=100)
    ats_feedback: str
    ats_score_breakdown: list[AtsScoreComponent]
    fit_score: float = Field(ge=0, le=100)
    matched_skills: list[str]
    missing_skills: list[str]
    fit_summary: str

    @field_validator("ats_score_breakdown")
    @classmethod
    def _validate_components(cls, value: list[AtsScoreComponent]) -> list[AtsScoreComponent]:
        names = sorted(item.component.strip() for item in value)
        if names != sorted(ATS_COMPONENTS):
            raise ValueError(f"atsScoreBreakdown must contain exactly: {', '.join(ATS_COMPONENTS)}")
        return value


class CoverLetterResult(_WireModel):
    cover_letter: str
    tone: str


AnalysisResult = Union[ResumeAnalysis, JobDescriptionAnalysis, MatchAnalysis, CoverLetterResult]

RESULT_MODELS: dict[AnalysisKind, type[_WireModel]] = {
    AnalysisKind.RESUME_CRITIQUE: ResumeAnalysis,
    AnalysisKind.JD_CRITIQUE: JobDescriptionAnalysis,
    AnalysisKind.FIT_SCORE: MatchAnalysis,
    AnalysisKind.COVER_LETTER: CoverLetterResult,
}


class ResultSet(_WireModel):
    """Results of one analysis run; replaced wholesale by the next run."""

    resume_analysis: ResumeAnalysis | None = None
    jd_analysis: JobDescriptionAnalysis | None = None
    match_analysis: MatchAnalysis | None = None
    cover_letter: CoverLetterResult | None = None

    @classmethod
    def from_results(cls, results: dict[AnalysisKind, AnalysisResult]) -> "ResultSet":
        missing = [kind.value for kind in CORE_ANALYSIS_KINDS if results.get(kind) is None]
        if missing:
            raise ValueError(f"ResultSet requires every core analysis, missing: {', '.join(missing)}")
        return cls(
            resume_analysis=results[AnalysisKind.RESUME_CRITIQUE],
            jd_analysis=results[AnalysisKind.JD_CRITIQUE],
            match_analysis=results[AnalysisKind.FIT_SCORE],
            cover_letter=results.get(AnalysisKind.COVER_LETTER),
        )

    @property
    def populated(self) -> bool:
        return self.resume_analysis is not None

    def get(self, kind: AnalysisKind) -> AnalysisResult | None:
        if kind is AnalysisKind.RESUME_CRITIQUE:
            return self.resume_analysis
        if kind is AnalysisKind.JD_CRITIQUE:
            return self.jd_analysis
        if kind is AnalysisKind.FIT_SCORE:
            return self.match_analysis
        return self.cover_letter

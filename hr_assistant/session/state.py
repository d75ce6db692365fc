"""Session state and the single transition function that mutates it.

State objects are immutable; every change goes through :func:`reduce`, which
keeps the all-or-nothing result invariant and the stale-completion checks in
one place.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Union

from hr_assistant.schemas.analysis import DEFAULT_TAB, AnalysisTab, ResultSet


class Slot(str, Enum):
    RESUME = "resume"
    JOB_DESCRIPTION = "job_description"


class SourceKind(str, Enum):
    PASTED = "pasted"
    UPLOADED = "uploaded"


@dataclass(frozen=True)
class DocumentSlot:
    text: str = ""
    file_name: str = ""
    mime_type: str = ""
    source_kind: SourceKind | None = None
    parsing: bool = False
    error: str | None = None
    # Bumped on every start/paste/clear; completions from older generations are dropped.
    generation: int = 0

    @property
    def provided(self) -> bool:
        return bool(self.text.strip())


@dataclass(frozen=True)
class SessionState:
    resume: DocumentSlot = field(default_factory=DocumentSlot)
    job_description: DocumentSlot = field(default_factory=DocumentSlot)
    results: ResultSet = field(default_factory=ResultSet)
    active_tab: AnalysisTab = DEFAULT_TAB
    analyzing: bool = False
    error: str | None = None

    def slot(self, slot: Slot) -> DocumentSlot:
        return self.resume if slot is Slot.RESUME else self.job_description

    def with_slot(self, slot: Slot, document: DocumentSlot) -> "SessionState":
        if slot is Slot.RESUME:
            return replace(self, resume=document)
        return replace(self, job_description=document)

    @property
    def parsing_resume(self) -> bool:
        return self.resume.parsing

    @property
    def parsing_jd(self) -> bool:
        return self.job_description.parsing

    @property
    def can_analyze(self) -> bool:
        return self.resume.provided and self.job_description.provided and not self.analyzing


@dataclass(frozen=True)
class TextPasted:
    slot: Slot
    text: str


@dataclass(frozen=True)
class ExtractionStarted:
    slot: Slot
    file_name: str
    mime_type: str


@dataclass(frozen=True)
class ExtractionSucceeded:
    slot: Slot
    generation: int
    text: str


@dataclass(frozen=True)
class ExtractionFailed:
    slot: Slot
    generation: int
    message: str


@dataclass(frozen=True)
class SlotCleared:
    slot: Slot


@dataclass(frozen=True)
class AnalysisStarted:
    pass


@dataclass(frozen=True)
class AnalysisSucceeded:
    results: ResultSet


@dataclass(frozen=True)
class AnalysisFailed:
    message: str


@dataclass(frozen=True)
class TabSelected:
    tab: AnalysisTab


SessionEvent = Union[
    TextPasted,
    ExtractionStarted,
    ExtractionSucceeded,
    ExtractionFailed,
    SlotCleared,
    AnalysisStarted,
    AnalysisSucceeded,
    AnalysisFailed,
    TabSelected,
]


def is_stale(state: SessionState, event: ExtractionSucceeded | ExtractionFailed) -> bool:
    current = state.slot(event.slot)
    return not current.parsing or current.generation != event.generation


def reduce(state: SessionState, event: SessionEvent) -> SessionState:
    if isinstance(event, TextPasted):
        current = state.slot(event.slot)
        return state.with_slot(
            event.slot,
            DocumentSlot(
                text=event.text,
                source_kind=SourceKind.PASTED if event.text else None,
                generation=current.generation + 1,
            ),
        )

    if isinstance(event, ExtractionStarted):
        current = state.slot(event.slot)
        return state.with_slot(
            event.slot,
            DocumentSlot(
                file_name=event.file_name,
                mime_type=event.mime_type,
                source_kind=SourceKind.UPLOADED,
                parsing=True,
                generation=current.generation + 1,
            ),
        )

    if isinstance(event, ExtractionSucceeded):
        if is_stale(state, event):
            return state
        current = state.slot(event.slot)
        return state.with_slot(event.slot, replace(current, text=event.text, parsing=False, error=None))

    if isinstance(event, ExtractionFailed):
        if is_stale(state, event):
            return state
        current = state.slot(event.slot)
        return state.with_slot(
            event.slot,
            DocumentSlot(
                error=f"Failed to read file: {event.message}",
                generation=current.generation,
            ),
        )

    if isinstance(event, SlotCleared):
        current = state.slot(event.slot)
        return state.with_slot(event.slot, DocumentSlot(generation=current.generation + 1))

    if isinstance(event, AnalysisStarted):
        if state.analyzing:
            return state
        return replace(state, analyzing=True, error=None, results=ResultSet())

    if isinstance(event, AnalysisSucceeded):
        if not state.analyzing:
            return state
        return replace(state, analyzing=False, error=None, results=event.results, active_tab=DEFAULT_TAB)

    if isinstance(event, AnalysisFailed):
        if not state.analyzing:
            return state
        return replace(state, analyzing=False, error=event.message, results=ResultSet())

    if isinstance(event, TabSelected):
        return replace(state, active_tab=event.tab)

    raise TypeError(f"Unknown session event: {type(event).__name__}")

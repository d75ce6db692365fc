from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class DocumentFormat(str, Enum):
    PDF = "pdf"
    DOCX = "docx"
    PLAIN_TEXT = "txt"
    UNSUPPORTED = "unsupported"


class ExtractionFailure(str, Enum):
    UNSUPPORTED_FORMAT = "unsupported_format"
    CORRUPT_FILE = "corrupt_file"
    EMPTY_CONTENT = "empty_content"


@dataclass(frozen=True)
class ExtractionResult:
    """Either extracted text or a typed failure, never both."""

    text: str | None = None
    failure: ExtractionFailure | None = None
    message: str | None = None

    def __post_init__(self) -> None:
        if (self.text is None) == (self.failure is None):
            raise ValueError("ExtractionResult must carry exactly one of text or failure")

    @classmethod
    def success(cls, text: str) -> "ExtractionResult":
        return cls(text=text)

    @classmethod
    def failed(cls, failure: ExtractionFailure, message: str) -> "ExtractionResult":
        return cls(failure=failure, message=message)

    @property
    def ok(self) -> bool:
        return self.failure is None

from .extract import extract, resolve_format
from .models import DocumentFormat, ExtractionFailure, ExtractionResult

__all__ = [
    "DocumentFormat",
    "ExtractionFailure",
    "ExtractionResult",
    "extract",
    "resolve_format",
]

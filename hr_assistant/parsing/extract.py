from __future__ import annotations

import logging
from io import BytesIO
from pathlib import PurePath
from typing import Callable

from docx import Document
from docx.table import Table
from pypdf import PdfReader

from .models import DocumentFormat, ExtractionFailure, ExtractionResult

logger = logging.getLogger(__name__)

PDF_MIME_TYPE = "application/pdf"
DOCX_MIME_TYPE = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
TEXT_MIME_TYPE = "text/plain"

# Checked in order; the first format whose MIME type or extension matches wins.
_FORMAT_RULES: tuple[tuple[DocumentFormat, str, str], ...] = (
    (DocumentFormat.PDF, PDF_MIME_TYPE, ".pdf"),
    (DocumentFormat.DOCX, DOCX_MIME_TYPE, ".docx"),
    (DocumentFormat.PLAIN_TEXT, TEXT_MIME_TYPE, ".txt"),
)

UNSUPPORTED_MESSAGE = "Unsupported file type. Please upload a PDF, DOCX, or TXT file."


def _normalize_mime(declared_mime_type: str | None) -> str:
    return (declared_mime_type or "").split(";", 1)[0].strip().lower()


def _extension(file_name: str | None) -> str:
    return PurePath((file_name or "").strip()).suffix.lower()


def resolve_format(declared_mime_type: str | None, file_name: str | None) -> DocumentFormat:
    mime = _normalize_mime(declared_mime_type)
    extension = _extension(file_name)
    for document_format, format_mime, format_extension in _FORMAT_RULES:
        if mime == format_mime or extension == format_extension:
            return document_format
    return DocumentFormat.UNSUPPORTED


def _extract_pdf(content: bytes) -> str:
    reader = PdfReader(BytesIO(content))
    page_texts: list[str] = []
    for page in reader.pages:
        fragments: list[str] = []

        def collect(text: str, *_args) -> None:
            fragment = text.replace("\r", " ").replace("\n", " ")
            if fragment.strip():
                fragments.append(fragment)

        page.extract_text(visitor_text=collect)
        page_texts.append(" ".join(fragments))
    return "\n".join(page_texts)


def _extract_docx(content: bytes) -> str:
    document = Document(BytesIO(content))
    blocks: list[str] = []
    for item in document.iter_inner_content():
        if isinstance(item, Table):
            for row in item.rows:
                blocks.append("\t".join(cell.text for cell in row.cells))
        else:
            blocks.append(item.text)
    return "\n\n".join(blocks)


def _extract_plain_text(content: bytes) -> str:
    return content.decode("utf-8", errors="replace")


_EXTRACTORS: dict[DocumentFormat, Callable[[bytes], str]] = {
    DocumentFormat.PDF: _extract_pdf,
    DocumentFormat.DOCX: _extract_docx,
    DocumentFormat.PLAIN_TEXT: _extract_plain_text,
}

_CORRUPT_MESSAGES = {
    DocumentFormat.PDF: "Unable to extract text from this PDF file.",
    DocumentFormat.DOCX: "Unable to extract text from this Word document.",
    DocumentFormat.PLAIN_TEXT: "Unable to read this text file.",
}


def extract(content: bytes, declared_mime_type: str | None, file_name: str | None) -> ExtractionResult:
    """Convert an uploaded blob into plain text.

    Never raises: unsupported formats and unreadable containers come back as
    typed failures. Extracted text is returned untouched, so an empty
    document is ``ExtractionResult.success("")``.
    """
    document_format = resolve_format(declared_mime_type, file_name)
    extractor = _EXTRACTORS.get(document_format)
    if extractor is None:
        logger.info("extract_unsupported mime=%s file=%s", _normalize_mime(declared_mime_type), file_name)
        return ExtractionResult.failed(ExtractionFailure.UNSUPPORTED_FORMAT, UNSUPPORTED_MESSAGE)

    try:
        text = extractor(content or b"")
    except Exception as exc:  # noqa: BLE001 - every parser failure maps to CorruptFile
        logger.warning("extract_failed format=%s file=%s: %s", document_format.value, file_name, exc)
        return ExtractionResult.failed(ExtractionFailure.CORRUPT_FILE, _CORRUPT_MESSAGES[document_format])

    logger.debug("extract_ok format=%s file=%s chars=%s", document_format.value, file_name, len(text))
    return ExtractionResult.success(text)

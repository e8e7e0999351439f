"""Extract raw text from uploaded resume documents (PDF, DOCX) in memory."""
from __future__ import annotations

import logging
import re
import unicodedata
from io import BytesIO
from pathlib import PurePath

import pdfplumber
from docx import Document

logger = logging.getLogger(__name__)

SUPPORTED_EXTENSIONS = ("pdf", "docx")


class DocumentError(ValueError):
    """Base class for document extraction failures."""


class UnsupportedDocumentError(DocumentError):
    """Raised for file types other than PDF and DOCX."""


class DocumentParseError(DocumentError):
    """Raised when a supported document is corrupt or contains no text."""


def document_kind(filename: str) -> str:
    """Return the lower-cased extension of ``filename`` or raise for unsupported types."""

    suffix = PurePath((filename or "").strip()).suffix.lower().lstrip(".")
    if suffix not in SUPPORTED_EXTENSIONS:
        raise UnsupportedDocumentError("Unsupported file type. Only PDF and DOCX are supported.")
    return suffix


def clean_text(text: str) -> str:
    """Normalize unicode and collapse runs of blank space."""

    text = unicodedata.normalize("NFC", text)
    text = re.sub(r"[ \t]+", " ", text)
    text = re.sub(r"\n\s*\n\s*\n+", "\n\n", text)
    return text.strip()


def _extract_pdf(data: bytes) -> str:
    with pdfplumber.open(BytesIO(data)) as pdf:
        pages = [page.extract_text() or "" for page in pdf.pages]
    return "\n\n".join(page for page in pages if page.strip())


def _extract_docx(data: bytes) -> str:
    document = Document(BytesIO(data))
    return "\n".join(paragraph.text for paragraph in document.paragraphs if paragraph.text.strip())


EXTRACTORS = {
    "pdf": _extract_pdf,
    "docx": _extract_docx,
}


def extract_text(data: bytes, filename: str) -> str:
    """Return cleaned text for a PDF or DOCX upload.

    Raises UnsupportedDocumentError for other extensions and DocumentParseError
    when the bytes cannot be read or yield no text.
    """

    kind = document_kind(filename)
    try:
        raw = EXTRACTORS[kind](data)
    except Exception as exc:
        logger.warning("Failed to parse %s document %r: %s", kind, filename, exc)
        raise DocumentParseError(f"Could not read {kind.upper()} document") from exc
    text = clean_text(raw)
    if not text:
        raise DocumentParseError(f"No text found in {kind.upper()} document")
    logger.info("Extracted %d characters from %s document %r", len(text), kind, filename)
    return text

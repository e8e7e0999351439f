"""Document text extraction for PDF and DOCX uploads."""

from io import BytesIO

import pytest
from docx import Document

from services.documents import (
    DocumentParseError,
    UnsupportedDocumentError,
    clean_text,
    document_kind,
    extract_text,
)


def make_docx(*paragraphs: str) -> bytes:
    document = Document()
    for text in paragraphs:
        document.add_paragraph(text)
    buffer = BytesIO()
    document.save(buffer)
    return buffer.getvalue()


@pytest.mark.parametrize(("filename", "kind"), [("cv.pdf", "pdf"), ("My CV.DOCX", "docx"), (" resume.Pdf ", "pdf")])
def test_document_kind_accepts_pdf_and_docx(filename, kind):
    assert document_kind(filename) == kind


@pytest.mark.parametrize("filename", ["cv.doc", "cv.txt", "pdf", "", "archive.pdf.zip"])
def test_document_kind_rejects_other_types(filename):
    with pytest.raises(UnsupportedDocumentError):
        document_kind(filename)


def test_extract_text_reads_docx_paragraphs():
    data = make_docx("Jane Doe", "", "Software Engineer   at ABC Corp", "January 2020 – December 2022")

    text = extract_text(data, "resume.docx")

    assert text == "Jane Doe\nSoftware Engineer at ABC Corp\nJanuary 2020 – December 2022"


def test_extract_text_rejects_unsupported_before_parsing():
    with pytest.raises(UnsupportedDocumentError):
        extract_text(b"plain text", "resume.txt")


@pytest.mark.parametrize("filename", ["resume.pdf", "resume.docx"])
def test_corrupt_documents_raise_parse_error(filename):
    with pytest.raises(DocumentParseError):
        extract_text(b"definitely not a real document", filename)


def test_docx_without_text_raises_parse_error():
    with pytest.raises(DocumentParseError):
        extract_text(make_docx("   "), "blank.docx")


def test_clean_text_collapses_whitespace():
    assert clean_text("  a\t\tb \n\n\n\n c  ") == "a b \n\n c"

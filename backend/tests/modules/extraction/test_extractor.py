"""Tests for media-type dispatch in the text extractor."""

from unittest.mock import patch

import pytest

from creator_kb.modules.extraction import DocumentKind, ExtractionStatus, detect_kind, extract_text


@pytest.mark.parametrize(
    "media_type, filename, expected",
    [
        ("application/pdf", "upload", DocumentKind.PDF),
        ("", "Guide.PDF", DocumentKind.PDF),
        ("text/plain", "notes", DocumentKind.TEXT),
        ("text/markdown", "notes.md", DocumentKind.TEXT),
        ("application/octet-stream", "notes.txt", DocumentKind.TEXT),
        ("image/png", "cover.png", None),
        ("", "", None),
    ],
)
def test_detect_kind(media_type, filename, expected):
    assert detect_kind(media_type, filename) == expected


def test_extract_plain_text():
    result = extract_text("Hello creators".encode("utf-8"), "text/plain", "hello.txt")

    assert result.ok
    assert result.kind == DocumentKind.TEXT
    assert result.text == "Hello creators"


def test_extract_text_strips_byte_order_mark():
    result = extract_text(b"\xef\xbb\xbfHello", "text/plain", "bom.txt")

    assert result.text == "Hello"


def test_extract_text_replaces_invalid_utf8():
    result = extract_text(b"caf\xe9 menu", "text/plain", "latin.txt")

    assert result.ok
    assert result.text == "caf\ufffd menu"


def test_unsupported_media_type():
    result = extract_text(b"\x89PNG", "image/png", "cover.png")

    assert result.status == ExtractionStatus.UNSUPPORTED_MEDIA_TYPE
    assert result.text == ""
    assert result.kind is None


def test_whitespace_only_text_is_empty():
    result = extract_text(b" \n\t ", "text/plain", "blank.txt")

    assert result.status == ExtractionStatus.EMPTY
    assert result.kind == DocumentKind.TEXT


def test_pdf_extraction_failure_is_reported_as_empty():
    with patch("creator_kb.modules.extraction.extractor.extract_pdf_text", side_effect=ValueError("broken")):
        result = extract_text(b"%PDF-1.4", "application/pdf", "broken.pdf")

    assert result.status == ExtractionStatus.EMPTY
    assert result.kind == DocumentKind.PDF


def test_pdf_dispatch():
    pdf = b"%PDF-1.4\n1 0 obj\n<< >>\nstream\nBT (Stay curious) Tj ET\nendstream\nendobj\n"

    result = extract_text(pdf, "application/pdf", "tips.pdf")

    assert result.ok
    assert result.kind == DocumentKind.PDF
    assert result.text == "Stay curious"

"""Media-type dispatch for text extraction."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ...infrastructure.logging import get_logger
from .pdf import extract_pdf_text

logger = get_logger(__name__)

PDF_MEDIA_TYPE = "application/pdf"
TEXT_SUFFIXES = (".txt", ".md")


class ExtractionStatus(str, Enum):
    """Outcome of an extraction attempt."""

    OK = "ok"
    UNSUPPORTED_MEDIA_TYPE = "unsupported_media_type"
    EMPTY = "empty"


class DocumentKind(str, Enum):
    """Handler chosen for an upload."""

    PDF = "pdf"
    TEXT = "text"


@dataclass(frozen=True)
class ExtractionResult:
    """Typed extraction outcome.

    Unreadable uploads are an expected case, so they are reported here rather
    than raised; the ingestion service turns non-OK statuses into errors.
    """

    status: ExtractionStatus
    text: str = ""
    kind: Optional[DocumentKind] = None

    @property
    def ok(self) -> bool:
        return self.status == ExtractionStatus.OK


def detect_kind(media_type: str, filename: str) -> Optional[DocumentKind]:
    """Pick a handler from the declared media type or the filename suffix."""
    media_type = (media_type or "").lower()
    name = (filename or "").lower()

    if media_type == PDF_MEDIA_TYPE or name.endswith(".pdf"):
        return DocumentKind.PDF
    if media_type.startswith("text/") or name.endswith(TEXT_SUFFIXES):
        return DocumentKind.TEXT
    return None


def extract_text(data: bytes, media_type: str, filename: str) -> ExtractionResult:
    """Extract plain text from an uploaded document.

    Args:
        data: Raw upload bytes
        media_type: Declared MIME type (may be empty)
        filename: Original filename, used for suffix detection

    Returns:
        ExtractionResult with status OK and the text, EMPTY when nothing
        readable came out, or UNSUPPORTED_MEDIA_TYPE.
    """
    kind = detect_kind(media_type, filename)

    if kind is None:
        return ExtractionResult(status=ExtractionStatus.UNSUPPORTED_MEDIA_TYPE)

    if kind == DocumentKind.PDF:
        try:
            text = extract_pdf_text(data)
        except Exception:
            logger.warning("PDF extraction failed", exc_info=True, extra={"filename": filename})
            text = ""
    else:
        text = data.decode("utf-8-sig", errors="replace")

    if not text.strip():
        return ExtractionResult(status=ExtractionStatus.EMPTY, kind=kind)

    return ExtractionResult(status=ExtractionStatus.OK, text=text, kind=kind)

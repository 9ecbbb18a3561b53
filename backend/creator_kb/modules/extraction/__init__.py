"""Text extraction from uploaded PDF and plain-text documents."""

from .extractor import DocumentKind, ExtractionResult, ExtractionStatus, detect_kind, extract_text
from .pdf import extract_pdf_text

__all__ = [
    "DocumentKind",
    "ExtractionResult",
    "ExtractionStatus",
    "detect_kind",
    "extract_pdf_text",
    "extract_text",
]

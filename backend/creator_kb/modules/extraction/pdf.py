"""Minimal PDF text extraction without a PDF library.

The extractor scans the byte buffer for ``stream ... endstream`` regions,
inflates each one (raw deflate, zlib deflate, or as-is) and pulls the string
operands out of the decoded content stream: literal strings ``(...)`` and hex
strings ``<...>``. It does not interpret the content stream, so layout is lost
and text drawn through custom font encodings (glyph ids mapped by a ToUnicode
CMap) comes out as noise or not at all. That is a known limitation of the
approach, not something this module tries to repair.
"""

import re
import zlib
from typing import Callable, List, Optional

from ...infrastructure.logging import get_logger

logger = get_logger(__name__)

_STREAM_RE = re.compile(r"stream(.*?)endstream", re.DOTALL)
_LEADING_EOL_RE = re.compile(r"^\s*?\r?\n", re.ASCII)
_TRAILING_EOL_RE = re.compile(r"\r?\n\s*$", re.ASCII)

_LITERAL_RE = re.compile(r"\(((?:\\.|[^\\()])*)\)", re.DOTALL)
_HEX_RE = re.compile(r"<([0-9A-Fa-f\s]+)>", re.ASCII)
_ESCAPE_RE = re.compile(r"\\([nrtbf()\\]|[0-7]{1,3}|.)", re.DOTALL)
_WHITESPACE_RE = re.compile(r"\s+", re.ASCII)
_NON_PRINTABLE_RE = re.compile(r"[^\x09\x0A\x0D\x20-\x7E]+")

_MIN_HEX_DIGITS = 8

_NAMED_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "b": "\b",
    "f": "\f",
    "(": "(",
    ")": ")",
    "\\": "\\",
}


def extract_pdf_text(data: bytes) -> str:
    """Return best-effort plain text from raw PDF bytes.

    Segments from each content stream are trimmed, empty ones dropped, and the
    rest joined with newlines. When no stream yields anything the whole buffer
    is scanned for string operands instead.
    """
    # latin-1 maps every byte to exactly one character, so offsets stay byte offsets.
    raw = data.decode("latin-1")
    segments: List[str] = []

    for stream_count, match in enumerate(_STREAM_RE.finditer(raw), start=1):
        body = _LEADING_EOL_RE.sub("", match.group(1), count=1)
        body = _TRAILING_EOL_RE.sub("", body, count=1)

        decoded = decode_pdf_stream(body.encode("latin-1"))
        if decoded is None:
            logger.debug(f"Skipping undecodable PDF stream #{stream_count}")
            continue

        extracted = extract_pdf_strings(decoded)
        if extracted:
            segments.append(extracted)

    if not segments:
        logger.debug("No content streams yielded text; scanning the raw buffer")
        segments.append(extract_pdf_strings(raw))

    return "\n".join(segment.strip() for segment in segments if segment.strip())


def _inflate_raw(data: bytes) -> bytes:
    return _inflate(data, -zlib.MAX_WBITS)


def _inflate_zlib(data: bytes) -> bytes:
    return _inflate(data, zlib.MAX_WBITS)


def _inflate(data: bytes, wbits: int) -> bytes:
    decompressor = zlib.decompressobj(wbits)
    output = decompressor.decompress(data) + decompressor.flush()
    if not decompressor.eof:
        raise zlib.error("incomplete deflate stream")
    return output


def decode_pdf_stream(data: bytes) -> Optional[str]:
    """Decode one stream body, or return ``None`` if every attempt fails.

    Attempts run in order: raw deflate, zlib-wrapped deflate, uncompressed.
    The first one that succeeds and produces non-blank UTF-8 text wins.
    """
    attempts: List[Callable[[bytes], bytes]] = [_inflate_raw, _inflate_zlib, bytes]

    for attempt in attempts:
        try:
            output = attempt(data)
        except zlib.error:
            continue

        text = output.decode("utf-8", errors="replace")
        if text.strip():
            return text

    return None


def extract_pdf_strings(content: str) -> str:
    """Collect literal and hex string operands from decoded stream content.

    Falls back to the content itself, with non-printable runs replaced by a
    space, when no string operand yields text.
    """
    pieces: List[str] = []

    for match in _LITERAL_RE.finditer(content):
        value = unescape_pdf_string(match.group(1))
        if value.strip():
            pieces.append(value)

    for match in _HEX_RE.finditer(content):
        value = decode_hex_string(match.group(1))
        if value:
            pieces.append(value)

    if not pieces:
        pieces.append(_NON_PRINTABLE_RE.sub(" ", content))

    return "\n".join(pieces)


def decode_hex_string(token: str) -> str:
    """Decode the inside of a ``<...>`` hex string.

    Fragments shorter than eight hex digits, or with an odd digit count, are
    treated as noise and yield an empty string.
    """
    digits = _WHITESPACE_RE.sub("", token)
    if len(digits) % 2 or len(digits) < _MIN_HEX_DIGITS:
        return ""

    try:
        raw = bytes.fromhex(digits)
    except ValueError:
        return ""

    return raw.decode("utf-8", errors="replace").strip()


def unescape_pdf_string(value: str) -> str:
    """Resolve backslash escapes inside a PDF literal string.

    ``\\ddd`` octal escapes above 255 are dropped; unknown escapes keep the
    character after the backslash.
    """

    def replace(match: re.Match) -> str:
        token = match.group(1)
        if token in _NAMED_ESCAPES:
            return _NAMED_ESCAPES[token]
        if token[0] in "01234567":
            code = int(token, 8)
            return chr(code) if code <= 255 else ""
        return token

    return _ESCAPE_RE.sub(replace, value)

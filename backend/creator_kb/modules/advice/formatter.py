import re

EXCERPT_MAX_LINE = 360
EXCERPT_SENTENCE_BUDGET = 280
EXCERPT_HARD_CUT = 320

_SENTENCE_SPLIT_RE = re.compile(r"(?<=[.!?])\s+")
_LEADING_MARKER_RE = re.compile(r"^[-–•0-9.)]+")


def format_advice_text(raw: str) -> str:
    """Reduce a stored chunk to a short, card-sized excerpt.

    Takes the first non-empty line. A line longer than 360 characters is cut
    at sentence boundaries once the accumulated text passes 280 characters,
    or hard-cut at 320 characters when it has no sentence breaks. Leading
    list markers (dashes, bullets, numbering) are removed.
    """
    lines = [line.strip() for line in raw.replace("\r\n", "\n").split("\n")]
    lines = [line for line in lines if line]

    if not lines:
        return raw.strip()

    candidate = lines[0]

    if len(candidate) > EXCERPT_MAX_LINE:
        sentences = _SENTENCE_SPLIT_RE.split(candidate)
        if len(sentences) > 1:
            accumulated = []
            for sentence in sentences:
                accumulated.append(sentence)
                if len(" ".join(accumulated)) > EXCERPT_SENTENCE_BUDGET:
                    break
            candidate = " ".join(accumulated).strip()
        else:
            candidate = candidate[:EXCERPT_HARD_CUT].rstrip()

    return _LEADING_MARKER_RE.sub("", candidate).strip()

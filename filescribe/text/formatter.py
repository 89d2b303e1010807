"""Optional readability formatting for transcriptions."""

import re

_WHITESPACE_RE = re.compile(r"\s+")
_SPACE_BEFORE_PUNCT_RE = re.compile(r"\s+([,.;:!?])")
_SENTENCE_START_RE = re.compile(r"(^|[.!?]\s+)([a-z])")


def format_text(text: str) -> str:
    """Normalize spacing and capitalize sentence starts."""
    text = _WHITESPACE_RE.sub(" ", text).strip()
    text = _SPACE_BEFORE_PUNCT_RE.sub(r"\1", text)
    return _SENTENCE_START_RE.sub(lambda m: m.group(1) + m.group(2).upper(), text)

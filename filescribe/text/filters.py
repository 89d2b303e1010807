"""Cleanup of artifacts emitted by speech-to-text backends."""

import re

# Special tokens such as <|endoftext|> or <|en|>
_SPECIAL_TOKEN_RE = re.compile(r"<\|[^|>]*\|>")
# Bracketed annotations such as [BLANK_AUDIO], [inaudible], (music), (applause)
_ANNOTATION_RE = re.compile(
    r"[\[\(]\s*(?:blank_audio|silence|inaudible|music|applause|laughter|noise|"
    r"background noise|no speech|sound|typing|coughs?|sighs?)\s*[\]\)]",
    re.IGNORECASE,
)
_HALLUCINATION_RE = re.compile(r"\*+\s*(?:music|silence)\s*\*+", re.IGNORECASE)
_SPACES_RE = re.compile(r"[ \t]{2,}")


def filter_output(text: str) -> str:
    """Strip known backend noise tokens and markup from a transcription."""
    if not text:
        return ""
    text = _SPECIAL_TOKEN_RE.sub("", text)
    text = _ANNOTATION_RE.sub("", text)
    text = _HALLUCINATION_RE.sub("", text)
    text = _SPACES_RE.sub(" ", text)
    return "\n".join(line.strip() for line in text.splitlines()).strip()

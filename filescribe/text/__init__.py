"""Text post-processing applied to every transcription."""

from dataclasses import dataclass
from typing import Any, Callable

from .filters import filter_output
from .formatter import format_text
from .replacements import apply_word_replacements


@dataclass
class TextProcessors:
    """Post-processing steps, applied in a fixed order.

    Replacement runs last so its rules match the final surface text.
    """
    output_filter: Callable[[str], str] = filter_output
    formatter: Callable[[str], str] = format_text
    word_replacer: Callable[[str, Any], str] = apply_word_replacements

    def process(self, text: str, context: Any, formatting_enabled: bool = False) -> str:
        text = self.output_filter(text)
        text = text.strip()
        if formatting_enabled:
            text = self.formatter(text)
        return self.word_replacer(text, context)


__all__ = [
    "TextProcessors",
    "filter_output",
    "format_text",
    "apply_word_replacements",
]

"""User-defined word replacement."""

import logging
import re
from typing import Any, Dict

logger = logging.getLogger(__name__)


def apply_word_replacements(text: str, context: Any) -> str:
    """Apply the replacement rules stored in a persistence context.

    Each key may list several comma-separated variants that all map to the
    same replacement. Matching is case-insensitive and on whole words.

    Args:
        text: Text after filtering and formatting
        context: Persistence context; its ``word_replacements`` mapping is used

    Returns:
        Text with every rule applied
    """
    rules: Dict[str, str] = getattr(context, "word_replacements", None) or {}
    for originals, replacement in rules.items():
        for original in originals.split(","):
            original = original.strip()
            if not original:
                continue
            pattern = re.compile(rf"(?<!\w){re.escape(original)}(?!\w)", re.IGNORECASE)
            text = pattern.sub(lambda _m: replacement, text)
    return text

"""Selection of input media files."""

import logging
from pathlib import Path
from typing import Iterable, List

logger = logging.getLogger(__name__)

AUDIO_EXTENSIONS = {
    ".wav", ".mp3", ".m4a", ".aac", ".flac", ".ogg", ".oga", ".opus",
    ".aif", ".aiff", ".caf", ".wma",
}
VIDEO_EXTENSIONS = {".mp4", ".mov", ".m4v", ".mkv", ".avi", ".webm"}
SUPPORTED_EXTENSIONS = AUDIO_EXTENSIONS | VIDEO_EXTENSIONS


def is_supported(path) -> bool:
    return Path(path).suffix.lower() in SUPPORTED_EXTENSIONS


def collect_media_files(paths: Iterable) -> List[str]:
    """Keep existing, supported files, dropping duplicates.

    Args:
        paths: Candidate file paths, e.g. from the command line

    Returns:
        Paths in first-seen order
    """
    seen = set()
    files = []
    for path in paths:
        candidate = Path(path)
        resolved = candidate.resolve()
        if resolved in seen:
            continue
        seen.add(resolved)
        if not candidate.is_file():
            logger.warning(f"Skipping missing file: {candidate}")
            continue
        if not is_supported(candidate):
            logger.warning(f"Skipping unsupported file type: {candidate}")
            continue
        files.append(str(candidate))
    return files

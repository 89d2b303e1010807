"""Batch pipeline: manager, per-file stages, cancellation and errors."""

from .errors import (
    PipelineError,
    NoModelSelectedError,
    AudioDecodeError,
    TranscriptionServiceError,
    EnhancementError,
    PersistenceError,
    BatchCancelled,
)
from .cancellation import CancellationToken
from .manager import AudioTranscriptionManager

__all__ = [
    "AudioTranscriptionManager",
    "CancellationToken",
    "PipelineError",
    "NoModelSelectedError",
    "AudioDecodeError",
    "TranscriptionServiceError",
    "EnhancementError",
    "PersistenceError",
    "BatchCancelled",
]

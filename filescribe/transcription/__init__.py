"""Service interfaces and event publishing for the pipeline."""

from .base import (
    TranscriptionModel,
    AbstractAudioDecoder,
    AbstractTranscriptionServiceRegistry,
    AbstractEnhancementService,
    TranscriptionSession,
    PersistenceContext,
)
from .publisher import PipelinePublisher
from .session import BatchSession

__all__ = [
    "TranscriptionModel",
    "AbstractAudioDecoder",
    "AbstractTranscriptionServiceRegistry",
    "AbstractEnhancementService",
    "TranscriptionSession",
    "PersistenceContext",
    "PipelinePublisher",
    "BatchSession",
]

"""Data models for the filescribe pipeline."""

from .audio import SampleBuffer
from .transcription import TranscriptionRecord, EnhancementOutcome, PowerModeProfile
from .pipeline import (
    ProcessingPhase,
    BatchRequest,
    BatchTranscriptionResult,
    PipelineState,
)

__all__ = [
    "SampleBuffer",
    "TranscriptionRecord",
    "EnhancementOutcome",
    "PowerModeProfile",
    "ProcessingPhase",
    "BatchRequest",
    "BatchTranscriptionResult",
    "PipelineState",
]

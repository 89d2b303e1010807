"""Batch pipeline state models."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Optional, Tuple

from .transcription import TranscriptionRecord


class ProcessingPhase(Enum):
    """Current stage of the active batch."""
    IDLE = "idle"
    LOADING = "loading"
    PROCESSING_AUDIO = "processing_audio"
    TRANSCRIBING = "transcribing"
    ENHANCING = "enhancing"
    COMPLETED = "completed"

    @property
    def message(self) -> str:
        return _PHASE_MESSAGES[self]


_PHASE_MESSAGES = {
    ProcessingPhase.IDLE: "",
    ProcessingPhase.LOADING: "Loading transcription model...",
    ProcessingPhase.PROCESSING_AUDIO: "Processing audio file for transcription...",
    ProcessingPhase.TRANSCRIBING: "Transcribing audio...",
    ProcessingPhase.ENHANCING: "Enhancing transcription with AI...",
    ProcessingPhase.COMPLETED: "Transcription completed!",
}


@dataclass(frozen=True)
class BatchRequest:
    """Everything a batch needs, captured when the batch starts.

    The enhancement service is only kept when it was both enabled and
    configured at start time, so later settings changes cannot affect
    files still waiting in the batch.
    """
    files: Tuple[str, ...]
    model: Optional[Any]
    enhancement_service: Optional[Any] = None
    formatting_enabled: bool = False
    created_at: datetime = field(default_factory=datetime.now)


@dataclass(frozen=True)
class BatchTranscriptionResult:
    """One successfully processed file of a batch."""
    file_name: str
    record: TranscriptionRecord

    @property
    def record_id(self) -> str:
        return self.record.id


@dataclass(frozen=True)
class PipelineState:
    """Snapshot of the manager's observable state."""
    phase: ProcessingPhase
    is_processing: bool
    current_file_index: int
    total_file_count: int
    completed_count: int
    error_message: Optional[str] = None

    @property
    def message(self) -> str:
        return self.phase.message

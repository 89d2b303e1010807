"""Transcription-related data models."""

import uuid
from dataclasses import dataclass, field, asdict
from datetime import datetime
from typing import Optional, Dict, Any


@dataclass
class TranscriptionRecord:
    """A persisted transcription of one input file."""
    text: str
    duration: float
    audio_file_url: str
    transcription_model_name: str
    transcription_duration: float
    enhanced_text: Optional[str] = None
    ai_enhancement_model_name: Optional[str] = None
    prompt_name: Optional[str] = None
    enhancement_duration: Optional[float] = None
    # Raw messages sent to the enhancement service, kept for auditing
    ai_request_system_message: Optional[str] = None
    ai_request_user_message: Optional[str] = None
    power_mode_name: Optional[str] = None
    power_mode_emoji: Optional[str] = None
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def is_enhanced(self) -> bool:
        return self.enhanced_text is not None

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data['timestamp'] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TranscriptionRecord":
        data = dict(data)
        data['timestamp'] = datetime.fromisoformat(data['timestamp'])
        return cls(**data)


@dataclass
class EnhancementOutcome:
    """Result of a successful enhancement call."""
    text: str
    duration: float
    prompt_name: Optional[str] = None


@dataclass(frozen=True)
class PowerModeProfile:
    """Automation profile active while a file is processed."""
    name: str
    emoji: Optional[str] = None
    is_enabled: bool = True

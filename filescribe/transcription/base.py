"""Abstract interfaces for the services a batch drives."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Dict, Optional, Protocol
import logging

from ..models.audio import SampleBuffer
from ..models.transcription import EnhancementOutcome, TranscriptionRecord
from ..pipeline.cancellation import CancellationToken

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TranscriptionModel:
    """A selectable speech-to-text model."""
    name: str
    display_name: Optional[str] = None

    def __post_init__(self):
        if self.display_name is None:
            object.__setattr__(self, 'display_name', self.name)


class AbstractAudioDecoder(ABC):
    """Abstract base class for audio decoders."""

    @abstractmethod
    async def decode(self, file_path: str) -> SampleBuffer:
        """Decode a media file into normalized mono samples.

        Args:
            file_path: Path of the input audio or video file

        Returns:
            SampleBuffer ready to be written as canonical audio
        """
        pass

    @abstractmethod
    def save_as_canonical_audio(self, buffer: SampleBuffer, destination: str) -> None:
        """Write decoded samples as a WAV file.

        Args:
            buffer: Samples returned by decode()
            destination: Path of the WAV file to create
        """
        pass


class AbstractTranscriptionServiceRegistry(ABC):
    """Routes transcription requests to the backend serving a model.

    A registry is created once per batch and released with cleanup()
    when the batch ends.
    """

    @abstractmethod
    async def transcribe(self, audio_path: str, model: TranscriptionModel,
                         cancellation: Optional[CancellationToken] = None) -> str:
        """Transcribe a canonical WAV file.

        Args:
            audio_path: Path of the canonical audio file
            model: Model selected for this batch
            cancellation: Token the backend may check to abort early

        Returns:
            Raw transcription text
        """
        pass

    @abstractmethod
    def cleanup(self) -> None:
        """Release backend resources held for the batch."""
        pass


class AbstractEnhancementService(ABC):
    """Abstract base class for AI text enhancement."""

    model_name: Optional[str] = None
    last_system_message_sent: Optional[str] = None
    last_user_message_sent: Optional[str] = None

    @property
    @abstractmethod
    def is_enhancement_enabled(self) -> bool:
        """Whether the user turned enhancement on."""
        pass

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether the service has what it needs to make requests."""
        pass

    @abstractmethod
    async def enhance(self, text: str,
                      cancellation: Optional[CancellationToken] = None) -> EnhancementOutcome:
        """Refine a transcription.

        Args:
            text: Post-processed transcription text
            cancellation: Token the service may check to abort early

        Returns:
            EnhancementOutcome with the refined text, elapsed time and prompt used
        """
        pass


class TranscriptionSession(Protocol):
    """Session-level context a batch reads when it starts."""

    current_model: Optional[TranscriptionModel]
    enhancement_service: Optional[AbstractEnhancementService]
    formatting_enabled: bool

    def create_service_registry(self) -> AbstractTranscriptionServiceRegistry:
        ...


class PersistenceContext(Protocol):
    """Storage a batch inserts records into."""

    word_replacements: Dict[str, str]

    def insert(self, record: TranscriptionRecord) -> None:
        ...

    def save(self) -> None:
        ...

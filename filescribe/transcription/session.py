"""Plain session context built from explicit values."""

from dataclasses import dataclass
from typing import Callable, Optional

from .base import (
    AbstractEnhancementService,
    AbstractTranscriptionServiceRegistry,
    TranscriptionModel,
)


@dataclass
class BatchSession:
    """Session context handed to the manager when a batch starts.

    The manager reads the model, enhancement service and formatting flag
    once per batch, and asks for a fresh service registry per batch.
    """
    current_model: Optional[TranscriptionModel]
    registry_factory: Callable[[], AbstractTranscriptionServiceRegistry]
    enhancement_service: Optional[AbstractEnhancementService] = None
    formatting_enabled: bool = False

    def create_service_registry(self) -> AbstractTranscriptionServiceRegistry:
        return self.registry_factory()

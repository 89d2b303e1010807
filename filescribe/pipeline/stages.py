"""Per-file processing: decode, transcribe, enhance, persist."""

import logging
import time
from typing import Any, Callable, Optional

from ..models.pipeline import BatchRequest, ProcessingPhase
from ..models.transcription import PowerModeProfile, TranscriptionRecord
from ..text import TextProcessors
from ..transcription.publisher import PipelinePublisher
from .cancellation import CancellationToken
from .errors import (
    AudioDecodeError,
    BatchCancelled,
    EnhancementError,
    PipelineError,
    TranscriptionServiceError,
)

logger = logging.getLogger(__name__)

PhaseSetter = Callable[[ProcessingPhase], None]


class SingleFileProcessor:
    """Drives one input file through every stage of the pipeline.

    Decode and transcription failures propagate to the caller. Enhancement
    failures are logged and the record is stored without enhancement.
    """

    def __init__(self,
                 decoder: Any,
                 file_manager: Any,
                 publisher: PipelinePublisher,
                 text_processors: TextProcessors,
                 power_mode_provider: Optional[Callable[[], Optional[PowerModeProfile]]] = None):
        self.decoder = decoder
        self.file_manager = file_manager
        self.publisher = publisher
        self.text_processors = text_processors
        self.power_mode_provider = power_mode_provider

    async def process(self,
                      file_path: str,
                      request: BatchRequest,
                      registry: Any,
                      context: Any,
                      token: CancellationToken,
                      set_phase: PhaseSetter) -> TranscriptionRecord:
        """Process one file and return its persisted record.

        Args:
            file_path: Input media file
            request: Snapshot of the batch settings
            registry: Transcription service registry for this batch
            context: Persistence context records are inserted into
            token: Cancellation token of the batch
            set_phase: Callback publishing phase changes for this batch

        Returns:
            The saved TranscriptionRecord
        """
        set_phase(ProcessingPhase.PROCESSING_AUDIO)
        audio_path, duration = await self._decode(file_path)

        set_phase(ProcessingPhase.TRANSCRIBING)
        transcription_start = time.monotonic()
        try:
            raw_text = await registry.transcribe(audio_path, request.model, cancellation=token)
        except PipelineError:
            raise
        except Exception as e:
            raise TranscriptionServiceError(f"Transcription failed for {file_path}: {e}") from e
        transcription_duration = time.monotonic() - transcription_start
        logger.info(f"Transcribed {file_path} in {transcription_duration:.2f}s")

        text = self.text_processors.process(raw_text or "", context, request.formatting_enabled)

        record = TranscriptionRecord(
            text=text,
            duration=duration,
            audio_file_url=audio_path,
            transcription_model_name=getattr(request.model, 'display_name', None) or str(request.model),
            transcription_duration=transcription_duration,
        )

        if request.enhancement_service is not None:
            set_phase(ProcessingPhase.ENHANCING)
            await self._enhance(record, request.enhancement_service, token)

        self._stamp_power_mode(record)
        context.insert(record)
        context.save()
        self.publisher.publish_record_created(record)
        self.publisher.publish_transcription_completed(record)
        return record

    async def _decode(self, file_path: str):
        try:
            buffer = await self.decoder.decode(file_path)
            audio_path = self.file_manager.create_recording_path()
            self.decoder.save_as_canonical_audio(buffer, str(audio_path))
        except PipelineError:
            raise
        except Exception as e:
            raise AudioDecodeError(f"Could not process audio file {file_path}: {e}") from e
        logger.debug(f"Canonical audio for {file_path} written to {audio_path}")
        return str(audio_path), buffer.duration_seconds

    async def _request_enhancement(self, service: Any, text: str, token: CancellationToken):
        try:
            return await service.enhance(text, cancellation=token)
        except (BatchCancelled, EnhancementError):
            raise
        except Exception as e:
            raise EnhancementError(f"Enhancement failed: {e}") from e

    async def _enhance(self, record: TranscriptionRecord, service: Any, token: CancellationToken) -> None:
        """Attach the enhanced text to the record; failures keep the original text."""
        try:
            outcome = await self._request_enhancement(service, record.text, token)
        except BatchCancelled:
            logger.info("Enhancement cancelled")
            return
        except EnhancementError as e:
            logger.error(f"{e} (keeping unenhanced text for record {record.id})")
            return

        record.enhanced_text = outcome.text
        record.enhancement_duration = outcome.duration
        record.prompt_name = outcome.prompt_name
        record.ai_enhancement_model_name = getattr(service, 'model_name', None)
        record.ai_request_system_message = getattr(service, 'last_system_message_sent', None)
        record.ai_request_user_message = getattr(service, 'last_user_message_sent', None)

    def _stamp_power_mode(self, record: TranscriptionRecord) -> None:
        if self.power_mode_provider is None:
            return
        profile = self.power_mode_provider()
        if profile is not None and profile.is_enabled:
            record.power_mode_name = profile.name
            record.power_mode_emoji = profile.emoji

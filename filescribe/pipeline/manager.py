"""Batch transcription manager.

Owns at most one running batch task and the observable state of that
batch: phase, progress counters, completed results and error message.
Only the active batch task writes this state. A batch replaced by a newer
one keeps running until its next cancellation checkpoint but can no longer
touch the manager's state.
"""

import asyncio
import itertools
import logging
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple

from ..models.pipeline import BatchRequest, BatchTranscriptionResult, PipelineState, ProcessingPhase
from ..models.transcription import PowerModeProfile
from ..text import TextProcessors
from ..transcription.publisher import PipelinePublisher
from .cancellation import CancellationToken
from .errors import BatchCancelled, NoModelSelectedError
from .stages import SingleFileProcessor

logger = logging.getLogger(__name__)

DEFAULT_SETTLE_SECONDS = 1.5

_batch_counter = itertools.count(1)


class AudioTranscriptionManager:
    """Sequences batches of media files through the transcription pipeline."""

    def __init__(self,
                 decoder: Any,
                 file_manager: Any,
                 publisher: Optional[PipelinePublisher] = None,
                 text_processors: Optional[TextProcessors] = None,
                 power_mode_provider: Optional[Callable[[], Optional[PowerModeProfile]]] = None,
                 settle_seconds: float = DEFAULT_SETTLE_SECONDS):
        """Initialize the manager.

        Args:
            decoder: Audio decoder producing sample buffers and canonical WAV files
            file_manager: Provides paths for canonical audio
            publisher: Receives record and state events
            text_processors: Post-processing applied to every transcription
            power_mode_provider: Returns the active automation profile, if any
            settle_seconds: How long the completed phase stays visible
        """
        self.publisher = publisher or PipelinePublisher()
        self.settle_seconds = settle_seconds
        self.processor = SingleFileProcessor(
            decoder=decoder,
            file_manager=file_manager,
            publisher=self.publisher,
            text_processors=text_processors or TextProcessors(),
            power_mode_provider=power_mode_provider,
        )

        self._phase = ProcessingPhase.IDLE
        self._is_processing = False
        self._current_file_index = 0
        self._total_file_count = 0
        self._completed_results: List[BatchTranscriptionResult] = []
        self._error_message: Optional[str] = None

        self._task: Optional[asyncio.Task] = None
        self._token: Optional[CancellationToken] = None

    # Observable state

    @property
    def phase(self) -> ProcessingPhase:
        return self._phase

    @property
    def is_processing(self) -> bool:
        return self._is_processing

    @property
    def current_file_index(self) -> int:
        return self._current_file_index

    @property
    def total_file_count(self) -> int:
        return self._total_file_count

    @property
    def completed_results(self) -> Tuple[BatchTranscriptionResult, ...]:
        return tuple(self._completed_results)

    @property
    def error_message(self) -> Optional[str]:
        return self._error_message

    @property
    def state(self) -> PipelineState:
        return PipelineState(
            phase=self._phase,
            is_processing=self._is_processing,
            current_file_index=self._current_file_index,
            total_file_count=self._total_file_count,
            completed_count=len(self._completed_results),
            error_message=self._error_message,
        )

    # Commands

    def start_processing(self, file_path: str, context: Any, session: Any) -> asyncio.Task:
        return self.start_batch_processing([file_path], context, session)

    def start_batch_processing(self, files: Sequence[str], context: Any, session: Any) -> asyncio.Task:
        """Start processing a batch, replacing any batch already running.

        Must be called from a running event loop.

        Args:
            files: Input media files, processed in this order
            context: Persistence context for the resulting records
            session: Provides the selected model, enhancement service,
                formatting flag and the per-batch service registry

        Returns:
            The asyncio task running the batch
        """
        if not files:
            raise ValueError("At least one file is required to start a batch")
        loop = asyncio.get_running_loop()

        self.cancel_processing()

        request = self._snapshot_request(files, session)
        token = CancellationToken(name=f"batch-{next(_batch_counter)}")
        self._token = token

        self._is_processing = True
        self._phase = ProcessingPhase.LOADING
        self._completed_results = []
        self._total_file_count = len(request.files)
        self._current_file_index = 0
        self._error_message = None
        self._publish_state()

        logger.info(f"Starting {token.name} with {len(request.files)} file(s)")
        self._task = loop.create_task(
            self._run_batch(request, context, session, token)
        )
        # A task cancelled before its first step never enters _run_batch
        self._task.add_done_callback(
            lambda task: self._finish_processing(token) if task.cancelled() else None
        )
        return self._task

    def cancel_processing(self) -> None:
        """Request cancellation of the running batch, if any.

        The file being processed is allowed to finish; the batch stops
        before starting the next one.
        """
        if self._token is not None and not self._token.is_cancelled:
            logger.info(f"Cancelling {self._token.name}")
            self._token.cancel()

    def clear_error(self) -> None:
        """Acknowledge the current error message."""
        if self._error_message is not None:
            self._error_message = None
            self._publish_state()

    async def wait(self) -> None:
        """Wait until no batch task is running."""
        while self._task is not None:
            task = self._task
            await asyncio.wait([task])
            if self._task is task:
                break

    # Batch task

    def _snapshot_request(self, files: Sequence[str], session: Any) -> BatchRequest:
        enhancement_service = getattr(session, 'enhancement_service', None)
        if enhancement_service is not None and not (
                enhancement_service.is_enhancement_enabled and enhancement_service.is_configured):
            enhancement_service = None
        return BatchRequest(
            files=tuple(str(f) for f in files),
            model=getattr(session, 'current_model', None),
            enhancement_service=enhancement_service,
            formatting_enabled=bool(getattr(session, 'formatting_enabled', False)),
        )

    async def _run_batch(self, request: BatchRequest, context: Any, session: Any,
                         token: CancellationToken) -> None:
        try:
            if request.model is None:
                raise NoModelSelectedError()

            registry = session.create_service_registry()
            try:
                for index, file_path in enumerate(request.files):
                    token.raise_if_cancelled()

                    self._update(token, current_file_index=index + 1)
                    record = await self.processor.process(
                        file_path=file_path,
                        request=request,
                        registry=registry,
                        context=context,
                        token=token,
                        set_phase=lambda phase: self._update(token, phase=phase),
                    )
                    if self._is_active(token):
                        self._completed_results.append(
                            BatchTranscriptionResult(file_name=Path(file_path).name, record=record)
                        )
                        self._publish_state()
            finally:
                registry.cleanup()

            logger.info(f"{token.name} completed: {len(request.files)} file(s)")
            self._update(token, phase=ProcessingPhase.COMPLETED)
            await asyncio.sleep(self.settle_seconds)
            self._finish_processing(token)

        except BatchCancelled:
            logger.info(f"{token.name} cancelled")
            self._finish_processing(token)
        except asyncio.CancelledError:
            self._finish_processing(token)
            raise
        except Exception as e:
            self._handle_error(e, token)

    def _is_active(self, token: CancellationToken) -> bool:
        return self._token is token

    def _update(self, token: CancellationToken, phase: Optional[ProcessingPhase] = None,
                current_file_index: Optional[int] = None) -> None:
        if not self._is_active(token):
            return
        if phase is not None:
            self._phase = phase
        if current_file_index is not None:
            self._current_file_index = current_file_index
        self._publish_state()

    def _finish_processing(self, token: CancellationToken) -> None:
        if not self._is_active(token):
            return
        self._is_processing = False
        self._phase = ProcessingPhase.IDLE
        self._task = None
        self._token = None
        self._current_file_index = 0
        self._total_file_count = 0
        self._publish_state()

    def _handle_error(self, error: Exception, token: CancellationToken) -> None:
        logger.error(f"Transcription error in {token.name}: {error}")
        if not self._is_active(token):
            return
        self._error_message = str(error) or error.__class__.__name__
        self._finish_processing(token)

    def _publish_state(self) -> None:
        self.publisher.publish_state(self.state)

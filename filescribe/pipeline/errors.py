"""Exceptions raised by the transcription pipeline."""


class PipelineError(Exception):
    """Base error for the filescribe pipeline."""


class NoModelSelectedError(PipelineError):
    """Raised when a batch starts without a transcription model."""

    def __init__(self, message: str = "No transcription model selected"):
        super().__init__(message)


class AudioDecodeError(PipelineError):
    """Raised when an input file cannot be decoded or written as canonical audio."""


class TranscriptionServiceError(PipelineError):
    """Raised when the transcription service fails for a file."""


class EnhancementError(PipelineError):
    """Raised when the AI enhancement service fails for a file."""


class PersistenceError(PipelineError):
    """Raised when a transcription record cannot be stored."""


class BatchCancelled(PipelineError):
    """Raised when a batch observes a cancellation request.

    Cancellation is not a failure: the manager never turns it into an
    error message.
    """

    def __init__(self, message: str = "Transcription was cancelled"):
        super().__init__(message)

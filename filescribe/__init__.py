"""Batch transcription of media files into persisted transcription records."""

__version__ = "0.1.0"

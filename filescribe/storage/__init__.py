"""Storage for canonical audio and transcription records."""

from .file_manager import FileManager
from .record_store import JsonRecordStore

__all__ = [
    "FileManager",
    "JsonRecordStore",
]

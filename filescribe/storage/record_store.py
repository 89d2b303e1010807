"""JSON-file persistence context for transcription records."""

import json
import logging
from typing import Dict, List, Optional

from ..models.transcription import TranscriptionRecord
from ..pipeline.errors import PersistenceError
from .file_manager import FileManager

logger = logging.getLogger(__name__)


class JsonRecordStore:
    """Stores each transcription record as one JSON file.

    Records are staged with insert() and written by save(), so a batch
    controls when a record becomes durable. Not safe for concurrent writers.
    """

    def __init__(self, file_manager: FileManager, word_replacements: Optional[Dict[str, str]] = None):
        """Initialize record store.

        Args:
            file_manager: Provides the transcriptions directory
            word_replacements: Replacement rules applied to new transcriptions
        """
        self.file_manager = file_manager
        self.word_replacements: Dict[str, str] = dict(word_replacements or {})
        self._pending: List[TranscriptionRecord] = []

    def insert(self, record: TranscriptionRecord) -> None:
        self._pending.append(record)
        logger.debug(f"Staged record {record.id}")

    @property
    def has_changes(self) -> bool:
        return bool(self._pending)

    def save(self) -> None:
        """Write all staged records to disk.

        On failure every record still staged is discarded, so a later
        save() never persists records from a failed batch.

        Raises:
            PersistenceError: If a record file cannot be written
        """
        while self._pending:
            record = self._pending[0]
            record_path = self.file_manager.get_record_path(record.id)
            try:
                with open(record_path, 'w', encoding='utf-8') as f:
                    json.dump(record.to_dict(), f, indent=2, ensure_ascii=False)
            except OSError as e:
                logger.error(f"Error saving record {record.id}: {e}")
                logger.warning(f"Discarding {len(self._pending)} unsaved record(s)")
                self._pending.clear()
                raise PersistenceError(f"Failed to save transcription: {e}") from e
            self._pending.pop(0)
            logger.info(f"Record saved: {record_path}")

    def load_record(self, record_id: str) -> Optional[TranscriptionRecord]:
        """Load a record from its JSON file.

        Args:
            record_id: Record identifier

        Returns:
            TranscriptionRecord or None if not found
        """
        record_path = self.file_manager.get_record_path(record_id)
        if not record_path.exists():
            logger.warning(f"Record file not found: {record_path}")
            return None

        with open(record_path, 'r', encoding='utf-8') as f:
            return TranscriptionRecord.from_dict(json.load(f))

    def list_records(self) -> List[TranscriptionRecord]:
        """Load all stored records, oldest first."""
        records = []
        for path in self.file_manager.transcriptions_dir.glob("*.json"):
            with open(path, 'r', encoding='utf-8') as f:
                records.append(TranscriptionRecord.from_dict(json.load(f)))
        records.sort(key=lambda r: r.timestamp)
        return records

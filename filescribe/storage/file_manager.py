"""File management module for canonical audio and record storage."""

import uuid
import logging
from pathlib import Path


logger = logging.getLogger(__name__)


class FileManager:
    """Manages the private working directories used by the pipeline."""

    def __init__(self, data_dir: str = "./data"):
        """Initialize file manager with data directory.

        Args:
            data_dir: Base directory for storing all data
        """
        self.data_dir = Path(data_dir)
        self.recordings_dir = self.data_dir / "recordings"
        self.transcriptions_dir = self.data_dir / "transcriptions"
        self.logs_dir = self.data_dir / "logs"

        # Create directory structure
        self._ensure_directories()

        logger.info(f"FileManager initialized with data_dir: {self.data_dir}")

    def _ensure_directories(self) -> None:
        """Ensure all required directories exist."""
        for directory in [self.data_dir, self.recordings_dir, self.transcriptions_dir, self.logs_dir]:
            directory.mkdir(parents=True, exist_ok=True)
            logger.debug(f"Ensured directory exists: {directory}")

    def create_recording_path(self) -> Path:
        """Return a fresh path for a canonical WAV file.

        Returns:
            Path inside the recordings directory that no other file uses
        """
        self.recordings_dir.mkdir(parents=True, exist_ok=True)
        return self.recordings_dir / f"transcribed_{uuid.uuid4()}.wav"

    def get_record_path(self, record_id: str) -> Path:
        return self.transcriptions_dir / f"{record_id}.json"

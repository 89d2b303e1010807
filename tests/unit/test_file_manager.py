"""Unit tests for FileManager and JsonRecordStore."""

import json
from pathlib import Path
from unittest.mock import patch

import pytest

from filescribe.models.transcription import TranscriptionRecord
from filescribe.pipeline.errors import PersistenceError
from filescribe.storage import FileManager, JsonRecordStore


def make_record(text="hello world", **kwargs):
    return TranscriptionRecord(
        text=text,
        duration=3.2,
        audio_file_url="/tmp/transcribed_x.wav",
        transcription_model_name="Whisper Small",
        transcription_duration=0.8,
        **kwargs
    )


@pytest.mark.unit
class TestFileManager:
    """Test cases for FileManager class."""

    def test_initialization(self, temp_data_dir):
        fm = FileManager(temp_data_dir)

        assert fm.data_dir == Path(temp_data_dir)
        assert fm.recordings_dir == Path(temp_data_dir) / "recordings"
        assert fm.transcriptions_dir == Path(temp_data_dir) / "transcriptions"
        assert fm.logs_dir == Path(temp_data_dir) / "logs"

        for directory in [fm.data_dir, fm.recordings_dir, fm.transcriptions_dir, fm.logs_dir]:
            assert directory.exists()

    def test_initialization_default_path(self):
        with patch.object(Path, 'mkdir') as mock_mkdir:
            fm = FileManager()

            assert fm.data_dir == Path("./data")
            assert mock_mkdir.call_count >= 4

    def test_recording_paths_are_unique(self, temp_data_dir):
        fm = FileManager(temp_data_dir)

        paths = {fm.create_recording_path() for _ in range(50)}

        assert len(paths) == 50
        for path in paths:
            assert path.parent == fm.recordings_dir
            assert path.name.startswith("transcribed_")
            assert path.suffix == ".wav"


@pytest.mark.unit
class TestJsonRecordStore:
    """Test cases for JsonRecordStore."""

    def test_insert_does_not_write_until_save(self, file_manager):
        store = JsonRecordStore(file_manager)
        record = make_record()

        store.insert(record)

        assert store.has_changes
        assert not file_manager.get_record_path(record.id).exists()

        store.save()

        assert not store.has_changes
        assert file_manager.get_record_path(record.id).exists()

    def test_round_trip(self, file_manager):
        store = JsonRecordStore(file_manager)
        record = make_record(enhanced_text="Hello, world.", prompt_name="Default", power_mode_emoji="📅")
        store.insert(record)
        store.save()

        loaded = store.load_record(record.id)

        assert loaded == record
        assert loaded.is_enhanced

    def test_saved_json_layout(self, file_manager):
        store = JsonRecordStore(file_manager)
        record = make_record()
        store.insert(record)
        store.save()

        with open(file_manager.get_record_path(record.id), encoding='utf-8') as f:
            data = json.load(f)

        assert data["id"] == record.id
        assert data["timestamp"] == record.timestamp.isoformat()
        assert data["enhanced_text"] is None

    def test_load_missing_record(self, file_manager):
        store = JsonRecordStore(file_manager)
        assert store.load_record("missing") is None

    def test_list_records_sorted_by_timestamp(self, file_manager):
        store = JsonRecordStore(file_manager)
        first, second = make_record("first"), make_record("second")
        store.insert(second)
        store.insert(first)
        store.save()

        records = store.list_records()

        assert {r.text for r in records} == {"first", "second"}
        assert records[0].timestamp <= records[1].timestamp

    def test_save_failure_raises_persistence_error(self, file_manager):
        store = JsonRecordStore(file_manager)
        record = make_record()
        store.insert(record)

        with patch("builtins.open", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError):
                store.save()

        assert not store.has_changes

    def test_save_failure_discards_staged_records(self, file_manager):
        store = JsonRecordStore(file_manager)
        failed = make_record("failed batch")
        store.insert(failed)

        with patch("builtins.open", side_effect=OSError("disk full")):
            with pytest.raises(PersistenceError):
                store.save()

        kept = make_record("next batch")
        store.insert(kept)
        store.save()

        assert not file_manager.get_record_path(failed.id).exists()
        assert [r.text for r in store.list_records()] == ["next batch"]

    def test_word_replacements_copied(self, file_manager):
        rules = {"teh": "the"}
        store = JsonRecordStore(file_manager, word_replacements=rules)
        rules["foo"] = "bar"

        assert store.word_replacements == {"teh": "the"}

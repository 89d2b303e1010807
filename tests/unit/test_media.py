"""Tests for input media selection."""

from pathlib import Path

import pytest

from filescribe.media import collect_media_files, is_supported


@pytest.mark.unit
class TestMediaSelection:

    def test_is_supported(self):
        assert is_supported("talk.WAV")
        assert is_supported("/videos/demo.mov")
        assert not is_supported("notes.txt")
        assert not is_supported("no_extension")

    def test_collect_filters_and_deduplicates(self, temp_data_dir):
        base = Path(temp_data_dir)
        for name in ["b.mp3", "a.wav", "notes.txt"]:
            (base / name).write_bytes(b'\x00')

        files = collect_media_files([
            base / "b.mp3",
            base / "a.wav",
            base / "notes.txt",
            base / "missing.wav",
            str(base / "b.mp3"),
        ])

        assert files == [str(base / "b.mp3"), str(base / "a.wav")]

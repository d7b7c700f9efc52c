"""Tests for locating and reading transcripts on disk."""

import pytest

from txt2clip.library import (
    list_transcripts,
    load_transcripts,
    read_metadata,
    read_transcript,
    transcript_path_for,
)

TRANSCRIPT = "length: 00:05:00\nsource: small\n00:00:01.000 --> 00:00:02.000\nhi\n"


@pytest.fixture
def watch_dir(tmp_path):
    """A watch directory with two transcribed videos and one without."""
    (tmp_path / "talk.mp4").write_bytes(b"")
    (tmp_path / "talk.txt").write_text(TRANSCRIPT, encoding="utf-8")
    nested = tmp_path / "2024"
    nested.mkdir()
    (nested / "Meeting.MKV").write_bytes(b"")
    (nested / "Meeting.txt").write_text("hello\n", encoding="utf-8")
    (tmp_path / "pending.mov").write_bytes(b"")
    (tmp_path / "notes.txt").write_text("not a transcript", encoding="utf-8")
    return tmp_path


class TestReadTranscript:
    """Tests for reading transcript files."""

    def test_read_from_video_path(self, watch_dir):
        assert read_transcript(watch_dir / "talk.mp4") == TRANSCRIPT

    def test_read_from_text_path(self, watch_dir):
        assert read_transcript(transcript_path_for(watch_dir / "talk.mp4")) == TRANSCRIPT

    def test_missing_transcript(self, watch_dir):
        with pytest.raises(FileNotFoundError):
            read_transcript(watch_dir / "pending.mov")

    def test_read_metadata(self):
        assert read_metadata(TRANSCRIPT) == {"length": "00:05:00", "source": "small"}
        assert read_metadata("nothing") == {"length": None, "source": None}


class TestListTranscripts:
    """Tests for scanning watch directories."""

    def test_finds_videos_with_transcripts(self, watch_dir):
        records = list_transcripts([watch_dir])

        assert list(records) == ["2024/Meeting", "talk"]
        talk = records["talk"]
        assert talk.name == "talk.mp4"
        assert talk.has_transcript
        assert talk.line_count == 4
        assert talk.length == "00:05:00"
        assert talk.source == "small"

    def test_include_missing(self, watch_dir):
        records = list_transcripts([watch_dir], include_missing=True)

        assert "pending" in records
        assert not records["pending"].has_transcript

    def test_missing_directory_is_skipped(self, tmp_path, capsys):
        assert list_transcripts([tmp_path / "nope"]) == {}
        assert "not found" in capsys.readouterr().out

    def test_load_transcripts(self, watch_dir):
        texts = load_transcripts(list_transcripts([watch_dir], include_missing=True))

        assert texts == {"2024/Meeting": "hello\n", "talk": TRANSCRIPT}

"""Tests for clip and view writers."""

import json

import pytest

from txt2clip.clip import ClipSelection
from txt2clip.models import BlockItem, Direction, HiddenRun
from txt2clip.segmenter import segment_transcript
from txt2clip.timecode import Timecode
from txt2clip.writers.json_writer import clip_to_dict, write_clip_json
from txt2clip.writers.srt_writer import format_clip_srt, format_timestamp, write_clip_srt
from txt2clip.writers.txt_writer import format_items, write_view

TEXT = (
    "00:00:01.000 --> 00:00:03.000\n"
    "Hello world\n"
    "00:00:03.000 --> 00:00:05.500\n"
    "Goodbye\n"
    "00:00:06.000 --> 00:00:08.000\n"
    "Later\n"
)


@pytest.fixture
def blocks():
    return segment_transcript(TEXT)


@pytest.fixture
def clip():
    selection = ClipSelection()
    selection.set_whole_range(Timecode.from_seconds(2), Timecode.from_seconds(5), "talk", label="greeting")
    return selection


class TestSrtWriter:
    """Tests for SRT export."""

    def test_format_timestamp(self):
        assert format_timestamp(3725.5) == "01:02:05,500"

    def test_cues_rebased_and_clamped(self, clip, blocks):
        expected = (
            "1\n00:00:00,000 --> 00:00:01,000\nHello world\n"
            "\n"
            "2\n00:00:01,000 --> 00:00:03,000\nGoodbye\n"
        )
        assert format_clip_srt(clip, blocks) == expected

    def test_write_file(self, clip, blocks, tmp_path):
        path = tmp_path / "clip.srt"
        write_clip_srt(clip, blocks, path)

        assert path.read_text(encoding="utf-8").startswith("1\n00:00:00,000")

    def test_incomplete_clip_rejected(self, blocks):
        partial = ClipSelection()
        partial.set_start(Timecode.from_seconds(1), "talk")

        with pytest.raises(ValueError):
            format_clip_srt(partial, blocks)


class TestJsonWriter:
    """Tests for JSON export."""

    def test_clip_to_dict(self, clip, blocks):
        data = clip_to_dict(clip, blocks)

        assert data["transcript"] == "talk"
        assert data["start"] == "00:00:02.000"
        assert data["end_seconds"] == 5.0
        assert data["label"] == "greeting"
        assert [s["text"] for s in data["segments"]] == ["Hello world", "Goodbye"]
        assert data["segments"][0]["line_numbers"] == [1, 2]

    def test_write_file(self, clip, blocks, tmp_path):
        path = tmp_path / "clip.json"
        write_clip_json(clip, blocks, path)

        assert json.loads(path.read_text(encoding="utf-8"))["end"] == "00:00:05.000"

    def test_empty_clip_rejected(self, blocks):
        with pytest.raises(ValueError):
            clip_to_dict(ClipSelection(), blocks)


class TestTxtWriter:
    """Tests for plain-text views."""

    def test_format_items(self, clip, blocks):
        items = [HiddenRun(2, 3, Direction.UP), BlockItem(blocks[1]), HiddenRun(1, 4, Direction.DOWN)]
        lines = format_items(items, clip=clip, transcript="talk")

        assert lines[0] == "  ··· 2 lines hidden ↑"
        assert lines[1].startswith(">    3  00:00:03.000 --> 00:00:05.500  Goodbye")
        assert lines[2] == "  ··· 1 line hidden ↓"

    def test_write_view(self, blocks, tmp_path):
        path = tmp_path / "view.txt"
        write_view([BlockItem(b) for b in blocks], path)

        assert len(path.read_text(encoding="utf-8").splitlines()) == 3

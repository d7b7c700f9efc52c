"""Tests for TranscriptSession, the action surface used by the front ends."""

from txt2clip.clip import ClipSelection, ClipState
from txt2clip.models import BlockItem, Direction, HiddenRun
from txt2clip.session import TranscriptSession
from txt2clip.timecode import Timecode

TALK = (
    "WEBVTT\n"
    "\n"
    "00:00:01.000 --> 00:00:03.000\n"
    "Hello world\n"
    "\n"
    "00:00:03.000 --> 00:00:05.000\n"
    "Goodbye\n"
)
OTHER = "00:00:10.000 --> 00:00:12.000\nnothing to see\n"


def make_session(clip=None):
    return TranscriptSession({"talk": TALK, "other": OTHER}, clip=clip)


class TestSearchAndView:
    """Tests for searching and rendering through the session."""

    def test_unfiltered_view(self):
        session = make_session()

        assert session.visible_transcripts() == ["other", "talk"]
        assert all(isinstance(i, BlockItem) for i in session.view("talk"))

    def test_search_filters_transcripts(self):
        session = make_session()
        results = session.search("goodbye")

        assert results == {"talk": [7]}
        assert session.visible_transcripts() == ["talk"]
        assert session.view("other") is None
        assert isinstance(session.view("talk")[0], HiddenRun)

    def test_blank_search_clears(self):
        session = make_session()
        session.search("goodbye")

        assert session.search("  ") is None
        assert session.query is None
        assert session.visible_transcripts() == ["other", "talk"]

    def test_expand_run_reveals_context(self):
        """Clicking the marker above a match shows the lines before it."""
        session = make_session()
        session.search("goodbye")
        run = session.view("talk")[0]

        session.expand_run("talk", run)

        assert all(isinstance(i, BlockItem) for i in session.view("talk"))

    def test_expand_all(self):
        session = make_session()
        session.search("goodbye")
        session.expand_all("talk")

        assert session.window("talk").to_line_numbers() == [-1]
        assert len(session.view("talk")) == 2

    def test_external_results(self):
        """Line numbers from a search server drive the same windows."""
        session = make_session()
        session.apply_search_results("hello", {"talk": [4]})

        items = session.view("talk")
        assert items[-1] == HiddenRun(2, 4, Direction.DOWN)
        assert session.view("other") is None

    def test_replace_text_recomputes_blocks(self):
        session = make_session()
        before = session.blocks("talk")
        session.replace_text("talk", TALK.replace("Goodbye", "Farewell"))

        assert session.blocks("talk") is not before
        assert session.blocks("talk")[1].text == "Farewell"


class TestClipActions:
    """Tests for clip actions and the menu guards."""

    def test_shared_clip_instance(self):
        clip = ClipSelection()
        session = make_session(clip=clip)
        session.set_start("talk", Timecode.from_seconds(1))

        assert clip.owner == "talk"

    def test_guard_refuses_inverted_range(self):
        session = make_session()
        session.set_end("talk", Timecode.from_seconds(3))

        assert not session.set_start("talk", Timecode.from_seconds(3))
        assert session.clip.start is None
        assert session.set_start("talk", Timecode.from_seconds(1))
        assert session.clip.state is ClipState.COMPLETE

    def test_guard_ignores_other_transcript(self):
        """A bound on another transcript is about to be dropped, so no guard."""
        session = make_session()
        session.set_end("talk", Timecode.from_seconds(3))

        assert session.set_start("other", Timecode.from_seconds(11))
        assert session.clip.owner == "other"
        assert session.clip.end is None

    def test_clip_block_and_blocks(self):
        session = make_session()
        block = session.blocks("talk")[1]

        assert session.clip_block("talk", block)
        assert session.clip.label == "Goodbye"
        assert session.clip_blocks() == [block]

        session.clear_clip()
        assert session.clip_blocks() == []

    def test_caption_under_zero_length_range_is_searchable(self):
        """Text below a same-time timestamp line stays visible to search."""
        text = "00:00:01.000 --> 00:00:01.000\nhello\n00:00:02.000 --> 00:00:03.000\nbye"
        session = TranscriptSession({"talk": text})
        session.search("hello")

        blocks = session.blocks("talk")
        assert session.view("talk") == [
            HiddenRun(1, 2, Direction.UP),
            BlockItem(blocks[1]),
            HiddenRun(2, 2, Direction.DOWN),
        ]
        assert blocks[1].text == "hello"

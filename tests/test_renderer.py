"""Tests for turning blocks and windows into display items."""

from txt2clip.models import Block, BlockItem, Direction, HiddenRun
from txt2clip.renderer import expansion_pivot, render_blocks
from txt2clip.search import match_line_numbers
from txt2clip.segmenter import segment_transcript
from txt2clip.visibility import VisibilityWindow

TEXT = (
    "WEBVTT\n"
    "\n"
    "00:00:01.000 --> 00:00:03.000\n"
    "Hello world\n"
    "\n"
    "00:00:03.000 --> 00:00:05.000\n"
    "Goodbye\n"
)


def plain_blocks(count):
    return [Block(text=f"line {n}", line_numbers=(n,)) for n in range(1, count + 1)]


class TestRenderBlocks:
    """Tests for render_blocks."""

    def test_no_filter_shows_every_block(self):
        blocks = plain_blocks(3)
        items = render_blocks(blocks, None)

        assert items == [BlockItem(b) for b in blocks]

    def test_show_all_has_no_hidden_runs(self):
        blocks = plain_blocks(3)
        items = render_blocks(blocks, VisibilityWindow.show_all())

        assert all(isinstance(item, BlockItem) for item in items)
        assert len(items) == 3

    def test_no_matches_hides_transcript(self):
        """An empty window means the transcript is not rendered at all."""
        assert render_blocks(plain_blocks(3), VisibilityWindow.from_line_numbers([])) is None

    def test_search_to_render(self):
        """Searching 'goodbye' collapses the first block above the match."""
        blocks = segment_transcript(TEXT)
        lines = match_line_numbers(TEXT, "goodbye")
        assert lines == frozenset({7})

        items = render_blocks(blocks, VisibilityWindow.from_line_numbers(lines))

        assert items == [
            HiddenRun(count=2, pivot_line=6, direction=Direction.UP),
            BlockItem(blocks[1]),
        ]

    def test_trailing_run_points_down_from_last_visible_line(self):
        blocks = plain_blocks(10)
        items = render_blocks(blocks, VisibilityWindow.from_line_numbers([2, 4]))

        assert items == [
            HiddenRun(1, 2, Direction.UP),
            BlockItem(blocks[1]),
            HiddenRun(1, 4, Direction.UP),
            BlockItem(blocks[3]),
            HiddenRun(6, 4, Direction.DOWN),
        ]

    def test_hidden_count_is_lines_not_blocks(self):
        """Timed blocks add two lines to a hidden run."""
        blocks = [
            Block(text="a", line_numbers=(1, 2)),
            Block(text="b", line_numbers=(3, 4)),
            Block(text="c", line_numbers=(5,)),
        ]
        items = render_blocks(blocks, VisibilityWindow.from_line_numbers([5]))

        assert items[0] == HiddenRun(4, 5, Direction.UP)

    def test_matches_outside_blocks_leave_one_trailing_run(self):
        """Matched lines with no block (e.g. the header) still render a marker."""
        blocks = plain_blocks(2)
        items = render_blocks(blocks, VisibilityWindow.from_line_numbers([9]))

        assert items == [HiddenRun(2, 9, Direction.DOWN)]


class TestExpansionPivot:
    """Tests for resolving a clicked marker to a visible anchor."""

    def test_pivot_already_visible(self):
        blocks = plain_blocks(10)
        window = VisibilityWindow.from_line_numbers([4])
        run = HiddenRun(3, 4, Direction.UP)

        assert expansion_pivot(blocks, window, run) == 4

    def test_timestamp_pivot_moves_to_matched_caption(self):
        """An unmatched timestamp line resolves to the caption line below it."""
        blocks = segment_transcript(TEXT)
        window = VisibilityWindow.from_line_numbers([7])
        run = render_blocks(blocks, window)[0]

        pivot = expansion_pivot(blocks, window, run)
        expanded = window.expand_context(run.direction, pivot)

        assert pivot == 7
        assert render_blocks(blocks, expanded) == [BlockItem(b) for b in blocks]

"""Turn blocks and a visibility window into a display sequence."""

from typing import Optional, Sequence

from txt2clip.models import Block, BlockItem, Direction, HiddenRun, RenderItem
from txt2clip.visibility import VisibilityWindow, WindowState


def render_blocks(
    blocks: Sequence[Block],
    window: Optional[VisibilityWindow],
) -> Optional[list[RenderItem]]:
    """
    Build the ordered display items for one transcript.

    Args:
        blocks: Segmented transcript
        window: The transcript's window, or None when no search is active

    Returns:
        BlockItem and HiddenRun items in transcript order, or None when the
        transcript had no matches and should not be shown at all.
    """
    if window is None or window.state is WindowState.SHOW_ALL:
        return [BlockItem(block) for block in blocks]
    if window.state is WindowState.NO_MATCHES:
        return None

    items: list[RenderItem] = []
    hidden = 0
    for block in blocks:
        if window.is_visible(block):
            if hidden:
                items.append(HiddenRun(hidden, block.first_line, Direction.UP))
                hidden = 0
            items.append(BlockItem(block))
        else:
            hidden += len(block.line_numbers)

    if hidden:
        items.append(HiddenRun(hidden, max(window.lines), Direction.DOWN))
    return items


def expansion_pivot(
    blocks: Sequence[Block],
    window: VisibilityWindow,
    run: HiddenRun,
) -> int:
    """
    The visible line to expand from when a hidden run is clicked.

    An upward run points at the first line of the block below it, which may
    be a timestamp line that was not itself matched. In that case expand
    from the block's first visible line instead.
    """
    if window.contains(run.pivot_line):
        return run.pivot_line
    for block in blocks:
        if run.pivot_line in block.line_numbers:
            for line in block.line_numbers:
                if window.contains(line):
                    return line
            break
    return run.pivot_line

"""Writer for plain-text views of a rendered transcript."""

from pathlib import Path
from typing import Optional, Sequence

from txt2clip.clip import ClipSelection
from txt2clip.models import Direction, HiddenRun, RenderItem


def format_hidden_run(run: HiddenRun) -> str:
    arrow = "↑" if run.direction is Direction.UP else "↓"
    noun = "line" if run.count == 1 else "lines"
    return f"  ··· {run.count} {noun} hidden {arrow}"


def format_items(
    items: Sequence[RenderItem],
    clip: Optional[ClipSelection] = None,
    transcript: Optional[str] = None,
) -> list[str]:
    """
    Render display items as text lines.

    Format: [line] HH:MM:SS.mmm --> HH:MM:SS.mmm  text
    Blocks inside the clip are marked with '>'.
    """
    lines = []
    for item in items:
        if isinstance(item, HiddenRun):
            lines.append(format_hidden_run(item))
            continue

        block = item.block
        marker = " "
        if clip is not None and transcript is not None and clip.highlight(block, transcript).highlighted:
            marker = ">"
        if block.is_timed:
            lines.append(f"{marker}{block.first_line:>5}  {block.start_time} --> {block.end_time}  {block.text}")
        else:
            lines.append(f"{marker}{block.first_line:>5}  {block.text}")
    return lines


def write_view(items: Sequence[RenderItem], output_path: Path) -> None:
    """Write a rendered transcript to a TXT file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        for line in format_items(items):
            f.write(f"{line}\n")

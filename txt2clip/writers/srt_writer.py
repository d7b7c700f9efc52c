"""Writer for SRT subtitles covering a clip."""

from pathlib import Path
from typing import Sequence

from txt2clip.clip import ClipSelection
from txt2clip.models import Block


def format_timestamp(seconds: float) -> str:
    """Format seconds as SRT timestamp: HH:MM:SS,mmm."""
    total_millis = int(round(seconds * 1000))
    hours, rest = divmod(total_millis, 3600 * 1000)
    minutes, rest = divmod(rest, 60 * 1000)
    secs, millis = divmod(rest, 1000)
    return f"{hours:02d}:{minutes:02d}:{secs:02d},{millis:03d}"


def clip_cues(selection: ClipSelection, blocks: Sequence[Block]) -> list[tuple[float, float, str]]:
    """
    Cues for the blocks that overlap the clip, relative to the clip start.

    Cue times are clamped to the clip so the first and last captions never
    start before zero or run past the end.
    """
    if not selection.is_complete:
        raise ValueError("Clip is not complete: set both a start and an end first")

    clip_start = selection.start.seconds
    clip_length = selection.end.seconds - clip_start
    cues = []
    for block in blocks:
        if not selection.overlaps(block):
            continue
        start = max(0.0, block.start_time.seconds - clip_start)
        end = min(clip_length, block.end_time.seconds - clip_start)
        cues.append((start, end, block.text))
    return cues


def format_clip_srt(selection: ClipSelection, blocks: Sequence[Block]) -> str:
    """Build SRT text for the clip's captions."""
    entries = []
    for index, (start, end, text) in enumerate(clip_cues(selection, blocks), start=1):
        # SRT format: index, timestamps, text
        entries.append(f"{index}\n{format_timestamp(start)} --> {format_timestamp(end)}\n{text}\n")
    return "\n".join(entries)


def write_clip_srt(selection: ClipSelection, blocks: Sequence[Block], output_path: Path) -> None:
    """Write the clip's captions to an SRT subtitle file."""
    with open(output_path, 'w', encoding='utf-8') as f:
        f.write(format_clip_srt(selection, blocks))

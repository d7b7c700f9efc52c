"""Split raw transcript text into timed and untimed blocks."""

from functools import lru_cache
from typing import Optional

from txt2clip.models import Block
from txt2clip.timecode import Timecode, find_timecodes

TIME_SEPARATOR = "-->"
HEADER_TOKEN = "WEBVTT"


def parse_time_range(line: str) -> Optional[tuple[Timecode, Timecode]]:
    """
    Return (start, end) if line is a timestamp line, else None.

    A timestamp line contains the separator and exactly two distinct
    timecodes. A line whose timecodes are all the same one returns None and
    is kept as plain text.
    """
    if TIME_SEPARATOR not in line:
        return None
    distinct = _distinct_timecodes(line)
    if len(distinct) != 2:
        return None
    return distinct[0], distinct[1]


def _distinct_timecodes(line: str) -> list[Timecode]:
    distinct = []
    for span in find_timecodes(line):
        if span.timecode not in distinct:
            distinct.append(span.timecode)
    return distinct


@lru_cache(maxsize=64)
def segment_transcript(text: str) -> tuple[Block, ...]:
    """
    Segment transcript text into blocks.

    Args:
        text: Raw transcript, split on newline characters only

    Returns:
        Blocks in ascending line order. Line numbers are 1-based and never
        shared between blocks.
    """
    lines = text.split("\n")
    blocks = []
    i = 0
    while i < len(lines):
        line_number = i + 1
        line = lines[i].strip()

        if not line or line == HEADER_TOKEN:
            i += 1
            continue

        time_range = parse_time_range(line)
        if time_range:
            next_line = lines[i + 1].strip() if i + 1 < len(lines) else ""
            if next_line:
                start, end = time_range
                blocks.append(Block(
                    text=next_line,
                    line_numbers=(line_number, line_number + 1),
                    start_time=start,
                    end_time=end,
                ))
                i += 2
            else:
                # Timestamp with nothing under it
                i += 1
            continue

        blocks.append(Block(text=line, line_numbers=(line_number,)))
        i += 1

    return tuple(blocks)

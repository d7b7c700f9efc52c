"""Writer for JSON format."""

import json
from pathlib import Path
from typing import Sequence

from txt2clip.clip import ClipSelection
from txt2clip.models import Block


def clip_to_dict(selection: ClipSelection, blocks: Sequence[Block]) -> dict:
    """Describe a complete clip and the blocks it overlaps."""
    triple = selection.as_triple()
    if triple is None:
        raise ValueError("Clip is not complete: set both a start and an end first")
    start, end, owner = triple
    return {
        'transcript': owner,
        'start': str(start),
        'end': str(end),
        'start_seconds': start.seconds,
        'end_seconds': end.seconds,
        'label': selection.label,
        'segments': [
            {
                'start': str(block.start_time),
                'end': str(block.end_time),
                'text': block.text,
                'line_numbers': list(block.line_numbers),
            }
            for block in blocks
            if selection.overlaps(block)
        ]
    }


def write_clip_json(selection: ClipSelection, blocks: Sequence[Block], output_path: Path) -> None:
    """Write clip to JSON file."""
    data = clip_to_dict(selection, blocks)

    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)

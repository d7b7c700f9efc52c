"""Data models for transcript blocks, render items and transcript records."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping, Optional, Union

from txt2clip.timecode import Timecode, TimecodeSpan, find_timecodes

RECORD_SCHEMA_VERSION = 2


@dataclass(frozen=True)
class Block:
    """A timed or untimed unit of transcript content with its source line numbers."""
    text: str
    line_numbers: tuple[int, ...]
    start_time: Optional[Timecode] = None
    end_time: Optional[Timecode] = None

    @property
    def is_timed(self) -> bool:
        return self.start_time is not None and self.end_time is not None

    @property
    def first_line(self) -> int:
        return self.line_numbers[0]

    @property
    def last_line(self) -> int:
        return self.line_numbers[-1]

    @property
    def duration(self) -> Optional[float]:
        """Length in seconds, or None for untimed blocks."""
        if not self.is_timed:
            return None
        return (self.end_time.millis - self.start_time.millis) / 1000

    @property
    def timecode_spans(self) -> list[TimecodeSpan]:
        """Timecodes embedded in the caption text, for clickable links."""
        return find_timecodes(self.text)


class Direction(Enum):
    UP = "up"
    DOWN = "down"


@dataclass(frozen=True)
class BlockItem:
    """A visible block in a rendered transcript."""
    block: Block


@dataclass(frozen=True)
class HiddenRun:
    """A collapsed run of invisible blocks ("N lines hidden")."""
    count: int
    pivot_line: int
    direction: Direction


RenderItem = Union[BlockItem, HiddenRun]


@dataclass
class TranscriptRecord:
    """Metadata for one video that may have a transcript next to it."""
    name: str
    base_name: str
    full_path: str
    created_at: Optional[str] = None
    line_count: int = 0
    has_transcript: bool = False
    last_generated: Optional[str] = None
    length: Optional[str] = None
    source: Optional[str] = None  # Model or origin of the transcript
    schema_version: int = RECORD_SCHEMA_VERSION

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "TranscriptRecord":
        """
        Build a record from external data, validating it once.

        Older payloads used ``model`` instead of ``source`` and
        ``transcript`` instead of ``has_transcript``; both are accepted.
        """
        name = data.get('name')
        if not name or not isinstance(name, str):
            raise ValueError("Transcript record requires a non-empty 'name'")

        line_count = data.get('line_count', 0)
        try:
            line_count = int(line_count)
        except (TypeError, ValueError) as e:
            raise ValueError(f"Invalid line_count for {name}: {line_count!r}") from e
        if line_count < 0:
            raise ValueError(f"Invalid line_count for {name}: {line_count}")

        source = data.get('source', data.get('model'))
        has_transcript = data.get('has_transcript', data.get('transcript', False))

        return cls(
            name=name,
            base_name=data.get('base_name') or name.rsplit('.', 1)[0],
            full_path=data.get('full_path') or name,
            created_at=data.get('created_at'),
            line_count=line_count,
            has_transcript=bool(has_transcript),
            last_generated=data.get('last_generated'),
            length=data.get('length'),
            source=source,
            schema_version=int(data.get('schema_version', 1)),
        )

    def to_dict(self) -> dict:
        return {
            'name': self.name,
            'base_name': self.base_name,
            'full_path': self.full_path,
            'created_at': self.created_at,
            'line_count': self.line_count,
            'has_transcript': self.has_transcript,
            'last_generated': self.last_generated,
            'length': self.length,
            'source': self.source,
            'schema_version': RECORD_SCHEMA_VERSION,
        }


@dataclass(frozen=True)
class SearchMatch:
    """A single matching line inside a transcript."""
    line_number: int
    line_text: str
    timestamp: Optional[str] = None  # Preceding timestamp line, if any


@dataclass
class SearchResult:
    """All matches for one transcript."""
    transcript: str
    matches: list[SearchMatch] = field(default_factory=list)

    @property
    def line_numbers(self) -> list[int]:
        return sorted({m.line_number for m in self.matches})

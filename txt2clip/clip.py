"""Clip selection: one start/end range owned by a single transcript."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from txt2clip.models import Block
from txt2clip.timecode import Timecode


class ClipState(Enum):
    EMPTY = "empty"
    PARTIAL = "partial"
    COMPLETE = "complete"


@dataclass(frozen=True)
class Highlight:
    """How a block relates to the current clip."""
    contains_start: bool = False
    contains_end: bool = False
    fully_within: bool = False

    @property
    def highlighted(self) -> bool:
        return self.contains_start or self.contains_end or self.fully_within


class ClipSelection:
    """
    The clip being built or already chosen.

    One instance is created by the application and handed to whatever
    needs to read or change it. The owner is the transcript the bounds
    belong to; setting a bound from another transcript drops the other
    bound.
    """

    def __init__(self):
        self.start: Optional[Timecode] = None
        self.end: Optional[Timecode] = None
        self.owner: Optional[str] = None
        self.label: str = ""

    def __repr__(self):
        return (f"ClipSelection(start={self.start}, end={self.end}, "
                f"owner={self.owner!r}, label={self.label!r})")

    @property
    def state(self) -> ClipState:
        if self.start is None and self.end is None:
            return ClipState.EMPTY
        if (self.start is not None and self.end is not None
                and self.owner is not None and self.start < self.end):
            return ClipState.COMPLETE
        return ClipState.PARTIAL

    @property
    def is_complete(self) -> bool:
        return self.state is ClipState.COMPLETE

    def set_start(self, time: Timecode, transcript: str) -> None:
        if self.owner is not None and self.owner != transcript:
            self.end = None
            self.label = ""
        self.start = time
        self.owner = transcript

    def set_end(self, time: Timecode, transcript: str) -> None:
        if self.owner is not None and self.owner != transcript:
            self.start = None
            self.label = ""
        self.end = time
        self.owner = transcript

    def set_whole_range(self, start: Timecode, end: Timecode, transcript: str, label: str = "") -> None:
        """Replace every field at once, e.g. with a block's own range."""
        self.start = start
        self.end = end
        self.owner = transcript
        self.label = label

    def clear(self) -> None:
        self.start = None
        self.end = None
        self.owner = None
        self.label = ""

    def can_set_start(self, time: Timecode) -> bool:
        """Menu guard: a start at or after the existing end is refused."""
        return self.end is None or time < self.end

    def can_set_end(self, time: Timecode) -> bool:
        """Menu guard: an end at or before the existing start is refused."""
        return self.start is None or time > self.start

    def as_triple(self) -> Optional[tuple[Timecode, Timecode, str]]:
        """(start, end, owner) for export, once the clip is complete."""
        if not self.is_complete:
            return None
        return self.start, self.end, self.owner

    def highlight(self, block: Block, transcript: str) -> Highlight:
        if self.owner is None or self.owner != transcript or not block.is_timed:
            return Highlight()

        def within(time: Optional[Timecode]) -> bool:
            return time is not None and block.start_time <= time <= block.end_time

        fully_within = (
            self.start is not None and self.end is not None
            and block.start_time >= self.start and block.end_time <= self.end
        )
        return Highlight(
            contains_start=within(self.start),
            contains_end=within(self.end),
            fully_within=fully_within,
        )

    def overlaps(self, block: Block) -> bool:
        """True when a timed block shares any time with the complete clip."""
        if not self.is_complete or not block.is_timed:
            return False
        return block.start_time < self.end and block.end_time > self.start

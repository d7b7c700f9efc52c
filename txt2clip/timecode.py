"""Timecode value type and parsing of user-entered times."""

import re
from dataclasses import dataclass
from typing import Optional, Union

# Canonical HH:MM:SS.mmm; hours may grow past two digits
TIMECODE_PATTERN = re.compile(r'(?<!\d)(\d{2,}):([0-5]\d):([0-5]\d)\.(\d{3})(?!\d)')

_MS_PER_SECOND = 1000
_MS_PER_MINUTE = 60 * _MS_PER_SECOND
_MS_PER_HOUR = 60 * _MS_PER_MINUTE


@dataclass(frozen=True, order=True)
class Timecode:
    """A point in media time with millisecond precision."""
    millis: int

    def __post_init__(self):
        if self.millis < 0:
            raise ValueError(f"Timecode cannot be negative: {self.millis} ms")

    @classmethod
    def parse(cls, text: str) -> "Timecode":
        """Parse the canonical HH:MM:SS.mmm form."""
        match = TIMECODE_PATTERN.fullmatch(text.strip())
        if not match:
            raise ValueError(f"Invalid timecode: {text!r} (expected HH:MM:SS.mmm)")
        return cls._from_match(match)

    @classmethod
    def _from_match(cls, match: re.Match) -> "Timecode":
        hours, minutes, seconds, millis = (int(g) for g in match.groups())
        return cls(hours * _MS_PER_HOUR + minutes * _MS_PER_MINUTE + seconds * _MS_PER_SECOND + millis)

    @classmethod
    def from_seconds(cls, seconds: float) -> "Timecode":
        return cls(int(round(seconds * _MS_PER_SECOND)))

    @property
    def seconds(self) -> float:
        return self.millis / _MS_PER_SECOND

    def format(self) -> str:
        """Format as HH:MM:SS.mmm."""
        hours, rest = divmod(self.millis, _MS_PER_HOUR)
        minutes, rest = divmod(rest, _MS_PER_MINUTE)
        secs, millis = divmod(rest, _MS_PER_SECOND)
        return f"{hours:02d}:{minutes:02d}:{secs:02d}.{millis:03d}"

    def __str__(self) -> str:
        return self.format()

    def __add__(self, other: Union["Timecode", int, float]) -> "Timecode":
        offset = _offset_millis(other)
        if offset is NotImplemented:
            return NotImplemented
        return Timecode(self.millis + offset)

    def __sub__(self, other: Union["Timecode", int, float]) -> "Timecode":
        offset = _offset_millis(other)
        if offset is NotImplemented:
            return NotImplemented
        return Timecode(self.millis - offset)


def _offset_millis(offset: Union[Timecode, int, float]) -> int:
    """Offsets are either another Timecode or a number of seconds."""
    if isinstance(offset, Timecode):
        return offset.millis
    if isinstance(offset, (int, float)) and not isinstance(offset, bool):
        return int(round(offset * _MS_PER_SECOND))
    return NotImplemented


@dataclass(frozen=True)
class TimecodeSpan:
    """A timecode found inside a piece of text, with its character offsets."""
    start: int
    end: int
    timecode: Timecode


def find_timecodes(text: str) -> list[TimecodeSpan]:
    """Find every canonical timecode in text, in order of appearance."""
    return [
        TimecodeSpan(match.start(), match.end(), Timecode._from_match(match))
        for match in TIMECODE_PATTERN.finditer(text)
    ]


def parse_time_input(text: str, fps: Optional[float] = None) -> Timecode:
    """
    Parse a user-entered time.

    Accepts plain seconds ("10.5"), frame counts ("300f", needs fps),
    MM:SS[.sss] and HH:MM:SS[.sss].

    Args:
        text: The raw time string
        fps: Frames per second, required for frame counts

    Returns:
        Parsed Timecode
    """
    value = text.strip()
    if not value:
        raise ValueError("Invalid time format: empty input")

    if ':' in value:
        parts = value.split(':')
        if len(parts) not in (2, 3):
            raise ValueError("Invalid timestamp format. Use MM:SS.sss or HH:MM:SS.sss")
        try:
            numbers = [float(part) for part in parts]
        except ValueError as e:
            raise ValueError(f"Invalid timestamp format: {text!r}") from e
        if len(numbers) == 2:
            numbers.insert(0, 0.0)
        hours, minutes, seconds = numbers
        return Timecode.from_seconds(hours * 3600 + minutes * 60 + seconds)

    if value.endswith('f'):
        try:
            frames = int(value[:-1])
        except ValueError as e:
            raise ValueError(f"Invalid frame number format: {text!r}") from e
        if fps is None or fps <= 0:
            raise ValueError("A frame count needs the video's frame rate")
        return Timecode.from_seconds(frames / fps)

    try:
        seconds = float(value)
    except ValueError as e:
        raise ValueError(f"Invalid time format: {text!r}") from e
    return Timecode.from_seconds(seconds)

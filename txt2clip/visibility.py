"""Per-transcript visibility windows driven by search matches and expand clicks."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional

from txt2clip.models import Block, Direction

# Lines added by one expand click
CONTEXT_WINDOW = 16

# Wire value meaning "show the whole transcript"
SHOW_ALL_SENTINEL = -1


class WindowState(Enum):
    NO_MATCHES = "no_matches"  # searched, nothing found: do not render the transcript
    SHOW_ALL = "show_all"
    SPARSE = "sparse"


@dataclass(frozen=True)
class VisibilityWindow:
    """
    The set of line numbers currently shown for one transcript.

    Having no window at all means no search is active. Windows are values:
    every operation returns a new window.
    """
    state: WindowState
    lines: frozenset[int] = frozenset()

    @classmethod
    def no_matches(cls) -> "VisibilityWindow":
        return cls(WindowState.NO_MATCHES)

    @classmethod
    def show_all(cls) -> "VisibilityWindow":
        return cls(WindowState.SHOW_ALL)

    @classmethod
    def from_line_numbers(cls, line_numbers: Iterable[int]) -> "VisibilityWindow":
        """Build a window from search data: [] is no matches, [-1] is show all."""
        lines = frozenset(line_numbers)
        if SHOW_ALL_SENTINEL in lines:
            return cls.show_all()
        lines = frozenset(n for n in lines if n > 0)
        if not lines:
            return cls.no_matches()
        return cls(WindowState.SPARSE, lines)

    def to_line_numbers(self) -> list[int]:
        if self.state is WindowState.SHOW_ALL:
            return [SHOW_ALL_SENTINEL]
        return sorted(self.lines)

    def apply_matches(self, line_numbers: Iterable[int]) -> "VisibilityWindow":
        return VisibilityWindow.from_line_numbers(line_numbers)

    def expand_all(self) -> "VisibilityWindow":
        return VisibilityWindow.show_all()

    def expand_context(self, direction: Direction, pivot_line: int) -> "VisibilityWindow":
        """
        Reveal up to CONTEXT_WINDOW lines above or below pivot_line.

        Does nothing unless pivot_line is already visible in a sparse window.
        """
        if self.state is not WindowState.SPARSE or pivot_line not in self.lines:
            return self

        step = -1 if direction is Direction.UP else 1
        candidates = (pivot_line + step * offset for offset in range(1, CONTEXT_WINDOW + 1))
        added = {n for n in candidates if n > 0} - self.lines
        if not added:
            return self
        return VisibilityWindow(WindowState.SPARSE, self.lines | added)

    def contains(self, line_number: int) -> bool:
        if self.state is WindowState.SHOW_ALL:
            return True
        return line_number in self.lines

    def is_visible(self, block: Block) -> bool:
        """A block is visible if any of its lines is in the window."""
        if self.state is WindowState.SHOW_ALL:
            return True
        return any(n in self.lines for n in block.line_numbers)


class VisibilityWindows:
    """
    Visibility windows for every transcript under the current search.

    Each new search starts a new generation; expand requests made against
    an older generation are ignored.
    """

    def __init__(self):
        self._windows: dict[str, VisibilityWindow] = {}
        self._active = False
        self.generation = 0

    @property
    def active(self) -> bool:
        """True while a search filter is applied."""
        return self._active

    def get(self, transcript: str) -> Optional[VisibilityWindow]:
        """The transcript's window, or None when no filter is active."""
        if not self._active:
            return None
        return self._windows.get(transcript, VisibilityWindow.no_matches())

    def matched(self) -> list[str]:
        """Transcripts that should be rendered under the current filter."""
        return sorted(
            name for name, window in self._windows.items()
            if window.state is not WindowState.NO_MATCHES
        )

    def clear(self) -> None:
        """Drop the filter: every transcript shows everything."""
        self._windows = {}
        self._active = False
        self.generation += 1

    def apply_search_results(
        self,
        results: Mapping[str, Iterable[int]],
        transcripts: Iterable[str] = (),
    ) -> int:
        """
        Replace all windows with a fresh set of search results.

        Args:
            results: Transcript id -> matching line numbers
            transcripts: Every transcript that was searched; those missing
                from results get an empty window

        Returns:
            The new generation number
        """
        windows = {name: VisibilityWindow.no_matches() for name in transcripts}
        for name, lines in results.items():
            windows[name] = VisibilityWindow.from_line_numbers(lines)
        self._windows = windows
        self._active = True
        self.generation += 1
        return self.generation

    def apply_matches(self, transcript: str, line_numbers: Iterable[int]) -> int:
        """Replace one transcript's window; starts a new generation like a full search."""
        self._windows[transcript] = VisibilityWindow.from_line_numbers(line_numbers)
        self._active = True
        self.generation += 1
        return self.generation

    def expand_all(self, transcript: str) -> Optional[VisibilityWindow]:
        if not self._active:
            return None
        window = VisibilityWindow.show_all()
        self._windows[transcript] = window
        return window

    def expand_context(
        self,
        transcript: str,
        direction: Direction,
        pivot_line: int,
        generation: Optional[int] = None,
    ) -> Optional[VisibilityWindow]:
        """Expand around pivot_line; stale generations and unknown pivots are no-ops."""
        current = self.get(transcript)
        if current is None:
            return None
        if generation is not None and generation != self.generation:
            return current
        window = current.expand_context(direction, pivot_line)
        if window is not current:
            self._windows[transcript] = window
        return window

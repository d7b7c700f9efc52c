"""The actions a front end can take on loaded transcripts."""

from typing import Iterable, Optional

from txt2clip.clip import ClipSelection
from txt2clip.models import Block, HiddenRun, RenderItem
from txt2clip.renderer import expansion_pivot, render_blocks
from txt2clip.search import normalize_query, search_transcripts
from txt2clip.segmenter import segment_transcript
from txt2clip.timecode import Timecode
from txt2clip.visibility import VisibilityWindow, VisibilityWindows


class TranscriptSession:
    """
    Loaded transcripts plus the search windows and clip that act on them.

    The clip is passed in so several views can share the same selection.
    """

    def __init__(self, texts: Optional[dict[str, str]] = None, clip: Optional[ClipSelection] = None):
        self.texts: dict[str, str] = dict(texts or {})
        self.windows = VisibilityWindows()
        self.clip = clip if clip is not None else ClipSelection()
        self.query: Optional[str] = None

    @property
    def transcripts(self) -> list[str]:
        return sorted(self.texts)

    def blocks(self, transcript: str) -> tuple[Block, ...]:
        return segment_transcript(self.texts[transcript])

    def replace_text(self, transcript: str, text: str) -> None:
        """Swap in new text after an external edit; blocks are recomputed."""
        self.texts[transcript] = text

    def search(self, query: Optional[str], restrict: Optional[Iterable[str]] = None) -> Optional[dict[str, list[int]]]:
        """
        Search every loaded transcript and reset the windows.

        A blank query clears the filter and returns None.
        """
        if normalize_query(query) is None:
            self.query = None
            self.windows.clear()
            return None

        self.query = query.strip()
        results = search_transcripts(self.texts, self.query, restrict=restrict, show_progress=len(self.texts) > 50)
        self.windows.apply_search_results(results, self.texts.keys())
        return results

    def apply_search_results(self, query: str, results: dict[str, list[int]]) -> int:
        """Use line numbers computed elsewhere, e.g. by a search server."""
        self.query = query
        return self.windows.apply_search_results(results, self.texts.keys())

    def visible_transcripts(self) -> list[str]:
        """Transcripts to show: all of them, or only those with matches."""
        if not self.windows.active:
            return self.transcripts
        return [name for name in self.windows.matched() if name in self.texts]

    def window(self, transcript: str) -> Optional[VisibilityWindow]:
        return self.windows.get(transcript)

    def view(self, transcript: str) -> Optional[list[RenderItem]]:
        """Display items for a transcript, or None if it should be hidden."""
        return render_blocks(self.blocks(transcript), self.windows.get(transcript))

    def expand_run(self, transcript: str, run: HiddenRun, generation: Optional[int] = None) -> Optional[VisibilityWindow]:
        """Reveal context for a clicked "N lines hidden" marker."""
        window = self.windows.get(transcript)
        if window is None:
            return None
        pivot = expansion_pivot(self.blocks(transcript), window, run)
        return self.windows.expand_context(transcript, run.direction, pivot, generation=generation)

    def expand_all(self, transcript: str) -> Optional[VisibilityWindow]:
        return self.windows.expand_all(transcript)

    def set_start(self, transcript: str, time: Timecode) -> bool:
        """Set the clip start; refused when it would not come before the end."""
        if self.clip.owner == transcript and not self.clip.can_set_start(time):
            return False
        self.clip.set_start(time, transcript)
        return True

    def set_end(self, transcript: str, time: Timecode) -> bool:
        """Set the clip end; refused when it would not come after the start."""
        if self.clip.owner == transcript and not self.clip.can_set_end(time):
            return False
        self.clip.set_end(time, transcript)
        return True

    def clip_block(self, transcript: str, block: Block) -> bool:
        """Use a timed block's whole span as the clip."""
        if not block.is_timed:
            return False
        self.clip.set_whole_range(block.start_time, block.end_time, transcript, label=block.text)
        return True

    def clear_clip(self) -> None:
        self.clip.clear()

    def clip_blocks(self) -> list[Block]:
        """Blocks of the owning transcript that overlap the complete clip."""
        if not self.clip.is_complete or self.clip.owner not in self.texts:
            return []
        return [b for b in self.blocks(self.clip.owner) if self.clip.overlaps(b)]

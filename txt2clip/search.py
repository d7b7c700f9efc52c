"""Case-insensitive line search within and across transcripts."""

from typing import Iterable, Mapping, Optional

from tqdm import tqdm

from txt2clip.models import Block, SearchMatch, SearchResult
from txt2clip.segmenter import parse_time_range

# Typographic apostrophes typed or transcribed in place of '
_APOSTROPHES = str.maketrans({'’': "'", '‘': "'", '´': "'", '`': "'"})


def normalize_text(text: str) -> str:
    return text.lower().translate(_APOSTROPHES)


def normalize_query(query: Optional[str]) -> Optional[str]:
    """Return the normalized query, or None when there is no active filter."""
    if query is None or not query.strip():
        return None
    return normalize_text(query.strip())


def match_line_numbers(text: str, query: Optional[str]) -> Optional[frozenset[int]]:
    """
    Find the 1-based line numbers of text that contain query.

    Returns None for an empty query (no filter), and an empty set when the
    query is active but nothing matches.
    """
    needle = normalize_query(query)
    if needle is None:
        return None
    return frozenset(
        number
        for number, line in enumerate(text.split("\n"), start=1)
        if needle in normalize_text(line)
    )


def block_matches(block: Block, query: Optional[str]) -> bool:
    """Client-side fallback: does the block's caption contain the query?"""
    needle = normalize_query(query)
    if needle is None:
        return True
    return needle in normalize_text(block.text)


def find_matches(text: str, query: Optional[str]) -> list[SearchMatch]:
    """Matching lines with their text and, when present, the timestamp line above."""
    needle = normalize_query(query)
    if needle is None:
        return []

    lines = text.split("\n")
    matches = []
    for index, line in enumerate(lines):
        if needle not in normalize_text(line):
            continue
        timestamp = None
        if index > 0 and parse_time_range(lines[index - 1].strip()):
            timestamp = lines[index - 1].strip()
        matches.append(SearchMatch(line_number=index + 1, line_text=line, timestamp=timestamp))
    return matches


def _included(transcript: str, restrict: Optional[list[str]]) -> bool:
    if not restrict:
        return True
    lowered = transcript.lower()
    return any(f in lowered for f in restrict)


def search_transcripts(
    texts: Mapping[str, str],
    query: Optional[str],
    restrict: Optional[Iterable[str]] = None,
    show_progress: bool = False,
) -> Optional[dict[str, list[int]]]:
    """
    Search many transcripts at once.

    Args:
        texts: Transcript id -> raw text
        query: Search query; blank means no active filter
        restrict: Optional substrings; only ids containing one are searched
        show_progress: Show a tqdm bar while scanning

    Returns:
        Transcript id -> sorted matching line numbers, only for transcripts
        with at least one match. None when the query is inactive.
    """
    if normalize_query(query) is None:
        return None

    filters = [f.strip().lower() for f in (restrict or []) if f.strip()]
    results = {}
    items = sorted(texts.items())
    for transcript, text in tqdm(items, desc="Searching", unit="file", disable=not show_progress, leave=False):
        if not _included(transcript, filters):
            continue
        lines = match_line_numbers(text, query)
        if lines:
            results[transcript] = sorted(lines)
    return results


def search_results(
    texts: Mapping[str, str],
    query: Optional[str],
    restrict: Optional[Iterable[str]] = None,
) -> list[SearchResult]:
    """Full match records per transcript, sorted by transcript id."""
    filters = [f.strip().lower() for f in (restrict or []) if f.strip()]
    results = []
    for transcript, text in sorted(texts.items()):
        if not _included(transcript, filters):
            continue
        matches = find_matches(text, query)
        if matches:
            results.append(SearchResult(transcript=transcript, matches=matches))
    return results

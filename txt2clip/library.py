"""Locate videos with transcripts and read transcript text from disk."""

import os
from datetime import datetime
from pathlib import Path
from typing import Iterable, Optional

from tqdm import tqdm

from txt2clip.config import Config
from txt2clip.models import TranscriptRecord

TRANSCRIPT_SUFFIX = ".txt"
META_FIELDS = ("length", "source")


def _format_datetime(timestamp: float) -> str:
    return datetime.fromtimestamp(timestamp).strftime("%Y-%m-%d %H:%M:%S")


def transcript_path_for(video_path: Path) -> Path:
    """A transcript sits next to its video with a .txt suffix."""
    return video_path.with_suffix(TRANSCRIPT_SUFFIX)


def transcript_id(video_path: Path, watch_directory: Path) -> str:
    """Path relative to the watch directory, without extension."""
    return video_path.relative_to(watch_directory).with_suffix("").as_posix()


def read_transcript(path: Path) -> str:
    """
    Read transcript text.

    Args:
        path: Either the transcript itself or the video it belongs to

    Returns:
        Raw transcript text
    """
    path = Path(path)
    if path.suffix != TRANSCRIPT_SUFFIX:
        path = transcript_path_for(path)
    if not path.exists():
        raise FileNotFoundError(f"Transcript not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def read_metadata(text: str) -> dict[str, Optional[str]]:
    """Pull 'length:' and 'source:' lines out of a transcript."""
    metadata = {key: None for key in META_FIELDS}
    for line in text.splitlines():
        for key in META_FIELDS:
            prefix = f"{key}:"
            if line.startswith(prefix):
                metadata[key] = line[len(prefix):].strip()
    return metadata


def _is_video(path: Path) -> bool:
    return path.suffix.lower().lstrip(".") in Config.VIDEO_EXTENSIONS


def build_record(video_path: Path) -> TranscriptRecord:
    """Collect metadata for one video file."""
    text_path = transcript_path_for(video_path)
    stat = video_path.stat()
    record = {
        'name': video_path.name,
        'base_name': video_path.stem,
        'full_path': str(video_path),
        'created_at': _format_datetime(stat.st_mtime),
        'has_transcript': text_path.exists(),
        'schema_version': 2,
    }
    if text_path.exists():
        text = read_transcript(text_path)
        record['line_count'] = len(text.splitlines())
        record['last_generated'] = _format_datetime(text_path.stat().st_mtime)
        record.update(read_metadata(text))
    return TranscriptRecord.from_dict(record)


def list_transcripts(
    watch_directories: Optional[Iterable[Path]] = None,
    include_missing: bool = False,
) -> dict[str, TranscriptRecord]:
    """
    Find every video under the watch directories.

    Args:
        watch_directories: Directories to scan (defaults to Config.WATCH_DIRECTORIES)
        include_missing: Also return videos that have no transcript yet

    Returns:
        Transcript id -> record, sorted by id
    """
    directories = [Path(d) for d in (watch_directories or Config.WATCH_DIRECTORIES)]

    videos = []
    for directory in directories:
        if not directory.is_dir():
            print(f"⚠ Watch directory not found: {directory}")
            continue
        for root, _dirs, files in os.walk(directory):
            for filename in files:
                path = Path(root) / filename
                if _is_video(path):
                    videos.append((directory, path))

    records = {}
    for directory, path in tqdm(videos, desc="Scanning", unit="file", leave=False):
        try:
            record = build_record(path)
        except (OSError, ValueError) as e:
            print(f"⚠ Skipping {path}: {e}")
            continue
        if record.has_transcript or include_missing:
            records[transcript_id(path, directory)] = record

    return dict(sorted(records.items()))


def load_transcripts(records: dict[str, TranscriptRecord]) -> dict[str, str]:
    """Read the text of every record that has a transcript."""
    texts = {}
    for name, record in records.items():
        if not record.has_transcript:
            continue
        try:
            texts[name] = read_transcript(Path(record.full_path))
        except (OSError, UnicodeDecodeError) as e:
            print(f"⚠ Could not read transcript for {name}: {e}")
    return texts

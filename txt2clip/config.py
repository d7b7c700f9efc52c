"""Configuration management and environment variable loading."""

import os
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables from .env file (don't override existing env vars)
load_dotenv(override=False)


def _split_paths(value: str) -> list[Path]:
    """Split an os.pathsep-separated list of directories, skipping blanks."""
    return [Path(part).expanduser() for part in value.split(os.pathsep) if part.strip()]


class Config:
    """Application configuration."""

    # Directories scanned for videos with a sibling .txt transcript
    WATCH_DIRECTORIES: list[Path] = _split_paths(os.getenv("WATCH_DIRECTORIES", ""))
    OUT_DIR: Path = Path(os.getenv("OUT_DIR", "./out")).resolve()

    # The web UI searches automatically once the query reaches this length
    MIN_QUERY_LENGTH: int = int(os.getenv("MIN_QUERY_LENGTH", "4"))

    VIDEO_EXTENSIONS: tuple[str, ...] = tuple(
        ext.strip().lower().lstrip(".")
        for ext in os.getenv("VIDEO_EXTENSIONS", "mp4,avi,mov,mkv,wmv,flv,webm,m4v").split(",")
        if ext.strip()
    )

    @classmethod
    def set_watch_directories(cls, value: str) -> None:
        """Replace the watch directories from a raw os.pathsep-separated string."""
        cls.WATCH_DIRECTORIES = _split_paths(value)

    @classmethod
    def validate(cls) -> None:
        """Validate that required configuration is present."""
        if not cls.WATCH_DIRECTORIES:
            raise ValueError(
                "WATCH_DIRECTORIES is required. Please set it in your .env file or environment variables."
            )
        missing = [str(d) for d in cls.WATCH_DIRECTORIES if not d.is_dir()]
        if missing:
            raise ValueError(f"Watch directories not found: {', '.join(missing)}")

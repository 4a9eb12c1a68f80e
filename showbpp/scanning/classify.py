"""
Predicates deciding which files a run should look at.
"""
from pathlib import Path

from .. import config


def is_eligible_video(path: Path) -> bool:
    """True if path is a regular file with a known video extension."""
    path = Path(path)
    return path.suffix.lower() in config.VIDEO_EXTS and path.is_file()


def is_already_marked(path: Path) -> bool:
    """True if the stem ends with a marker suffix left by a previous run."""
    stem = Path(path).stem.upper()
    return any(stem.endswith(suffix.upper()) for suffix in config.SKIPPED_SUFFIXES)


def is_candidate(path: Path) -> bool:
    return is_eligible_video(path) and not is_already_marked(path)

import logging
from pathlib import Path

from ..exceptions import RenameTargetExistsError


def marked_path(path: Path, suffix: str) -> Path:
    """
    "clip.mkv" + "_AV1" -> "clip_AV1.mkv". Without an extension the suffix is
    simply appended.
    """
    path = Path(path)
    return path.with_name(f"{path.stem}{suffix}{path.suffix}")


class FileMarker:
    def __init__(self, dry_run: bool = False):
        self.dry_run = dry_run

    def mark_as_processed(self, path: Path, suffix: str) -> Path:
        """
        Renames path to its marked name and returns the new path.
        Never overwrites: raises RenameTargetExistsError and leaves the
        source untouched if the target is already taken.
        """
        src = Path(path)
        dest = marked_path(src, suffix)

        if dest.exists():
            raise RenameTargetExistsError(src, dest)

        if self.dry_run:
            logging.info(f"[DRY RUN] Rename {src} -> {dest}")
            return dest

        src.rename(dest)
        logging.info(f"Renamed: {src} -> {dest}")
        return dest

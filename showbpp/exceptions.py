"""
Custom exception hierarchy for showbpp.

Per-file errors (probe and rename failures) are caught by the driver so one
bad file never stops the batch.
"""
from pathlib import Path


class ShowBppError(Exception):
    """Base exception for all showbpp errors."""
    pass


class ProbeError(ShowBppError):
    """Raised when stream metadata cannot be obtained for a file."""

    def __init__(self, path: Path, message: str):
        super().__init__(f"{message}: {path}")
        self.path = path


class ProbeInvocationError(ProbeError):
    """Raised when ffprobe cannot be started or exits with a non-zero status."""
    pass


class ProbeParseError(ProbeError):
    """Raised when ffprobe output is not valid text or not the expected JSON schema."""
    pass


class RenameError(ShowBppError):
    """Raised when marking a file by renaming it fails."""
    pass


class RenameTargetExistsError(RenameError):
    """Raised when the marked file name is already taken."""

    def __init__(self, source: Path, target: Path):
        super().__init__(f"Target file already exists: {target}")
        self.source = source
        self.target = target


class NoVideoFilesError(ShowBppError):
    """Raised when discovery finds no eligible video files."""
    pass

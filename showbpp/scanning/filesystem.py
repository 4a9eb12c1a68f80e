import os
import logging
from pathlib import Path
from typing import Iterable, Iterator, List, Tuple, Union

from natsort import natsort_keygen

from .classify import is_candidate

_natural_key = natsort_keygen()


def natural_sort_key(path: Union[str, Path]) -> Tuple[tuple, str]:
    """Sort key comparing embedded digit runs by value, so "ep2" < "ep10"."""
    s = str(path)
    # Raw string breaks ties such as "a01" vs "a1"
    return _natural_key(s), s


def natural_sort(paths: Iterable[Path]) -> List[Path]:
    return sorted(paths, key=natural_sort_key)


class VideoScanner:
    def discover(self, inputs: Iterable[Union[str, Path]]) -> List[Path]:
        """
        Expands files and directories into a flat list of candidate videos.
        Missing inputs are warned about and skipped. The result keeps
        traversal order; callers sort it.
        """
        found: List[Path] = []
        seen = set()

        for raw in inputs:
            path = Path(raw)
            if not path.exists():
                logging.warning(f"Path does not exist: {raw}")
                continue

            if path.is_file():
                candidates: Iterable[Path] = [path] if is_candidate(path) else []
            elif path.is_dir():
                candidates = (p for p in self._iter_files(path) if is_candidate(p))
            else:
                logging.debug(f"Skipping special file: {path}")
                continue

            for candidate in candidates:
                key = os.path.normcase(os.path.abspath(candidate))
                if key in seen:
                    continue
                seen.add(key)
                found.append(candidate)

        logging.debug(f"Discovered {len(found)} candidate video files")
        return found

    def _iter_files(self, root: Path) -> Iterator[Path]:
        """Depth-first walker using os.scandir. Unreadable entries are skipped."""
        stack = [root]
        while stack:
            current = stack.pop()

            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                logging.debug(f"Cannot read directory {current}: {e}")
                continue

            dirs = []
            for e in entries:
                try:
                    if e.is_dir(follow_symlinks=False):
                        dirs.append(Path(e.path))
                    elif e.is_file():
                        yield Path(e.path)
                except OSError as err:
                    logging.debug(f"Cannot stat {e.path}: {err}")

            # Reversed so subdirectories are visited in listing order
            for d in reversed(dirs):
                stack.append(d)

import logging
from pathlib import Path
from typing import Iterable, List, Optional, Union

from tqdm import tqdm

from . import config
from .exceptions import NoVideoFilesError, ProbeError, RenameError
from .metadata.metrics import compute_bpp, get_codec_name, is_optimal_codec, marker_for
from .metadata.probe import FfprobeProber
from .models import FileResult, Outcome, RunSummary, VideoMetric
from .organization.marker import FileMarker
from .reporting import ConsoleReporter
from .scanning.filesystem import VideoScanner, natural_sort


class BppScanApp:
    def __init__(self,
                 prober=None,
                 reporter: Optional[ConsoleReporter] = None,
                 marker: Optional[FileMarker] = None,
                 show_progress: bool = True):
        self.prober = prober or FfprobeProber()
        self.reporter = reporter or ConsoleReporter()
        self.marker = marker or FileMarker()
        self.scanner = VideoScanner()
        self.show_progress = show_progress

    def collect(self, inputs: Iterable[Union[str, Path]]) -> List[Path]:
        """Discovery followed by natural ordering."""
        return natural_sort(self.scanner.discover(inputs))

    def run(self, inputs: Iterable[Union[str, Path]]) -> RunSummary:
        """
        Executes a full pass:
        1. Discover candidate videos
        2. Probe each one (failures are logged and skipped)
        3. Mark already-optimal files, measure the rest

        Raises NoVideoFilesError before any per-file work if nothing was found.
        """
        files = self.collect(inputs)
        if not files:
            raise NoVideoFilesError("No eligible video files found")

        logging.info(f"Found {len(files)} video files")

        summary = RunSummary()
        for path in tqdm(files, desc="Analyzing", unit="file", disable=not self.show_progress):
            summary.add(self.process_file(path))

        logging.info(
            f"Run complete. Measured={summary.count(Outcome.MEASURED)} "
            f"Marked={summary.count(Outcome.ALREADY_OPTIMAL)} Failed={summary.failed}"
        )
        return summary

    def process_file(self, path: Path) -> FileResult:
        self.reporter.processing(path)

        try:
            probe = self.prober.probe(path)
        except ProbeError as e:
            logging.info(f"Probe failed: {e}")
            self.reporter.failed(path, str(e))
            return FileResult(path=path, outcome=Outcome.PROBE_FAILED, error=str(e))

        metric = VideoMetric(codec=(get_codec_name(probe) or config.UNKNOWN_CODEC).upper())

        if is_optimal_codec(metric.codec):
            return self._mark(path, metric)

        # BPP is only reported, nothing acts on it yet
        metric = VideoMetric(codec=metric.codec, bpp=compute_bpp(probe, self.reporter))
        outcome = Outcome.MEASURED if metric.bpp is not None else Outcome.UNMEASURABLE
        return FileResult(path=path, outcome=outcome, codec=metric.codec, bpp=metric.bpp)

    def _mark(self, path: Path, metric: VideoMetric) -> FileResult:
        try:
            dest = self.marker.mark_as_processed(path, marker_for(metric.codec))
        except (RenameError, OSError) as e:
            logging.info(f"Failed to mark {path}: {e}")
            self.reporter.failed(path, str(e))
            return FileResult(path=path, outcome=Outcome.RENAME_FAILED, codec=metric.codec, error=str(e))

        self.reporter.renamed(path, dest, dry_run=self.marker.dry_run)
        return FileResult(path=path, outcome=Outcome.ALREADY_OPTIMAL, codec=metric.codec, renamed_to=dest)

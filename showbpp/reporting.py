import csv
import logging
import sys
from pathlib import Path
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table
from tqdm import tqdm

from .models import Measurement, Outcome, RunSummary, Severity

SEVERITY_STYLES = {
    Severity.LOW: "green",
    Severity.CAUTION: "yellow",
    Severity.HIGH: "red",
}


class _TqdmStream:
    """File-like object routing console output through tqdm.write so progress bars stay intact."""

    def write(self, text: str) -> int:
        tqdm.write(text, end="", file=sys.stdout)
        return len(text)

    def flush(self):
        sys.stdout.flush()


def default_console() -> Console:
    return Console(file=_TqdmStream(), force_terminal=sys.stdout.isatty(), highlight=False)


class ConsoleReporter:
    """
    Human-facing output: per-file progress, colored BPP values, rename
    confirmations and the end-of-run summary.
    """

    def __init__(self, console: Optional[Console] = None):
        self.console = console or default_console()

    def processing(self, path: Path):
        self.console.print(f"Processing: {escape(str(path))}")

    def bpp_line(self, m: Measurement):
        style = SEVERITY_STYLES[Severity.for_bpp(m.bpp)]
        self.console.print(
            f"BPS: {m.bitrate / 1_000_000:.3f}Mbps {int(m.width)}x{int(m.height)} "
            f"{m.fps:.2f}fps ==> BPP: [{style}]{m.bpp * 100:.2f}%[/{style}]"
        )

    def renamed(self, src: Path, dest: Path, dry_run: bool = False):
        prefix = "[DRY RUN] Would rename" if dry_run else "Renamed"
        self.console.print(f"[cyan]{escape(prefix)}:[/cyan] {escape(str(src))} -> {escape(str(dest))}")

    def failed(self, path: Path, reason: str):
        self.console.print(f"[red]Failed to process {escape(str(path))}[/red] ({escape(reason)})")

    def summary(self, summary: RunSummary):
        table = Table(title="showbpp summary", show_header=False)
        table.add_column("Outcome")
        table.add_column("Files", justify="right")
        table.add_row("Measured", str(summary.count(Outcome.MEASURED)))
        table.add_row("No BPP available", str(summary.count(Outcome.UNMEASURABLE)))
        table.add_row("Already optimal (marked)", str(summary.count(Outcome.ALREADY_OPTIMAL)))
        table.add_row("Failed", f"[red]{summary.failed}[/red]" if summary.failed else "0")
        self.console.print(table)

    def bell(self):
        self.console.bell()


class CsvReportWriter:
    """Writes one row per processed file."""

    HEADERS = ["Path", "Outcome", "Codec", "BPP %", "Renamed To", "Notes"]

    def write(self, summary: RunSummary, output_csv: Path):
        output_csv = Path(output_csv)
        output_csv.parent.mkdir(parents=True, exist_ok=True)
        logging.info(f"Writing report -> {output_csv}")

        with output_csv.open("w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(self.HEADERS)
            for r in summary.results:
                writer.writerow([
                    str(r.path),
                    r.outcome.value,
                    r.codec or "",
                    f"{r.bpp * 100:.2f}" if r.bpp is not None else "",
                    str(r.renamed_to) if r.renamed_to else "",
                    r.error or "",
                ])

        logging.info(f"Report complete. {len(summary.results)} files.")

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Dict, List, Optional

from . import config


@dataclass(frozen=True)
class StreamInfo:
    """
    One entry of ffprobe's "streams" list. Every field is optional because
    containers report wildly different subsets.
    """
    codec_type: Optional[str] = None      # video/audio/subtitle/data/...
    codec_name: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    r_frame_rate: Optional[str] = None    # "25/1", "30000/1001" or "30"
    bit_rate: Optional[str] = None
    tags: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class ProbeResult:
    """Parsed ffprobe output for one file."""
    streams: List[StreamInfo] = field(default_factory=list)


@dataclass(frozen=True)
class Measurement:
    """Inputs of the BPP ratio. Only built when all four are strictly positive."""
    bitrate: float      # bits per second
    width: int
    height: int
    fps: float

    @property
    def bpp(self) -> float:
        return self.bitrate / (self.width * self.height * self.fps)


@dataclass(frozen=True)
class VideoMetric:
    codec: str = config.UNKNOWN_CODEC
    bpp: Optional[float] = None


class Severity(Enum):
    LOW = "low"
    CAUTION = "caution"
    HIGH = "high"

    @classmethod
    def for_bpp(cls, bpp: float) -> "Severity":
        if bpp < config.BPP_CAUTION:
            return cls.LOW
        if bpp < config.BPP_HIGH:
            return cls.CAUTION
        return cls.HIGH


class Outcome(Enum):
    ALREADY_OPTIMAL = "already_optimal"
    MEASURED = "measured"
    UNMEASURABLE = "unmeasurable"
    PROBE_FAILED = "probe_failed"
    RENAME_FAILED = "rename_failed"


@dataclass
class FileResult:
    """
    What happened to a single file during a run.
    """
    path: Path
    outcome: Outcome
    codec: Optional[str] = None
    bpp: Optional[float] = None
    renamed_to: Optional[Path] = None
    error: Optional[str] = None


@dataclass
class RunSummary:
    results: List[FileResult] = field(default_factory=list)

    def add(self, result: FileResult):
        self.results.append(result)

    def count(self, outcome: Outcome) -> int:
        return sum(1 for r in self.results if r.outcome == outcome)

    @property
    def failed(self) -> int:
        return self.count(Outcome.PROBE_FAILED) + self.count(Outcome.RENAME_FAILED)

"""
BPP (bits per pixel) computation from parsed ffprobe output.

    BPP = bitrate / (width * height * fps)

A result is only produced when all four inputs are known and strictly
positive. "Unmeasurable" is reported as None, never as 0.
"""
import logging
import math
from typing import Optional

from .. import config
from ..models import Measurement, ProbeResult, StreamInfo


def _to_float(value: Optional[str]) -> Optional[float]:
    """
    Strict number parsing: float() alone also accepts surrounding whitespace
    and digit separators ("1_000"), which ffprobe never prints.
    """
    if value is None or value != value.strip() or "_" in value:
        return None
    try:
        return float(value)
    except ValueError:
        return None


def parse_frame_rate(expr: Optional[str]) -> Optional[float]:
    """Parses "30000/1001" style fractions or bare numbers like "25"."""
    if expr is None:
        return None

    num, sep, den = expr.partition('/')
    if not sep:
        return _to_float(expr)

    n, d = _to_float(num), _to_float(den)
    if n is None or d is None or d == 0:
        return None
    return n / d


def _is_video(stream: StreamInfo) -> bool:
    return stream.codec_type == "video"


def select_video_stream(probe: ProbeResult) -> Optional[StreamInfo]:
    """First video stream that reports both width and height."""
    for stream in probe.streams:
        if _is_video(stream) and stream.width is not None and stream.height is not None:
            return stream
    return None


def get_codec_name(probe: ProbeResult) -> Optional[str]:
    """Codec of the first video stream, dimensions or not."""
    for stream in probe.streams:
        if _is_video(stream):
            return stream.codec_name
    return None


def stream_bitrate(stream: StreamInfo) -> float:
    """
    bit_rate field first, then the BPS tag (Matroska), else 0.
    """
    bitrate = _to_float(stream.bit_rate)
    if bitrate is None:
        bitrate = _to_float(stream.tags.get(config.BPS_TAG))
    return bitrate if bitrate is not None else 0.0


def measure(probe: ProbeResult) -> Optional[Measurement]:
    stream = select_video_stream(probe)
    if stream is None:
        return None

    fps = parse_frame_rate(stream.r_frame_rate)
    if fps is None:
        return None

    bitrate = stream_bitrate(stream)
    width, height = stream.width, stream.height

    values = (width, height, fps, bitrate)
    if any(not math.isfinite(v) or v <= 0 for v in values):
        logging.debug(f"Unmeasurable stream: bitrate={bitrate} size={width}x{height} fps={fps}")
        return None

    return Measurement(bitrate=bitrate, width=width, height=height, fps=fps)


def compute_bpp(probe: ProbeResult, reporter=None) -> Optional[float]:
    """
    Returns the BPP ratio, or None when it cannot be determined.
    If a reporter is given, a human-readable line is emitted for measurable files.
    """
    m = measure(probe)
    if m is None:
        return None

    if reporter is not None:
        reporter.bpp_line(m)
    return m.bpp


def is_optimal_codec(codec: Optional[str]) -> bool:
    return codec is not None and codec.upper() in config.OPTIMAL_CODECS


def marker_for(codec: str) -> str:
    return config.OPTIMAL_CODECS[codec.upper()]

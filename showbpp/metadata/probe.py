import json
import logging
import subprocess
from pathlib import Path
from typing import Any, Dict, Optional, Sequence

from .. import config
from ..exceptions import ProbeInvocationError, ProbeParseError
from ..models import ProbeResult, StreamInfo

_STRING_FIELDS = ("codec_type", "codec_name", "r_frame_rate", "bit_rate")
_DIMENSION_FIELDS = ("width", "height")


class FfprobeProber:
    """
    Wraps the 'ffprobe' command line utility.
    Must be installed and on the system PATH (or configured explicitly).

    Anything exposing probe(path) -> ProbeResult can stand in for this class,
    which is how the tests avoid needing ffprobe.
    """

    def __init__(self, executable: Optional[str] = None, timeout: Optional[float] = None):
        self.executable = executable or config.FFPROBE_BIN
        self.timeout = timeout

    def build_command(self, path: Path) -> Sequence[str]:
        return [self.executable, *config.FFPROBE_ARGS, str(path)]

    def probe(self, path: Path) -> ProbeResult:
        cmd = self.build_command(path)
        logging.debug(f"Running: {' '.join(cmd)}")

        try:
            proc = subprocess.run(
                cmd,
                stdout=subprocess.PIPE,
                stderr=subprocess.DEVNULL,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise ProbeInvocationError(path, f"ffprobe not found ({self.executable})") from e
        except subprocess.TimeoutExpired as e:
            raise ProbeInvocationError(path, f"ffprobe timed out after {self.timeout}s") from e
        except OSError as e:
            raise ProbeInvocationError(path, f"Failed to run ffprobe ({e})") from e

        if proc.returncode != 0:
            raise ProbeInvocationError(path, f"ffprobe exited with status {proc.returncode}")

        try:
            text = proc.stdout.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ProbeParseError(path, "ffprobe output is not valid UTF-8") from e

        try:
            return parse_probe_output(text)
        except ValueError as e:
            raise ProbeParseError(path, f"Unexpected ffprobe output ({e})") from e


def parse_probe_output(text: str) -> ProbeResult:
    """
    Parses the JSON printed by `ffprobe -print_format json -show_streams`.
    Raises ValueError when the payload does not match the expected schema.
    Unknown keys are ignored.
    """
    data = json.loads(text)  # json.JSONDecodeError is a ValueError
    if not isinstance(data, dict):
        raise ValueError("top level is not an object")

    streams = data.get("streams")
    if not isinstance(streams, list):
        raise ValueError("missing 'streams' list")

    return ProbeResult(streams=[_parse_stream(s, i) for i, s in enumerate(streams)])


def _parse_stream(raw: Any, index: int) -> StreamInfo:
    if not isinstance(raw, dict):
        raise ValueError(f"stream {index} is not an object")

    values: Dict[str, Any] = {}
    for key in _STRING_FIELDS:
        val = raw.get(key)
        if val is not None and not isinstance(val, str):
            raise ValueError(f"stream {index}: '{key}' is not a string")
        values[key] = val

    for key in _DIMENSION_FIELDS:
        val = raw.get(key)
        # bool is an int subclass; ffprobe never emits it for dimensions
        if val is not None and (isinstance(val, bool) or not isinstance(val, int) or val < 0):
            raise ValueError(f"stream {index}: '{key}' is not a non-negative integer")
        values[key] = val

    tags = raw.get("tags")
    if tags is None:
        tags = {}
    elif not isinstance(tags, dict) or not all(isinstance(v, str) for v in tags.values()):
        raise ValueError(f"stream {index}: 'tags' is not a string map")

    return StreamInfo(tags=dict(tags), **values)

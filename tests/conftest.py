import io
import json

import pytest
from rich.console import Console

from showbpp.exceptions import ProbeInvocationError
from showbpp.metadata.probe import parse_probe_output
from showbpp.reporting import ConsoleReporter


def ffprobe_json(*streams, format_section=None) -> str:
    """Builds text shaped like `ffprobe -print_format json` output."""
    data = {"streams": list(streams)}
    if format_section is not None:
        data["format"] = format_section
    return json.dumps(data)


def video_stream(codec="h264", width=1920, height=1080, rate="25/1", bit_rate="8000000", **extra):
    s = {"codec_type": "video", "codec_name": codec, "width": width, "height": height, "r_frame_rate": rate}
    if bit_rate is not None:
        s["bit_rate"] = bit_rate
    s.update(extra)
    return s


AUDIO_STREAM = {"codec_type": "audio", "codec_name": "aac", "bit_rate": "128000"}


class FakeProber:
    """Returns canned ProbeResults keyed by file name; unknown names fail like a broken ffprobe."""

    def __init__(self, outputs):
        self.outputs = outputs
        self.calls = []

    def probe(self, path):
        self.calls.append(path)
        text = self.outputs.get(path.name)
        if text is None:
            raise ProbeInvocationError(path, "ffprobe exited with status 1")
        return parse_probe_output(text)


@pytest.fixture
def console_buffer():
    return io.StringIO()


@pytest.fixture
def reporter(console_buffer):
    """ConsoleReporter writing plain text into a buffer."""
    console = Console(file=console_buffer, force_terminal=False, color_system=None, width=200)
    return ConsoleReporter(console=console)


@pytest.fixture
def make_video(tmp_path):
    def _make(rel, data=b"\x00"):
        p = tmp_path / rel
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_bytes(data)
        return p
    return _make

import csv
from pathlib import Path

import pytest

from showbpp import config, main as main_module
from showbpp.exceptions import ProbeInvocationError
from showbpp.metadata.probe import FfprobeProber, parse_probe_output

from conftest import ffprobe_json, video_stream


@pytest.fixture
def fake_ffprobe(monkeypatch):
    outputs = {
        "good.mp4": ffprobe_json(video_stream(bit_rate="2000000")),
        "new_AV1_source.mkv": ffprobe_json(video_stream(codec="av1")),
    }

    def fake_probe(self, path):
        return parse_probe_output(outputs[path.name])

    monkeypatch.setattr(FfprobeProber, "probe", fake_probe)
    return outputs


def test_no_arguments_prints_usage(monkeypatch, capsys):
    slept = []
    monkeypatch.setattr(main_module.time, "sleep", slept.append)

    assert main_module.main([]) == config.EXIT_FAILURE

    assert "at least one video file" in capsys.readouterr().err
    assert slept == [config.USAGE_DELAY_SEC]


def test_no_arguments_no_pause_skips_delay(monkeypatch):
    monkeypatch.setattr(main_module.time, "sleep", lambda s: pytest.fail("should not sleep"))
    assert main_module.main(["--no-pause"]) == config.EXIT_FAILURE


def test_no_video_files_exit_code(tmp_path):
    (tmp_path / "notes.txt").write_text("x")
    assert main_module.main([str(tmp_path), "--no-pause", "--no-progress"]) == config.EXIT_FAILURE


def test_full_run_with_report(tmp_path, make_video, fake_ffprobe, capsys):
    make_video("lib/good.mp4")
    av1 = make_video("lib/new_AV1_source.mkv")
    report = tmp_path / "report.csv"

    code = main_module.main([
        str(tmp_path / "lib"), "--no-pause", "--no-progress", "--report-csv", str(report),
    ])

    assert code == config.EXIT_OK
    assert av1.with_name("new_AV1_source_AV1.mkv").exists()

    out = capsys.readouterr().out
    assert "BPP: 3.86%" in out

    with report.open(encoding="utf-8") as f:
        rows = {Path(r["Path"]).name: r for r in csv.DictReader(f)}
    assert rows["good.mp4"]["Outcome"] == "measured"
    assert rows["good.mp4"]["BPP %"] == "3.86"
    assert rows["new_AV1_source.mkv"]["Outcome"] == "already_optimal"


def test_probe_failure_still_exits_ok(tmp_path, make_video, monkeypatch, capsys):
    make_video("lib/broken.mp4")

    def failing_probe(self, path):
        raise ProbeInvocationError(path, "ffprobe exited with status 1")

    monkeypatch.setattr(FfprobeProber, "probe", failing_probe)

    assert main_module.main([str(tmp_path / "lib"), "--no-pause", "--no-progress"]) == config.EXIT_OK
    assert "Failed to process" in capsys.readouterr().out


def test_report_csv_into_missing_directory(tmp_path, make_video, fake_ffprobe):
    make_video("lib/good.mp4")
    report = tmp_path / "reports" / "nested" / "run.csv"

    code = main_module.main([
        str(tmp_path / "lib"), "--no-pause", "--no-progress", "--report-csv", str(report),
    ])

    assert code == config.EXIT_OK
    assert report.exists()


def test_unwritable_report_does_not_fail_run(tmp_path, make_video, fake_ffprobe):
    make_video("lib/good.mp4")
    blocker = tmp_path / "blocker"
    blocker.write_text("a file where a directory is expected")

    code = main_module.main([
        str(tmp_path / "lib"), "--no-pause", "--no-progress", "--report-csv", str(blocker / "run.csv"),
    ])

    assert code == config.EXIT_OK


def test_end_of_run_waits_for_any_key(tmp_path, make_video, fake_ffprobe, monkeypatch):
    make_video("lib/good.mp4")
    pauses = []
    monkeypatch.setattr(main_module.click, "pause", lambda info=None, **kw: pauses.append(info))

    assert main_module.main([str(tmp_path / "lib"), "--no-progress"]) == config.EXIT_OK
    assert pauses == ["Press any key to exit..."]


def test_ctrl_c_during_usage_delay(monkeypatch):
    def interrupted(seconds):
        raise KeyboardInterrupt

    monkeypatch.setattr(main_module.time, "sleep", interrupted)

    assert main_module.main([]) == config.EXIT_INTERRUPTED

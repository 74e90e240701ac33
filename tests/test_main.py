"""
Command Line Tests
==================

Video analysis core and CLI wiring, without decoding real video files.
"""

import json
from fractions import Fraction

import pytest

from inverse_telecine import main as cli
from inverse_telecine.detection import CadenceDetector30, CadenceDetector60


class TestFrameInterval:
    """Tests for frame_interval."""

    def test_integer_rate(self):
        assert cli.frame_interval(30.0).value == Fraction(1, 30)

    def test_ntsc_rate(self):
        assert cli.frame_interval(30000 / 1001).value == Fraction(1001, 30000)
        assert cli.frame_interval(60000 / 1001).value == Fraction(1001, 60000)

    def test_invalid_rate(self):
        with pytest.raises(ValueError):
            cli.frame_interval(0.0)


class TestAnalyzeFrames:
    """Tests for analyze_frames."""

    def test_60p_summary(self, make_sequence, content_groups):
        summary = cli.analyze_frames(make_sequence(content_groups(13)), CadenceDetector60())
        assert summary["frames_received"] == 39
        assert summary["frames_delivered"] == 19
        assert summary["duplicates_dropped"] == 20
        assert summary["final_phase"] == "CONTENT"
        assert summary["locked"] is True

    def test_30p_summary(self, make_sequence, content_cycles):
        frames = make_sequence(content_cycles(10), fps=30)
        summary = cli.analyze_frames(frames, CadenceDetector30(), max_frame_rate=120)
        assert summary["duplicates_dropped"] == 5
        assert summary["frames_delivered"] == 45

    def test_irregular_content(self, make_sequence):
        summary = cli.analyze_frames(make_sequence(range(50)), CadenceDetector60())
        assert summary["frames_delivered"] == 50
        assert summary["final_phase"] == "DETECTING"
        assert summary["locked"] is False


class TestMain:
    """Tests for the CLI entry point."""

    def test_prints_summary(self, monkeypatch, capsys, make_sequence, content_groups):
        frames = make_sequence(content_groups(13))
        monkeypatch.setattr(cli, "iter_video_frames", lambda path, alignment: iter(frames))

        exit_code = cli.main(["capture.mp4", "--mode", "60p", "--max-frame-rate", "0"])

        assert exit_code == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["mode"] == "60p"
        assert summary["duplicates_dropped"] == 20

    def test_unreadable_video(self, monkeypatch):
        def broken(path, alignment):
            raise OSError(f"Cannot open video: {path}")
            yield

        monkeypatch.setattr(cli, "iter_video_frames", broken)
        assert cli.main(["missing.mp4"]) == 1

    def test_rejects_unknown_mode(self):
        with pytest.raises(SystemExit):
            cli.main(["capture.mp4", "--mode", "24p"])


def _write_clip(path, contents, fps=60, width=64, height=48):
    """Write an MJPG clip with one frame per content id; skip if no encoder."""
    import cv2
    import numpy as np

    writer = cv2.VideoWriter(str(path), cv2.VideoWriter_fourcc(*"MJPG"), fps, (width, height))
    if not writer.isOpened():
        pytest.skip("MJPG encoder not available")
    try:
        for content in contents:
            rng = np.random.default_rng(content)
            writer.write(rng.integers(0, 256, size=(height, width, 3), dtype=np.uint8))
    finally:
        writer.release()


class TestVideoDecode:
    """Decoding real clips through OpenCV."""

    def test_iter_video_frames(self, tmp_path, content_groups):
        path = tmp_path / "clip.avi"
        _write_clip(path, content_groups(4))

        frames = list(cli.iter_video_frames(str(path)))

        assert len(frames) == 12
        interval = cli.frame_interval(60.0)
        for index, frame in enumerate(frames):
            assert frame.timestamp.value == interval.value * index
            assert (frame.width, frame.height) == (64, 48)

    def test_decoded_duplicates_compare_equal(self, tmp_path):
        from inverse_telecine.detection import compare_frames

        path = tmp_path / "clip.avi"
        _write_clip(path, [1, 1, 2])
        first, second, third = cli.iter_video_frames(str(path))
        assert compare_frames(first, second)
        assert not compare_frames(second, third)

    def test_missing_file(self, tmp_path):
        with pytest.raises(OSError):
            list(cli.iter_video_frames(str(tmp_path / "missing.avi")))

    def test_main_on_clip(self, tmp_path, capsys, monkeypatch, content_groups):
        monkeypatch.chdir(tmp_path)
        path = tmp_path / "clip.avi"
        _write_clip(path, content_groups(13))

        exit_code = cli.main([str(path), "--mode", "60p", "--max-frame-rate", "0"])

        assert exit_code == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["frames_received"] == 39
        assert summary["duplicates_dropped"] == 20
        assert summary["frames_delivered"] == 19


class TestConfigErrors:
    """Configuration problems are reported, not raised."""

    def test_explicit_config_bypasses_bad_local_file(self, tmp_path, monkeypatch, capsys, make_sequence, content_groups):
        monkeypatch.chdir(tmp_path)
        monkeypatch.delenv("IVTC_CONFIG_PATH", raising=False)
        (tmp_path / "config.yaml").write_text("detector:\n  mode: '45p'\n")
        good = tmp_path / "good.yaml"
        good.write_text("detector:\n  mode: '60p'\n")
        frames = make_sequence(content_groups(4))
        monkeypatch.setattr(cli, "iter_video_frames", lambda path, alignment: iter(frames))

        assert cli.main(["capture.mp4", "--config", str(good)]) == 0
        assert json.loads(capsys.readouterr().out)["frames_received"] == 12

    def test_invalid_config_exits_with_error(self, tmp_path, monkeypatch):
        bad = tmp_path / "bad.yaml"
        bad.write_text("detector:\n  mode: '45p'\n")
        assert cli.main(["capture.mp4", "--config", str(bad)]) == 1

    def test_malformed_env_override(self, monkeypatch):
        monkeypatch.setenv("IVTC_MAX_FRAME_RATE", "fast")
        assert cli.main(["capture.mp4"]) == 1

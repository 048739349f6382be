"""Tests for the FFmpeg video encoder."""

import shutil
from pathlib import Path

import numpy as np
import pytest

from lyriscope.io.encoder import build_ffmpeg_command, encode_video

requires_ffmpeg = pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")


def _solid_frames(n: int, width: int, height: int, color=(128, 64, 200)):
    """Generate N solid-color frames."""
    frame = np.full((height, width, 3), color, dtype=np.uint8)
    for _ in range(n):
        yield frame.copy()


class TestBuildCommand:
    def test_video_only(self):
        cmd = build_ffmpeg_command(Path("out.mp4"), 320, 240, 30, "fast")

        assert cmd[0] == "ffmpeg"
        assert cmd[cmd.index("-s") + 1] == "320x240"
        assert cmd[cmd.index("-preset") + 1] == "ultrafast"
        assert "-c:a" not in cmd
        assert "-t" not in cmd
        assert cmd[-1] == "out.mp4"

    def test_with_audio_and_duration(self):
        cmd = build_ffmpeg_command(Path("out.mp4"), 320, 240, 30, "high", Path("song.wav"), 2.5)

        assert cmd.count("-i") == 2
        assert "song.wav" in cmd
        assert "-shortest" in cmd
        assert cmd[cmd.index("-t") + 1] == "2.500"
        assert cmd[cmd.index("-crf") + 1] == "18"

    def test_unknown_quality_falls_back_to_high(self):
        cmd = build_ffmpeg_command(Path("out.mp4"), 16, 16, 30, "ludicrous")

        assert cmd[cmd.index("-preset") + 1] == "slow"


@requires_ffmpeg
class TestEncoder:
    def test_produces_mp4(self, tmp_path):
        output = tmp_path / "test_output.mp4"

        result = encode_video(
            frame_iterator=_solid_frames(30, 320, 240),
            output_path=output,
            width=320,
            height=240,
            fps=30,
            quality="fast",
        )

        assert result.exists()
        assert result.stat().st_size > 0

    def test_muxes_audio(self, tmp_path, temp_audio_file):
        output = tmp_path / "with_audio.mp4"

        result = encode_video(
            frame_iterator=_solid_frames(30, 160, 120),
            output_path=output,
            width=160,
            height=120,
            fps=30,
            quality="fast",
            audio_path=temp_audio_file,
            duration=1.0,
        )

        assert result.stat().st_size > 0

    def test_progress_callback(self, tmp_path):
        progress = []
        encode_video(
            frame_iterator=_solid_frames(15, 160, 120),
            output_path=tmp_path / "progress.mp4",
            width=160,
            height=120,
            fps=30,
            quality="fast",
            total_frames=15,
            progress_callback=lambda cur, total: progress.append((cur, total)),
        )

        assert len(progress) == 15
        assert progress[-1] == (15, 15)

    def test_bad_frame_size_raises(self, tmp_path):
        with pytest.raises(RuntimeError, match="ffmpeg exited"):
            encode_video(
                frame_iterator=_solid_frames(5, 10, 10),
                output_path=tmp_path / "bad.mp4",
                width=-5,
                height=240,
                fps=30,
                quality="fast",
            )

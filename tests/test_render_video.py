"""Tests for offline lyric video rendering."""

import shutil

import numpy as np
import pytest

from lyriscope.config import VisualConfig
from lyriscope.render_video import render_frames, render_video


@pytest.fixture
def small_config():
    return VisualConfig(width=160, height=90, fps=10, density=12, blur=0, lyric_size=20)


class TestRenderFrames:
    def test_frame_count_and_shape(self, small_config, pure_sine, sample_lrc):
        frames = list(render_frames(small_config, sample_lrc, pure_sine, duration=0.5, seed=1))

        assert len(frames) == 5
        assert frames[0].shape == (90, 160, 3)
        assert frames[0].dtype == np.uint8

    def test_frames_animate(self, small_config, pure_sine, sample_lrc):
        frames = list(render_frames(small_config, sample_lrc, pure_sine, duration=0.3, seed=1))

        assert not np.array_equal(frames[0], frames[-1])

    def test_without_signal(self, small_config):
        frames = list(render_frames(small_config, "", None, duration=0.2, seed=1))

        assert len(frames) == 2

    def test_seeded_output_is_reproducible(self, small_config, pure_sine):
        a = list(render_frames(small_config, "", pure_sine, duration=0.2, seed=5))
        b = list(render_frames(small_config, "", pure_sine, duration=0.2, seed=5))

        np.testing.assert_array_equal(a[-1], b[-1])

    def test_blurred_backdrop(self, pure_sine):
        config = VisualConfig(width=160, height=90, fps=10, density=12, blur=16, lyric_size=20)
        frames = list(render_frames(config, "", pure_sine, duration=0.1, seed=1))

        assert frames[0].shape == (90, 160, 3)


def test_undecodable_audio_needs_max_duration(tmp_path, small_config):
    bogus = tmp_path / "not_audio.wav"
    bogus.write_text("definitely not audio")

    with pytest.raises(RuntimeError, match="render length"):
        render_video(bogus, "", tmp_path / "out.mp4", config=small_config)


@pytest.mark.skipif(shutil.which("ffmpeg") is None, reason="ffmpeg not installed")
def test_render_video(tmp_path, temp_audio_file, small_config, sample_lrc):
    output = tmp_path / "lyrics.mp4"
    progress = []

    result = render_video(
        temp_audio_file,
        sample_lrc,
        output,
        config=small_config,
        quality="fast",
        max_duration=1.0,
        seed=2,
        progress_callback=lambda cur, total: progress.append(cur),
    )

    assert result["n_frames"] == 10
    assert result["duration"] == pytest.approx(1.0)
    assert output.exists() and output.stat().st_size > 0
    assert progress[-1] == 10

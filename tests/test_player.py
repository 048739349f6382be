"""Tests for the pygame.mixer playback clock."""

import pygame
import pytest

from lyriscope.core.energy import EnergyExtractor
from lyriscope.player import MixerPlayback
from lyriscope.runtime.loops import EnergySampler
from lyriscope.runtime.scheduler import FrameScheduler


@pytest.fixture
def playback(temp_audio_file):
    playback = MixerPlayback(temp_audio_file, duration=2.0)
    if not playback.loaded:
        pytest.skip("pygame.mixer unavailable")
    yield playback
    playback.stop()


class TestMixerPlayback:
    def test_starts_paused_at_zero(self, playback):
        assert not playback.playing
        assert playback.current_time == 0.0
        assert playback.duration == 2.0

    def test_seek_tracked_as_offset(self, playback):
        playback.play()
        playback.seek(1.0)

        assert playback.current_time == pytest.approx(1.0, abs=0.25)
        assert playback.playing

    def test_seek_clamps_to_track(self, playback):
        playback.play()
        playback.seek(-3.0)
        assert playback.current_time == pytest.approx(0.0, abs=0.25)

        playback.seek(50.0)
        assert playback.current_time <= 2.25

    def test_seek_while_paused_stays_paused(self, playback):
        playback.play()
        playback.pause()
        playback.seek(0.5)

        assert not playback.playing
        assert playback.current_time == pytest.approx(0.5, abs=0.25)

    def test_toggle(self, playback):
        playback.toggle()
        assert playback.playing

        playback.toggle()
        assert not playback.playing

        playback.toggle()
        assert playback.playing

    def test_play_listener(self, playback):
        events = []
        playback.add_play_listener(lambda: events.append("play"))
        playback.play()
        playback.pause()
        playback.play()

        assert events == ["play", "play"]

    def test_track_end_stops_playing(self, playback):
        playback.play()
        pygame.mixer.music.stop()

        assert not playback.playing

    def test_toggle_after_track_end_restarts(self, playback):
        playback.play()
        playback.seek(1.5)
        pygame.mixer.music.stop()
        assert not playback.playing

        playback.toggle()
        assert playback.playing
        assert playback.current_time < 0.5

    def test_sampler_stops_at_track_end(self, playback, pure_sine):
        scheduler = FrameScheduler()
        sampler = EnergySampler(scheduler, playback, EnergyExtractor(pure_sine))
        playback.play()
        assert sampler.running

        pygame.mixer.music.stop()
        scheduler.run_frame(0.0)

        assert not sampler.running
        assert scheduler.pending == 0


def test_unloadable_file_is_silent(tmp_path):
    bogus = tmp_path / "not_audio.wav"
    bogus.write_text("definitely not audio")
    playback = MixerPlayback(bogus)

    assert not playback.loaded
    playback.play()
    playback.seek(3.0)
    assert not playback.playing
    assert playback.current_time == 0.0

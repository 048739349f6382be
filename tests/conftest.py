"""Pytest configuration and shared fixtures."""

import os

# Headless pygame for every test that touches a surface or font
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import numpy as np
import pygame
import pytest

from lyriscope.core.audio import AudioSignal

# Default sample rate for test audio
TEST_SR = 22050

SAMPLE_LRC = """[ar:Test Artist]
[ti:Test Song]
[00:01.00] first line
[00:03.50] second line
[00:06.00][00:10.00] chorus line
[00:08.25] bridge line
"""

SAMPLE_PLAIN = """first line

second line
   third line
fourth line
"""


@pytest.fixture(scope="session", autouse=True)
def pygame_headless():
    """Initialise pygame once for the test session."""
    pygame.init()
    yield
    pygame.quit()


@pytest.fixture
def sample_rate() -> int:
    """Default sample rate for tests."""
    return TEST_SR


@pytest.fixture
def sample_lrc() -> str:
    return SAMPLE_LRC


@pytest.fixture
def sample_plain() -> str:
    return SAMPLE_PLAIN


@pytest.fixture
def pure_sine(sample_rate: int) -> AudioSignal:
    """
    A 2 second 440Hz sine wave (A4 note).

    Returns:
        AudioSignal at the test sample rate.
    """
    duration = 2.0
    t = np.linspace(0, duration, int(sample_rate * duration), endpoint=False)
    y = 0.5 * np.sin(2 * np.pi * 440.0 * t)
    return AudioSignal(samples=y.astype(np.float32), sample_rate=sample_rate)


@pytest.fixture
def silence(sample_rate: int) -> AudioSignal:
    return AudioSignal(samples=np.zeros(sample_rate, dtype=np.float32), sample_rate=sample_rate)


@pytest.fixture
def temp_audio_file(tmp_path, pure_sine):
    """Write the sine to a temporary wav file for file I/O tests."""
    import soundfile as sf

    audio_path = tmp_path / "test_audio.wav"
    sf.write(audio_path, pure_sine.samples, pure_sine.sample_rate)
    return audio_path


@pytest.fixture
def surface():
    """Small offscreen canvas."""
    return pygame.Surface((160, 90), 0, 32)

"""
Decoded audio signal used by the spectrum analyser.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Union

import librosa
import numpy as np


@dataclass
class AudioSignal:
    """Mono samples plus their rate."""

    samples: np.ndarray
    sample_rate: int

    @property
    def duration(self) -> float:
        return len(self.samples) / float(self.sample_rate)

    def window_ending_at(self, time: float, size: int) -> np.ndarray:
        """
        The ``size`` samples leading up to ``time``, zero-padded at the
        start of the track and beyond its end.
        """
        out = np.zeros(size, dtype=np.float32)
        end = int(time * self.sample_rate)
        start = end - size
        lo = max(0, start)
        hi = min(len(self.samples), end)
        if hi > lo:
            out[lo - start:hi - start] = self.samples[lo:hi]
        return out


def load_audio(
    audio_path: Union[str, Path],
    sr: int | None = 22050,
) -> AudioSignal:
    """
    Load and downmix an audio file.

    Args:
        audio_path: Path to audio file (wav, mp3, flac, ogg).
        sr: Target sample rate. None preserves the original.

    Returns:
        AudioSignal with float32 mono samples.
    """
    y, sr_out = librosa.load(audio_path, sr=sr, mono=True)
    return AudioSignal(samples=y.astype(np.float32), sample_rate=int(sr_out))

"""
Byte-scaled frequency analysis.

Produces the same kind of frequency-magnitude snapshot a browser analyser
node hands out: ``fft_size // 2`` bins of unsigned bytes, smoothed over
time and mapped from a decibel window onto 0-255.
"""

import numpy as np

from lyriscope.core.audio import AudioSignal


class SpectrumAnalyser:
    """
    Frequency-magnitude snapshots of an AudioSignal at a playback position.

    Each call to ``get_byte_frequency_data`` windows the most recent
    ``fft_size`` samples, blends the magnitudes with the previous call
    (``smoothing``) and converts the result to bytes.
    """

    def __init__(
        self,
        signal: AudioSignal,
        fft_size: int = 512,
        smoothing: float = 0.8,
        min_decibels: float = -100.0,
        max_decibels: float = -30.0,
    ):
        """
        Initialize the analyser.

        Args:
            signal: Decoded audio to analyse.
            fft_size: Transform size; yields fft_size // 2 bins.
            smoothing: Time smoothing constant in [0, 1).
            min_decibels: Level mapped to byte 0.
            max_decibels: Level mapped to byte 255.
        """
        self.signal = signal
        self.fft_size = fft_size
        self.smoothing = smoothing
        self.min_decibels = min_decibels
        self.max_decibels = max_decibels

        self._window = np.blackman(fft_size).astype(np.float32)
        self._magnitudes = np.zeros(self.bin_count, dtype=np.float32)

    @property
    def bin_count(self) -> int:
        return self.fft_size // 2

    def reset(self):
        """Forget the smoothing history."""
        self._magnitudes.fill(0.0)

    def _update_magnitudes(self, time: float):
        frame = self.signal.window_ending_at(time, self.fft_size) * self._window
        spectrum = np.abs(np.fft.rfft(frame))[: self.bin_count] / self.fft_size
        s = self.smoothing
        self._magnitudes = s * self._magnitudes + (1.0 - s) * spectrum

    def get_byte_frequency_data(self, time: float, out: np.ndarray | None = None) -> np.ndarray:
        """
        Fill ``out`` (or a new array) with the byte spectrum at ``time``.

        Args:
            time: Playback position in seconds.
            out: Optional uint8 buffer of length ``bin_count`` to fill in place.

        Returns:
            The filled uint8 array.
        """
        self._update_magnitudes(time)

        db = 20.0 * np.log10(np.maximum(self._magnitudes, 1e-12))
        span = self.max_decibels - self.min_decibels
        scaled = np.clip((db - self.min_decibels) / span * 255.0, 0, 255)

        if out is None:
            out = np.empty(self.bin_count, dtype=np.uint8)
        out[:] = scaled.astype(np.uint8)
        return out

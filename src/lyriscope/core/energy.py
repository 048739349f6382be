"""
Audio energy extraction.

Reduces a frequency-magnitude snapshot to one loudness proxy in [0, 1].
The analysis graph behind it is built lazily on the first play and exactly
once; until then the energy holds at a baseline so the visuals never look
inert.
"""

import logging
from dataclasses import dataclass

import numpy as np

from lyriscope.core.audio import AudioSignal
from lyriscope.core.spectrum import SpectrumAnalyser

logger = logging.getLogger(__name__)

BASELINE_ENERGY = 0.1


def energy_from_bins(bins: np.ndarray) -> float:
    """Mean of byte-range bins scaled to [0, 1]."""
    if len(bins) == 0:
        return BASELINE_ENERGY
    value = float(np.mean(bins)) / 255.0
    return min(1.0, max(0.0, value))


@dataclass
class AnalysisGraph:
    """Analyser bound to a signal plus the bin buffer it writes into."""

    analyser: SpectrumAnalyser
    bins: np.ndarray


class EnergyExtractor:
    """
    Owns the analysis graph and exposes the current energy.

    ``ensure_graph`` is idempotent: repeated play events reuse the graph
    built on the first one. ``teardown`` releases it.
    """

    def __init__(
        self,
        signal: AudioSignal | None = None,
        fft_size: int = 512,
        baseline: float = BASELINE_ENERGY,
    ):
        self.signal = signal
        self.fft_size = fft_size
        self.baseline = baseline
        self.graph: AnalysisGraph | None = None
        self.graphs_built = 0

    def attach(self, signal: AudioSignal | None):
        """Swap the signal source; the graph is rebuilt on the next play."""
        self.teardown()
        self.signal = signal

    def ensure_graph(self) -> AnalysisGraph | None:
        if self.graph is not None:
            return self.graph
        if self.signal is None:
            logger.debug("No audio signal attached; energy stays at baseline")
            return None

        analyser = SpectrumAnalyser(self.signal, fft_size=self.fft_size)
        self.graph = AnalysisGraph(
            analyser=analyser,
            bins=np.zeros(analyser.bin_count, dtype=np.uint8),
        )
        self.graphs_built += 1
        logger.debug("Built analysis graph (%d bins)", analyser.bin_count)
        return self.graph

    def sample(self, time: float):
        """Refresh the bin buffer from the analyser at ``time``."""
        if self.graph is None:
            return
        self.graph.analyser.get_byte_frequency_data(time, out=self.graph.bins)

    def energy(self) -> float:
        if self.graph is None:
            return self.baseline
        return energy_from_bins(self.graph.bins)

    def teardown(self):
        if self.graph is not None:
            logger.debug("Tearing down analysis graph")
        self.graph = None

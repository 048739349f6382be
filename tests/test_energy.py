"""Tests for the spectrum analyser and energy extraction."""

import numpy as np
import pytest

from lyriscope.core.energy import BASELINE_ENERGY, EnergyExtractor, energy_from_bins
from lyriscope.core.spectrum import SpectrumAnalyser


class TestEnergyFromBins:
    def test_all_zero(self):
        assert energy_from_bins(np.zeros(256, dtype=np.uint8)) == 0.0

    def test_all_max(self):
        assert energy_from_bins(np.full(256, 255, dtype=np.uint8)) == 1.0

    def test_half(self):
        bins = np.array([0, 255] * 128, dtype=np.uint8)
        assert energy_from_bins(bins) == pytest.approx(0.5)

    def test_empty_is_baseline(self):
        assert energy_from_bins(np.zeros(0, dtype=np.uint8)) == BASELINE_ENERGY


class TestSpectrumAnalyser:
    """Tests for byte-scaled frequency data."""

    def test_bin_count(self, pure_sine):
        analyser = SpectrumAnalyser(pure_sine)
        bins = analyser.get_byte_frequency_data(1.0)

        assert analyser.bin_count == 256
        assert bins.shape == (256,)
        assert bins.dtype == np.uint8

    def test_silence_is_zero(self, silence):
        bins = SpectrumAnalyser(silence).get_byte_frequency_data(0.5)

        assert not bins.any()

    def test_sine_peak_bin(self, pure_sine):
        """440Hz at 22050Hz with a 512-point transform lands near bin 10."""
        analyser = SpectrumAnalyser(pure_sine)
        for i in range(10):
            bins = analyser.get_byte_frequency_data(0.5 + i / 60)

        assert 9 <= int(np.argmax(bins)) <= 11
        assert bins.max() > 128

    def test_fills_out_buffer(self, pure_sine):
        out = np.zeros(256, dtype=np.uint8)
        result = SpectrumAnalyser(pure_sine).get_byte_frequency_data(1.0, out=out)

        assert result is out
        assert out.any()

    def test_smoothing_ramps_up(self, pure_sine):
        analyser = SpectrumAnalyser(pure_sine)
        first = analyser.get_byte_frequency_data(1.0).max()
        for _ in range(5):
            later = analyser.get_byte_frequency_data(1.0).max()

        assert later >= first

    def test_before_start_is_silent(self, pure_sine):
        bins = SpectrumAnalyser(pure_sine).get_byte_frequency_data(0.0)

        assert not bins.any()


class TestEnergyExtractor:
    """Tests for the init-once analysis graph."""

    def test_baseline_without_graph(self, pure_sine):
        extractor = EnergyExtractor(pure_sine)

        assert extractor.energy() == BASELINE_ENERGY

    def test_graph_built_once(self, pure_sine):
        extractor = EnergyExtractor(pure_sine)
        first = extractor.ensure_graph()
        second = extractor.ensure_graph()

        assert first is second
        assert extractor.graphs_built == 1
        assert first.bins.shape == (256,)

    def test_sample_updates_energy(self, pure_sine):
        extractor = EnergyExtractor(pure_sine)
        extractor.ensure_graph()
        extractor.sample(1.0)

        assert 0.0 < extractor.energy() <= 1.0

    def test_silence_energy_zero(self, silence):
        extractor = EnergyExtractor(silence)
        extractor.ensure_graph()
        extractor.sample(0.5)

        assert extractor.energy() == 0.0

    def test_no_signal_stays_at_baseline(self):
        extractor = EnergyExtractor(None)

        assert extractor.ensure_graph() is None
        extractor.sample(1.0)
        assert extractor.energy() == BASELINE_ENERGY

    def test_teardown_and_rebuild(self, pure_sine):
        extractor = EnergyExtractor(pure_sine)
        extractor.ensure_graph()
        extractor.teardown()

        assert extractor.graph is None
        assert extractor.energy() == BASELINE_ENERGY
        extractor.ensure_graph()
        assert extractor.graphs_built == 2

    def test_attach_drops_graph(self, pure_sine, silence):
        extractor = EnergyExtractor(pure_sine)
        extractor.ensure_graph()
        extractor.attach(silence)

        assert extractor.graph is None
        assert extractor.signal is silence

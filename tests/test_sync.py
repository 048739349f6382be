"""Tests for the synchronization engine."""

import math

import pytest

from lyriscope.core.sync import (
    LyricState,
    current_index,
    format_progress,
    format_time,
    neighbors,
    sync_state,
    track_mode_label,
)
from lyriscope.core.track import derive_track


@pytest.fixture
def synced(sample_lrc):
    return derive_track(sample_lrc)


class TestCurrentIndex:
    """Tests for active-line lookup."""

    def test_before_first_is_none(self, synced):
        assert current_index(0.0, synced) is None
        assert current_index(0.99, synced) is None

    def test_exact_timestamp_is_active(self, synced):
        assert current_index(1.0, synced) == 0
        assert current_index(3.5, synced) == 1

    def test_after_last_is_last(self, synced):
        assert current_index(10.0, synced) == 4
        assert current_index(10_000.0, synced) == 4

    def test_monotonic_sweep(self, synced):
        previous = -1
        for step in range(0, 1500):
            index = current_index(step / 100, synced)
            value = -1 if index is None else index
            assert value >= previous
            previous = value
        assert previous == len(synced) - 1

    def test_seek_backwards(self, synced):
        assert current_index(9.0, synced) == 3
        assert current_index(2.0, synced) == 0

    def test_nan_time(self, synced):
        assert current_index(math.nan, synced) is None

    def test_no_track(self):
        assert current_index(5.0, None) is None

    def test_unsynced_delegates_to_spreader(self, sample_plain):
        track = derive_track(sample_plain, duration=8.0)

        assert current_index(0.0, track) == 0
        assert current_index(7.9, track) == 3


class TestNeighbors:
    """Tests for previous/next text."""

    def test_middle(self, synced):
        assert neighbors(synced, 2) == ("second line", "bridge line")

    def test_first_has_no_previous(self, synced):
        assert neighbors(synced, 0) == ("", "second line")

    def test_last_has_no_next(self, synced):
        assert neighbors(synced, 4) == ("bridge line", "")

    def test_none_index(self, synced):
        assert neighbors(synced, None) == ("", "")

    def test_single_line(self):
        track = derive_track("[00:01.00] only")

        assert neighbors(track, 0) == ("", "")


class TestSyncState:
    def test_state_snapshot(self, synced):
        state = sync_state(4.0, synced)

        assert state == LyricState(1, "second line", "first line", "chorus line")

    def test_empty_state(self, synced):
        assert sync_state(0.0, synced) == LyricState(None, "", "", "")


class TestFormatting:
    """Tests for the time readout."""

    @pytest.mark.parametrize(
        "seconds, expected",
        [(0, "00:00"), (65, "01:05"), (59.99, "00:59"), (3600, "60:00"), (-4, "00:00")],
    )
    def test_format_time(self, seconds, expected):
        assert format_time(seconds) == expected

    @pytest.mark.parametrize("value", [None, math.inf, math.nan])
    def test_format_time_unknown(self, value):
        assert format_time(value) == "--:--"

    def test_progress_with_duration(self):
        assert format_progress(65, 200) == "01:05 / 03:20"

    @pytest.mark.parametrize("duration", [None, 0, -5, math.inf, math.nan])
    def test_progress_unknown_duration(self, duration):
        assert format_progress(65, duration) == "01:05 / --:--"


class TestModeLabel:
    def test_labels(self, synced, sample_plain):
        assert track_mode_label(synced) == "Synced via .lrc"
        assert track_mode_label(derive_track(sample_plain)) == "Auto-timed (even spread)"
        assert track_mode_label(None) == "No lyrics yet"

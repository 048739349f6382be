"""Core lyric timing and audio energy modules."""

from lyriscope.core.energy import EnergyExtractor
from lyriscope.core.lrc import LyricEntry, parse_lrc
from lyriscope.core.sync import LyricState, current_index, neighbors, sync_state
from lyriscope.core.track import LineSpreader, SyncedTrack, UnsyncedTrack, derive_track

__all__ = [
    "EnergyExtractor",
    "LyricEntry",
    "parse_lrc",
    "LyricState",
    "current_index",
    "neighbors",
    "sync_state",
    "LineSpreader",
    "SyncedTrack",
    "UnsyncedTrack",
    "derive_track",
]

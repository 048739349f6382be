"""
Lyric synchronization.

Pure functions of (playback time, track), called once per frame tick.
Nothing is cached between calls, so seeking backwards is always correct.
"""

import bisect
import math
from dataclasses import dataclass

from lyriscope.core.track import LyricTrack, SyncedTrack, UnsyncedTrack


@dataclass(frozen=True)
class LyricState:
    """Snapshot of the lyric display for one tick."""

    index: int | None
    current: str = ""
    previous: str = ""
    next: str = ""


def current_index(time: float, track: LyricTrack | None) -> int | None:
    """
    Index of the active line at ``time``, or None when no line is active.

    For synced tracks this is the last entry whose time is <= ``time``
    (binary search over the sorted timeline).
    """
    if track is None:
        return None
    if isinstance(track, UnsyncedTrack):
        return track.spreader.index_at(time)
    if not track.entries or math.isnan(time):
        return None
    index = bisect.bisect_right(track.times, time) - 1
    return index if index >= 0 else None


def neighbors(track: LyricTrack | None, index: int | None) -> tuple[str, str]:
    """Return (previous, next) text around ``index``."""
    if track is None or index is None:
        return "", ""
    texts = track.texts
    last = len(texts) - 1
    prev_index = max(0, index - 1)
    next_index = min(last, index + 1)
    previous = texts[prev_index] if prev_index != index else ""
    following = texts[next_index] if next_index != index else ""
    return previous, following


def sync_state(time: float, track: LyricTrack | None) -> LyricState:
    index = current_index(time, track)
    if index is None:
        return LyricState(None)
    previous, following = neighbors(track, index)
    return LyricState(index, track.texts[index], previous, following)


def format_time(seconds: float | None) -> str:
    """Format seconds as MM:SS, or --:-- when not finite."""
    if seconds is None or not math.isfinite(seconds):
        return "--:--"
    seconds = max(0.0, seconds)
    return f"{int(seconds // 60):02d}:{int(seconds % 60):02d}"


def format_progress(now: float, duration: float | None) -> str:
    """Elapsed/total readout. The total is --:-- until a duration is known."""
    if duration is None or not math.isfinite(duration) or duration <= 0:
        total = "--:--"
    else:
        total = format_time(duration)
    return f"{format_time(now)} / {total}"


def track_mode_label(track: LyricTrack | None) -> str:
    if isinstance(track, SyncedTrack):
        return "Synced via .lrc"
    if isinstance(track, UnsyncedTrack) and len(track):
        return "Auto-timed (even spread)"
    return "No lyrics yet"

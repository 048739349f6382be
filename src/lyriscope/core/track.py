"""
Lyric track derivation and even line spreading.

A track is either synced (an LRC timeline) or unsynced (plain lines spread
evenly across the audio duration).
"""

import math
import re
from dataclasses import dataclass, field

from lyriscope.core.lrc import LyricEntry, parse_lrc


def _known_duration(duration: float | None) -> bool:
    return duration is not None and math.isfinite(duration) and duration > 0


def split_plain_lines(text: str) -> list[str]:
    """Trim every line and drop the blank ones."""
    lines = (line.strip() for line in re.split(r"\r?\n", text))
    return [line for line in lines if line]


class LineSpreader:
    """
    Maps playback time to a line index by dividing the duration evenly.

    With an unknown or non-positive duration no line is ever active.
    """

    def __init__(self, line_count: int, duration: float | None):
        self.line_count = line_count
        self.duration = duration

    def index_at(self, time: float) -> int | None:
        if self.line_count <= 0 or not _known_duration(self.duration):
            return None
        if not math.isfinite(time):
            return None
        per_line = self.duration / self.line_count
        index = math.floor(time / per_line)
        return max(0, min(self.line_count - 1, index))


@dataclass(frozen=True)
class SyncedTrack:
    """Lyrics with explicit timestamps."""

    entries: tuple[LyricEntry, ...]
    texts: tuple[str, ...] = field(init=False, repr=False, compare=False)
    times: tuple[float, ...] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # derived once from entries
        object.__setattr__(self, "texts", tuple(e.text for e in self.entries))
        object.__setattr__(self, "times", tuple(e.time for e in self.entries))

    def __len__(self) -> int:
        return len(self.entries)


@dataclass(frozen=True)
class UnsyncedTrack:
    """Plain lyric lines, timed by even spreading over the duration."""

    lines: tuple[str, ...]
    duration: float | None = None

    @property
    def texts(self) -> tuple[str, ...]:
        return self.lines

    @property
    def spreader(self) -> LineSpreader:
        return LineSpreader(len(self.lines), self.duration)

    def with_duration(self, duration: float | None) -> "UnsyncedTrack":
        return UnsyncedTrack(self.lines, duration)

    def __len__(self) -> int:
        return len(self.lines)


LyricTrack = SyncedTrack | UnsyncedTrack


def derive_track(raw_text: str, duration: float | None = None) -> LyricTrack | None:
    """
    Build the track for a lyric text blob.

    LRC text becomes a SyncedTrack. Anything else with at least one
    non-blank line falls back to an UnsyncedTrack. Blank text has no track.
    """
    if not raw_text or not raw_text.strip():
        return None
    entries = parse_lrc(raw_text)
    if entries:
        return SyncedTrack(tuple(entries))
    return UnsyncedTrack(tuple(split_plain_lines(raw_text)), duration)

"""
LRC timestamp parsing.

Turns timestamp-tagged lyric text into an ordered timeline:

    [00:11.20] first line
    [00:21.50][01:40.00] a chorus line sung twice

Each time tag on a kept line yields one entry sharing the line's text.
"""

import re
from dataclasses import dataclass

# [m:ss] or [m:ss.f] with a 1-3 digit fraction, ASCII digits only
TIME_TAG = re.compile(r"\[(\d{1,2}):(\d{2})(?:\.(\d{1,3}))?\]", re.ASCII)

_LINE_BREAK = re.compile(r"\r?\n")


@dataclass(frozen=True)
class LyricEntry:
    """A single timed lyric line."""

    time: float  # seconds from track start
    text: str


def _int_or_zero(fragment: str | None) -> int:
    if not fragment:
        return 0
    try:
        return int(fragment)
    except ValueError:
        return 0


def tag_to_seconds(minutes: str, seconds: str, fraction: str | None = None) -> float:
    """
    Convert the captured parts of a time tag to seconds.

    The fraction is right-padded to three digits and read as milliseconds,
    so ``.5`` is 500ms and ``.20`` is 200ms.
    """
    ms = _int_or_zero(fraction.ljust(3, "0")) if fraction else 0
    return _int_or_zero(minutes) * 60 + _int_or_zero(seconds) + ms / 1000


def parse_lrc(text: str) -> list[LyricEntry]:
    """
    Parse LRC text into entries sorted by time.

    Lines without a time tag, or with nothing left after the tags are
    stripped, are dropped. Equal timestamps keep their emission order.

    Args:
        text: Raw lyric text.

    Returns:
        Sorted entries; empty when no line carries both a tag and content.
    """
    entries: list[LyricEntry] = []
    for line in _LINE_BREAK.split(text):
        tags = TIME_TAG.findall(line)
        content = TIME_TAG.sub("", line).strip()
        if not tags or not content:
            continue
        for minutes, seconds, fraction in tags:
            entries.append(LyricEntry(tag_to_seconds(minutes, seconds, fraction), content))

    # list.sort is stable
    entries.sort(key=lambda e: e.time)
    return entries

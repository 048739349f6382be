"""
Plain-text lyric export.

Produces the caption-friendly text sheet:

    Title: <title>
    Artist: <artist>

    Lyrics:
    <line 1>
    <line 2>
"""

import re
from pathlib import Path
from typing import Union

from lyriscope.core.track import LyricTrack


def lyric_lines(track: LyricTrack | None) -> list[str]:
    """Entry text in time order for synced tracks, line order otherwise."""
    if track is None:
        return []
    return list(track.texts)


def format_export(title: str, artist: str, track: LyricTrack | None) -> str:
    lyrics = "\n".join(lyric_lines(track))
    return f"Title: {title}\nArtist: {artist}\n\nLyrics:\n{lyrics}"


def export_filename(title: str) -> str:
    """File name for an export: non-alphanumeric runs become underscores."""
    stem = re.sub(r"[^a-z0-9]+", "_", title or "lyrics", flags=re.IGNORECASE)
    return f"{stem}.txt"


def write_export(
    title: str,
    artist: str,
    track: LyricTrack | None,
    directory: Union[str, Path] = ".",
) -> Path:
    """
    Write the export sheet next to the other outputs.

    Args:
        title: Song title.
        artist: Song artist.
        track: Lyric track to export.
        directory: Output directory (created if missing).

    Returns:
        Path to the written file.
    """
    directory = Path(directory)
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / export_filename(title)
    path.write_text(format_export(title, artist, track), encoding="utf-8")
    return path

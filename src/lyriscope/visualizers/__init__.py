"""Visualization modules for the audio-reactive lyric stage."""

from lyriscope.visualizers.background import AmbientBackground
from lyriscope.visualizers.overlay import LyricOverlay

__all__ = ["AmbientBackground", "LyricOverlay"]

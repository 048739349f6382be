"""Audio-reactive lyric backgrounds."""

from lyriscope.config import VisualConfig, load_config
from lyriscope.core.energy import EnergyExtractor
from lyriscope.core.sync import LyricState, sync_state
from lyriscope.core.track import derive_track
from lyriscope.render_video import render_video
from lyriscope.runtime.session import LyricSession

__version__ = "0.1.0"
__all__ = [
    "VisualConfig",
    "load_config",
    "EnergyExtractor",
    "LyricState",
    "sync_state",
    "derive_track",
    "render_video",
    "LyricSession",
]

"""Frame scheduling, playback clocks and the frame-driven loops."""

from lyriscope.runtime.clock import ManualClock, PlaybackClock
from lyriscope.runtime.loops import AnimationLoop, EnergySampler, LyricPoller
from lyriscope.runtime.scheduler import FrameScheduler
from lyriscope.runtime.session import LyricSession

__all__ = [
    "ManualClock",
    "PlaybackClock",
    "AnimationLoop",
    "EnergySampler",
    "LyricPoller",
    "FrameScheduler",
    "LyricSession",
]

"""
The three frame-driven loops.

- AnimationLoop: redraws background and overlay every frame.
- LyricPoller: samples the playback clock every frame and derives the
  active lyric line.
- EnergySampler: refreshes the spectrum while audio plays, stops itself
  on pause and restarts on the next play event.

Each loop holds its own scheduler handle; ``stop`` leaves nothing pending.
"""

import abc
import logging
from typing import Callable

import pygame

from lyriscope.core.energy import EnergyExtractor
from lyriscope.core.sync import LyricState, format_progress, sync_state, track_mode_label
from lyriscope.core.track import LyricTrack, UnsyncedTrack, derive_track
from lyriscope.runtime.clock import PlaybackClock
from lyriscope.runtime.scheduler import FrameScheduler
from lyriscope.visualizers.background import AmbientBackground
from lyriscope.visualizers.postfx import soften

logger = logging.getLogger(__name__)


class _FrameLoop(abc.ABC):
    """Self re-requesting scheduler callback."""

    def __init__(self, scheduler: FrameScheduler):
        self.scheduler = scheduler
        self.handle: int | None = None

    @property
    def running(self) -> bool:
        return self.handle is not None

    def start(self):
        if self.handle is None:
            self.handle = self.scheduler.request_frame(self._run)

    def stop(self):
        self.scheduler.cancel_frame(self.handle)
        self.handle = None

    def _run(self, now_ms: float):
        self.handle = None
        if self.frame(now_ms):
            self.handle = self.scheduler.request_frame(self._run)

    @abc.abstractmethod
    def frame(self, now_ms: float) -> bool:
        """Do one frame of work; return False to stop the loop."""


class LyricPoller(_FrameLoop):
    """Time-polling loop feeding the synchronization functions."""

    def __init__(self, scheduler: FrameScheduler, clock: PlaybackClock):
        super().__init__(scheduler)
        self.clock = clock
        self.raw_text = ""
        self.track: LyricTrack | None = None
        self.now = 0.0
        self.state = LyricState(None)

    def set_lyrics(self, raw_text: str):
        """Replace the lyric text and re-derive the track."""
        self.raw_text = raw_text
        self.track = derive_track(raw_text, self.clock.duration)
        logger.debug("Lyrics set: %s", track_mode_label(self.track))

    @property
    def progress_text(self) -> str:
        return format_progress(self.now, self.clock.duration)

    @property
    def mode_label(self) -> str:
        return track_mode_label(self.track)

    def frame(self, now_ms: float) -> bool:
        self.now = self.clock.current_time
        track = self.track
        # the duration usually becomes known only once the audio has loaded
        if isinstance(track, UnsyncedTrack) and track.duration != self.clock.duration:
            track = self.track = track.with_duration(self.clock.duration)
        self.state = sync_state(self.now, track)
        return True


class EnergySampler(_FrameLoop):
    """Spectrum sampling loop, alive only while the clock is playing."""

    def __init__(self, scheduler: FrameScheduler, clock: PlaybackClock, extractor: EnergyExtractor):
        super().__init__(scheduler)
        self.clock = clock
        self.extractor = extractor
        clock.add_play_listener(self.on_play)

    def on_play(self):
        self.extractor.ensure_graph()
        self.start()

    def frame(self, now_ms: float) -> bool:
        self.extractor.sample(self.clock.current_time)
        return self.clock.playing

    def detach(self):
        self.stop()
        self.clock.remove_play_listener(self.on_play)


class AnimationLoop(_FrameLoop):
    """
    Redraw loop.

    Renders the background into an offscreen canvas, softens it onto the
    target, then lets ``on_draw`` hooks (the lyric overlay) paint on top.
    """

    def __init__(
        self,
        scheduler: FrameScheduler,
        background: AmbientBackground,
        energy: Callable[[], float],
        target: pygame.Surface,
        blur: float = 0.0,
    ):
        super().__init__(scheduler)
        self.background = background
        self.energy = energy
        self.target = target
        self.blur = blur
        self.on_draw: list[Callable[[pygame.Surface, float], None]] = []
        self.frames_drawn = 0
        self._canvas: pygame.Surface | None = None

    def set_target(self, target: pygame.Surface):
        self.target = target
        self.background.resize(*target.get_size(), reseed=True)

    def _canvas_for(self, size: tuple[int, int]) -> pygame.Surface:
        if self._canvas is None or self._canvas.get_size() != size:
            self._canvas = pygame.Surface(size, 0, 32)
        return self._canvas

    def frame(self, now_ms: float) -> bool:
        target = self.target
        if self.blur > 0:
            canvas = self._canvas_for(target.get_size())
            self.background.render(canvas, self.energy(), now_ms)
            target.blit(soften(canvas, self.blur), (0, 0))
        else:
            self.background.render(target, self.energy(), now_ms)

        for hook in self.on_draw:
            hook(target, now_ms)
        self.frames_drawn += 1
        return True

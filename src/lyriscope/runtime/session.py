"""
Lyric session: one scheduler, one clock, three loops.

Shared by the live player and the offline renderer so both drive exactly
the same frame logic.
"""

import logging

import pygame

from lyriscope.config import VisualConfig
from lyriscope.core.audio import AudioSignal
from lyriscope.core.energy import EnergyExtractor
from lyriscope.runtime.clock import PlaybackClock
from lyriscope.runtime.loops import AnimationLoop, EnergySampler, LyricPoller
from lyriscope.runtime.scheduler import FrameScheduler
from lyriscope.visualizers.background import AmbientBackground
from lyriscope.visualizers.overlay import LyricOverlay

logger = logging.getLogger(__name__)


class LyricSession:
    """Wires clock, energy, lyrics, background and overlay together."""

    def __init__(
        self,
        config: VisualConfig,
        clock: PlaybackClock,
        target: pygame.Surface,
        signal: AudioSignal | None = None,
        lyrics: str = "",
        seed: int | None = None,
    ):
        """
        Initialize the session.

        Args:
            config: Visual configuration.
            clock: Playback clock (only read).
            target: Surface frames are drawn onto.
            signal: Decoded audio for the analyser, or None for baseline energy.
            lyrics: Raw lyric text (LRC or plain).
            seed: Particle seed.
        """
        self.config = config
        self.clock = clock
        self.scheduler = FrameScheduler()
        self.extractor = EnergyExtractor(signal)

        width, height = target.get_size()
        self.background = AmbientBackground(
            width, height, config.theme_config, density=config.particle_count, seed=seed
        )
        self.overlay = LyricOverlay(config)

        self.poller = LyricPoller(self.scheduler, clock)
        self.poller.set_lyrics(lyrics)
        self.sampler = EnergySampler(self.scheduler, clock, self.extractor)
        self.animation = AnimationLoop(
            self.scheduler, self.background, self.extractor.energy, target, blur=config.blur
        )
        self.animation.on_draw.append(self._draw_overlay)

    def _draw_overlay(self, surface: pygame.Surface, now_ms: float):
        p = self.poller
        self.overlay.draw(surface, p.state, p.mode_label, p.progress_text, now_ms / 1000.0)

    def start(self):
        """Start the always-on loops. Energy sampling waits for a play event."""
        # lyrics first so the overlay draws this tick's state
        self.poller.start()
        self.animation.start()
        if self.clock.playing:
            self.sampler.on_play()

    def tick(self, now_ms: float):
        self.scheduler.run_frame(now_ms)

    def set_lyrics(self, raw_text: str):
        self.poller.set_lyrics(raw_text)

    def apply_config(self, config: VisualConfig):
        """Push changed density, theme or blur values to the running loops."""
        self.config = config
        self.overlay.config = config
        self.background.configure(density=config.particle_count, theme=config.theme_config)
        self.animation.blur = config.blur

    def resize(self, target: pygame.Surface):
        self.animation.set_target(target)

    def teardown(self):
        """Cancel every loop and drop the analysis graph."""
        self.poller.stop()
        self.animation.stop()
        self.sampler.detach()
        self.extractor.teardown()
        logger.debug("Session torn down (%d pending frames)", self.scheduler.pending)

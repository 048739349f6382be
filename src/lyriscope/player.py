"""
Live lyric player.

Opens a resizable pygame window, plays the audio through pygame.mixer and
drives the lyric session once per display frame.

Keys:
    space       play / pause
    left/right  seek -/+ 5 s
    up/down     particle density +/- 10
    t           next theme
    e           write the lyric text export
    esc         quit
"""

import logging
from dataclasses import replace
from pathlib import Path

import pygame

from lyriscope.config import VisualConfig
from lyriscope.core.audio import load_audio
from lyriscope.io.exporter import write_export
from lyriscope.runtime.clock import PlaybackClock
from lyriscope.runtime.session import LyricSession
from lyriscope.themes import THEMES

logger = logging.getLogger(__name__)


class MixerPlayback(PlaybackClock):
    """
    PlaybackClock backed by pygame.mixer.music.

    ``get_pos`` counts milliseconds since the last ``play`` call, so seeks
    are tracked as an offset.
    """

    def __init__(self, audio_path: Path, duration: float | None = None):
        super().__init__()
        self.audio_path = Path(audio_path)
        self._duration = duration
        self._offset = 0.0
        self._last_time = 0.0
        self._started = False
        self._ended = False
        self._playing = False
        self.loaded = False

        try:
            if not pygame.mixer.get_init():
                pygame.mixer.init()
            pygame.mixer.music.load(str(self.audio_path))
            self.loaded = True
        except pygame.error as e:
            logger.warning("Audio playback unavailable for %s: %s", self.audio_path, e)

    @property
    def duration(self) -> float | None:
        return self._duration

    @property
    def current_time(self) -> float:
        if self._started:
            pos = pygame.mixer.music.get_pos()
            if pos >= 0:
                self._last_time = self._offset + pos / 1000.0
        return self._last_time

    @property
    def playing(self) -> bool:
        if self._playing and not (self.loaded and pygame.mixer.music.get_busy()):
            # reached the end of the track
            self._playing = False
            self._ended = True
        return self._playing

    def play(self):
        if not self.loaded:
            return
        if not self._started or self._ended:
            pygame.mixer.music.play()
            self._started = True
            self._ended = False
            self._offset = 0.0
            self._last_time = 0.0
        else:
            pygame.mixer.music.unpause()
        self._playing = True
        self._emit_play()

    def pause(self):
        if self.loaded:
            pygame.mixer.music.pause()
        self._playing = False

    def toggle(self):
        if self.playing:
            self.pause()
        else:
            self.play()

    def seek(self, time: float):
        if not self.loaded:
            return
        time = max(0.0, time)
        if self._duration is not None:
            time = min(time, self._duration)
        try:
            pygame.mixer.music.play(start=time)
        except pygame.error as e:
            # some formats (e.g. wav) cannot seek
            logger.warning("Seek failed: %s", e)
            return
        self._started = True
        self._ended = False
        self._offset = time
        self._last_time = time
        if not self._playing:
            pygame.mixer.music.pause()

    def stop(self):
        if self.loaded:
            pygame.mixer.music.stop()
        self._playing = False
        self._ended = True


class LivePlayer:
    """Window, event handling and the per-frame tick."""

    SEEK_STEP = 5.0
    DENSITY_STEP = 10

    def __init__(
        self,
        audio_path: Path,
        lyrics: str,
        config: VisualConfig | None = None,
        export_dir: Path | None = None,
    ):
        self.audio_path = Path(audio_path)
        self.lyrics = lyrics
        self.config = config or VisualConfig()
        self.export_dir = Path(export_dir) if export_dir else self.audio_path.parent
        self.session: LyricSession | None = None
        self.playback: MixerPlayback | None = None
        self.running = False

    def _handle_key(self, key: int):
        session, playback = self.session, self.playback
        if key == pygame.K_ESCAPE:
            self.running = False
        elif key == pygame.K_SPACE:
            playback.toggle()
        elif key == pygame.K_LEFT:
            playback.seek(playback.current_time - self.SEEK_STEP)
        elif key == pygame.K_RIGHT:
            playback.seek(playback.current_time + self.SEEK_STEP)
        elif key in (pygame.K_UP, pygame.K_DOWN):
            step = self.DENSITY_STEP if key == pygame.K_UP else -self.DENSITY_STEP
            self.config = replace(self.config, density=self.config.particle_count + step)
            session.apply_config(self.config)
        elif key == pygame.K_t:
            names = list(THEMES)
            current = names.index(self.config.theme) if self.config.theme in names else -1
            self.config = replace(self.config, theme=names[(current + 1) % len(names)])
            session.apply_config(self.config)
            logger.info("Theme: %s", self.config.theme)
        elif key == pygame.K_e:
            path = write_export(self.config.title, self.config.artist, session.poller.track, self.export_dir)
            logger.info("Exported lyrics to %s", path)

    def run(self):
        cfg = self.config
        pygame.init()
        screen = pygame.display.set_mode((cfg.width, cfg.height), pygame.RESIZABLE)
        caption = " - ".join(part for part in (cfg.artist, cfg.title) if part) or self.audio_path.name
        pygame.display.set_caption(f"Lyriscope | {caption}")

        try:
            signal = load_audio(self.audio_path)
        except Exception as e:
            logger.warning("Could not decode %s (%s); visuals will not react to audio", self.audio_path, e)
            signal = None

        self.playback = MixerPlayback(self.audio_path, duration=signal.duration if signal else None)
        self.session = LyricSession(cfg, self.playback, screen, signal=signal, lyrics=self.lyrics)
        self.session.start()
        self.playback.play()

        fps_clock = pygame.time.Clock()
        self.running = True
        try:
            while self.running:
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        self.running = False
                    elif event.type == pygame.KEYDOWN:
                        self._handle_key(event.key)
                    elif event.type == pygame.VIDEORESIZE:
                        self.session.resize(pygame.display.get_surface())

                self.session.tick(pygame.time.get_ticks())
                pygame.display.flip()
                fps_clock.tick(cfg.fps)
        finally:
            self.session.teardown()
            self.playback.stop()
            pygame.quit()

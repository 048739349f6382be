"""
Offline lyric video rendering.

Runs the same session loops as the live player against a simulated clock
that advances one frame at a time, and pipes the frames to ffmpeg.
"""

import logging
import math
from pathlib import Path
from typing import Callable, Iterator

import numpy as np
import pygame

from lyriscope.config import VisualConfig
from lyriscope.core.audio import AudioSignal, load_audio
from lyriscope.io.encoder import encode_video
from lyriscope.runtime.clock import ManualClock
from lyriscope.runtime.session import LyricSession
from lyriscope.visualizers.postfx import surface_to_array

logger = logging.getLogger(__name__)


def render_frames(
    config: VisualConfig,
    lyrics: str,
    signal: AudioSignal | None,
    duration: float,
    seed: int | None = None,
) -> Iterator[np.ndarray]:
    """
    Yield (H, W, 3) uint8 frames covering ``duration`` seconds.

    Args:
        config: Visual configuration (size, fps, theme...).
        lyrics: Raw lyric text.
        signal: Decoded audio driving the energy, or None for baseline.
        duration: Seconds to render.
        seed: Particle seed for reproducible output.
    """
    fps = config.fps
    n_frames = int(math.ceil(duration * fps))

    surface = pygame.Surface((config.width, config.height), 0, 32)
    clock = ManualClock(duration=signal.duration if signal is not None else duration)
    session = LyricSession(config, clock, surface, signal=signal, lyrics=lyrics, seed=seed)
    session.start()
    clock.play()

    try:
        for i in range(n_frames):
            session.tick(i * 1000.0 / fps)
            yield surface_to_array(surface)
            clock.advance(1.0 / fps)
    finally:
        session.teardown()


def render_video(
    audio_path: Path,
    lyrics: str,
    output_path: Path,
    config: VisualConfig | None = None,
    quality: str = "high",
    max_duration: float | None = None,
    seed: int | None = None,
    progress_callback: Callable[[int, int], None] | None = None,
) -> dict:
    """
    Render a lyric video for an audio file.

    Args:
        audio_path: Input audio (also muxed into the output).
        lyrics: Raw lyric text (LRC or plain).
        output_path: Output MP4 path.
        config: Visual configuration. Defaults are used if None.
        quality: Encoding quality ("high", "medium", "fast").
        max_duration: Optional cap in seconds.
        seed: Particle seed.
        progress_callback: Optional callback(current_frame, total_frames).

    Returns:
        Dict with output path, duration and frame count.

    Raises:
        RuntimeError: If the length cannot be determined or ffmpeg fails.
    """
    config = config or VisualConfig()

    try:
        signal = load_audio(audio_path)
    except Exception as e:
        # Render with baseline energy; ffmpeg may still be able to mux the file.
        logger.warning("Could not decode %s (%s); rendering without audio reactivity", audio_path, e)
        signal = None

    duration = signal.duration if signal is not None else None
    if max_duration is not None:
        duration = min(duration, max_duration) if duration is not None else max_duration
    if duration is None or duration <= 0:
        raise RuntimeError("Could not determine the render length; pass max_duration")

    total_frames = int(math.ceil(duration * config.fps))
    logger.info(
        "Rendering %d frames at %dx%d @ %dfps", total_frames, config.width, config.height, config.fps
    )

    encode_video(
        frame_iterator=render_frames(config, lyrics, signal, duration, seed=seed),
        output_path=output_path,
        width=config.width,
        height=config.height,
        fps=config.fps,
        quality=quality,
        audio_path=audio_path,
        duration=duration,
        total_frames=total_frames,
        progress_callback=progress_callback,
    )

    return {
        "output_path": Path(output_path),
        "duration": duration,
        "n_frames": total_frames,
    }

"""
Lyric stage overlay.

Draws the title/artist header, the active lyric line with its ghost
neighbours, and the status bar on top of the background.
"""

import pygame

from lyriscope.config import VisualConfig
from lyriscope.core.sync import LyricState
from lyriscope.themes import FONTS
from lyriscope.visualizers.postfx import glow_layer

PLACEHOLDER = "Your lyrics will appear here."
TEXT_COLOR = (255, 255, 255)


def wrap_text(font: pygame.font.Font, text: str, max_width: int) -> list[str]:
    """Greedy word wrap. A single word wider than max_width gets its own line."""
    words = text.split()
    if not words:
        return []
    lines = [words[0]]
    for word in words[1:]:
        candidate = f"{lines[-1]} {word}"
        if font.size(candidate)[0] <= max_width:
            lines[-1] = candidate
        else:
            lines.append(word)
    return lines


class LyricOverlay:
    """Text layer for the lyric stage."""

    TRANSITION_SECONDS = 0.35
    TRANSITION_RISE = 20  # px
    GHOST_ALPHA = 153  # 60%
    META_ALPHA = 204  # 80%

    def __init__(self, config: VisualConfig):
        self.config = config
        self._fonts: dict[tuple[str, int], pygame.font.Font] = {}
        self._shown_index: int | None = None
        self._changed_at = 0.0
        if not pygame.font.get_init():
            pygame.font.init()

    def font(self, size: int) -> pygame.font.Font:
        key = (self.config.font, size)
        font = self._fonts.get(key)
        if font is None:
            candidates = FONTS.get(self.config.font)
            path = pygame.font.match_font(candidates) if candidates else None
            font = pygame.font.Font(path, size)
            self._fonts[key] = font
        return font

    def transition(self, state: LyricState, now: float) -> float:
        """Eased progress in [0, 1] of the active line's entrance."""
        if state.index != self._shown_index:
            self._shown_index = state.index
            self._changed_at = now
        p = (now - self._changed_at) / self.TRANSITION_SECONDS
        p = min(1.0, max(0.0, p))
        return 1.0 - (1.0 - p) ** 3

    def _blit_text(
        self,
        surface: pygame.Surface,
        text: str,
        size: int,
        center_x: float,
        top: float,
        alpha: int = 255,
        align: str = "center",
    ) -> float:
        """Render one line, return the y below it."""
        rendered = self.font(size).render(text, True, TEXT_COLOR)
        rendered.set_alpha(alpha)
        if align == "center":
            x = center_x - rendered.get_width() / 2
        elif align == "right":
            x = center_x - rendered.get_width()
        else:
            x = center_x
        surface.blit(rendered, (int(x), int(top)))
        return top + rendered.get_height()

    def _draw_header(self, surface: pygame.Surface):
        cfg = self.config
        margin = 24
        y = self._blit_text(surface, (cfg.artist or "Artist").upper(), 16, margin, margin, self.META_ALPHA, "left")
        self._blit_text(surface, cfg.title or "Title", 32, margin, y + 4, 230, "left")

    def _draw_current(self, surface: pygame.Surface, text: str, progress: float) -> float:
        cfg = self.config
        w, h = surface.get_size()
        size = max(12, min(cfg.lyric_size, h // 6))
        font = self.font(size)
        lines = wrap_text(font, text, int(w * 0.8)) or [text]

        line_h = font.get_linesize()
        block_h = line_h * len(lines)
        top = (h - block_h) / 2 + self.TRANSITION_RISE * (1.0 - progress)
        alpha = int(255 * progress)

        for i, line in enumerate(lines):
            rendered = font.render(line, True, TEXT_COLOR)
            x = (w - rendered.get_width()) / 2
            y = top + i * line_h
            if cfg.text_glow:
                accent = cfg.theme_config.accent_a
                halo = glow_layer(rendered, accent, radius=max(4, size // 3), alpha=0x55)
                halo.set_alpha(alpha)
                pad = (halo.get_width() - rendered.get_width()) // 2
                surface.blit(halo, (int(x) - pad, int(y) - pad + 10))
            rendered.set_alpha(alpha)
            surface.blit(rendered, (int(x), int(y)))
        return top + block_h

    def _draw_status(self, surface: pygame.Surface, mode_label: str, progress_text: str):
        w, h = surface.get_size()
        margin = 24
        y = h - margin - self.font(14).get_linesize()
        self._blit_text(surface, mode_label, 14, margin, y, self.META_ALPHA, "left")
        self._blit_text(surface, progress_text, 14, w - margin, y, self.META_ALPHA, "right")

    def draw(
        self,
        surface: pygame.Surface,
        state: LyricState,
        mode_label: str,
        progress_text: str,
        now: float,
    ):
        """
        Draw the full overlay.

        Args:
            surface: Target surface.
            state: Current lyric snapshot.
            mode_label: Sync mode shown bottom-left.
            progress_text: "MM:SS / MM:SS" readout shown bottom-right.
            now: Seconds of wall-clock time, drives the line transition.
        """
        self._draw_header(surface)

        progress = self.transition(state, now)
        bottom = self._draw_current(surface, state.current or PLACEHOLDER, progress)

        w = surface.get_width()
        y = bottom + 24
        for ghost in (state.previous, state.next):
            if ghost:
                y = self._blit_text(surface, ghost, 22, w / 2, y, self.GHOST_ALPHA)

        self._draw_status(surface, mode_label, progress_text)

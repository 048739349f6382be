"""
Audio-reactive ambient background.

Maps a single energy value onto a soft generative backdrop:
- Theme gradient → fixed diagonal wash (energy-independent)
- Energy → fog radius (6 drifting accent clouds)
- Energy → particle jitter and glow size

Fog and gradient are smooth, so they are drawn at reduced resolution and
scaled up once per frame. Particles are drawn at full resolution.
"""

import math

import numpy as np
import pygame

from lyriscope.config import clamp_density
from lyriscope.themes import ThemeConfig


class AmbientBackground:
    """
    Renders the gradient, fog and particle field.

    Particle state (positions, velocities, radii) lives in numpy arrays and
    persists across frames. It is regenerated only by ``reseed``, which runs
    when the density or the canvas size actually changes.
    """

    FOG_COUNT = 6
    FOG_ALPHA = 0x10
    FOG_SPRITE_RADIUS = 64
    GLOW_ALPHA = 0x80
    GLOW_SPREAD = 8  # glow radius per unit of particle radius
    JITTER = 0.2

    def __init__(
        self,
        width: int,
        height: int,
        theme: ThemeConfig,
        density: int = 60,
        seed: int | None = None,
        fog_scale: float = 0.125,
    ):
        """
        Initialize the background.

        Args:
            width: Canvas width in pixels.
            height: Canvas height in pixels.
            theme: Colors for gradient, fog and particles.
            density: Requested particle count (clamped to [10, 400]).
            seed: Seed for particle placement and jitter.
            fog_scale: Resolution factor for the gradient and fog layer.
        """
        self.width = width
        self.height = height
        self.theme = theme
        self.density = clamp_density(density)
        self.fog_scale = fog_scale
        self.rng = np.random.default_rng(seed)

        self._base: pygame.Surface | None = None
        self._fog_sprite: pygame.Surface | None = None
        self._glow_cache: dict[int, pygame.Surface] = {}

        self.x = np.zeros(0)
        self.y = np.zeros(0)
        self.vx = np.zeros(0)
        self.vy = np.zeros(0)
        self.r = np.zeros(0)
        self.reseed()

    # -- state management -------------------------------------------------

    @property
    def particle_count(self) -> int:
        return len(self.x)

    def reseed(self):
        """Regenerate every particle."""
        n = self.density
        rng = self.rng
        self.x = rng.random(n) * self.width
        self.y = rng.random(n) * self.height
        self.vx = (rng.random(n) - 0.5) * 0.3
        self.vy = (rng.random(n) - 0.5) * 0.3
        self.r = rng.random(n) * 2 + 0.5

    def configure(self, density: int | None = None, theme: ThemeConfig | None = None):
        """Apply new density or theme values, touching only what changed."""
        if density is not None and clamp_density(density) != self.density:
            self.density = clamp_density(density)
            self.reseed()
        if theme is not None and theme != self.theme:
            self.theme = theme
            self._base = None
            self._fog_sprite = None
            self._glow_cache.clear()

    def resize(self, width: int, height: int, reseed: bool = False):
        """
        Change canvas bounds.

        Particles keep their state (the wrap bounds move) unless ``reseed``.
        """
        width, height = max(1, int(width)), max(1, int(height))
        if (width, height) == (self.width, self.height):
            return
        self.width, self.height = width, height
        self._base = None
        if reseed:
            self.reseed()

    # -- simulation -------------------------------------------------------

    def step(self, energy: float):
        """Advance particles one frame: drift, energy jitter, toroidal wrap."""
        n = self.particle_count
        jitter = self.JITTER * energy
        self.x += self.vx + (self.rng.random(n) - 0.5) * jitter
        self.y += self.vy + (self.rng.random(n) - 0.5) * jitter
        self.wrap()

    def wrap(self):
        w, h = self.width, self.height
        self.x[self.x < 0] = w
        self.x[self.x > w] = 0
        self.y[self.y < 0] = h
        self.y[self.y > h] = 0

    def fog_centers(self, now_ms: float) -> list[tuple[float, float]]:
        w, h = self.width, self.height
        centers = []
        for i in range(self.FOG_COUNT):
            x = (i / self.FOG_COUNT) * w + math.sin(i + now_ms / 20000) * 80
            y = (i / self.FOG_COUNT) * h + math.cos(i + now_ms / 15000) * 80
            centers.append((x, y))
        return centers

    def fog_radius(self, energy: float) -> float:
        return max(self.width, self.height) * (0.3 + 0.5 * energy)

    def glow_radius(self, energy: float) -> np.ndarray:
        return self.r * (1 + energy * 2) * self.GLOW_SPREAD

    # -- drawing ----------------------------------------------------------

    def _low_res_size(self) -> tuple[int, int]:
        return (
            max(1, int(round(self.width * self.fog_scale))),
            max(1, int(round(self.height * self.fog_scale))),
        )

    def _build_base(self) -> pygame.Surface:
        """Diagonal gradient from bg_from (top-left) to bg_to (bottom-right)."""
        lw, lh = self._low_res_size()
        w, h = self.width, self.height
        gx = (np.arange(lw) + 0.5) / lw * w
        gy = (np.arange(lh) + 0.5) / lh * h
        t = (gx[:, None] * w + gy[None, :] * h) / float(w * w + h * h)
        t = np.clip(t, 0, 1)[:, :, np.newaxis]

        c0 = np.array(self.theme.bg_from, dtype=np.float32)
        c1 = np.array(self.theme.bg_to, dtype=np.float32)
        rgb = (c0 + (c1 - c0) * t).astype(np.uint8)

        surface = pygame.Surface((lw, lh), 0, 32)
        pygame.surfarray.blit_array(surface, rgb)
        return surface

    def _build_fog_sprite(self) -> pygame.Surface:
        """Radial falloff in accent_a, alpha FOG_ALPHA at the centre to 0."""
        radius = self.FOG_SPRITE_RADIUS
        size = radius * 2
        sprite = pygame.Surface((size, size), pygame.SRCALPHA, 32)
        sprite.fill((*self.theme.accent_a, 0))

        d = np.hypot(*np.meshgrid(np.arange(size) - radius + 0.5, np.arange(size) - radius + 0.5, indexing="ij"))
        falloff = np.clip(1.0 - d / radius, 0, 1)
        alpha = pygame.surfarray.pixels_alpha(sprite)
        alpha[:] = (falloff * self.FOG_ALPHA).astype(np.uint8)
        del alpha  # release the surface lock
        return sprite

    def _glow_sprite(self, radius: int) -> pygame.Surface:
        """Premultiplied accent_b glow for additive blitting, cached per radius."""
        sprite = self._glow_cache.get(radius)
        if sprite is None:
            size = radius * 2 + 1
            coords = np.arange(size) - radius
            d = np.hypot(*np.meshgrid(coords, coords, indexing="ij"))
            falloff = np.clip(1.0 - d / radius, 0, 1) * (self.GLOW_ALPHA / 255.0)
            color = np.array(self.theme.accent_b, dtype=np.float32)
            rgb = (falloff[:, :, np.newaxis] * color).astype(np.uint8)

            sprite = pygame.Surface((size, size), 0, 32)
            pygame.surfarray.blit_array(sprite, rgb)
            self._glow_cache[radius] = sprite
        return sprite

    def _draw_fog(self, layer: pygame.Surface, energy: float, now_ms: float):
        if self._fog_sprite is None:
            self._fog_sprite = self._build_fog_sprite()
        scale = self.fog_scale
        radius = max(1, int(self.fog_radius(energy) * scale))
        cloud = pygame.transform.smoothscale(self._fog_sprite, (radius * 2, radius * 2))
        for x, y in self.fog_centers(now_ms):
            layer.blit(cloud, (int(x * scale) - radius, int(y * scale) - radius))

    def _draw_particles(self, surface: pygame.Surface, energy: float):
        radii = np.maximum(1, np.rint(self.glow_radius(energy))).astype(int).tolist()
        blits = []
        for x, y, radius in zip(self.x.tolist(), self.y.tolist(), radii):
            sprite = self._glow_sprite(radius)
            blits.append((sprite, (int(x) - radius, int(y) - radius), None, pygame.BLEND_RGB_ADD))
        # additive blending applies to these blits only
        surface.blits(blits, doreturn=False)

    def render(self, surface: pygame.Surface, energy: float, now_ms: float) -> pygame.Surface:
        """
        Draw one frame onto ``surface``.

        Args:
            surface: Target surface, sized width x height.
            energy: Current audio energy in [0, 1].
            now_ms: Wall-clock milliseconds, drives the fog drift.

        Returns:
            The same surface.
        """
        energy = min(1.0, max(0.0, float(energy)))

        if self._base is None:
            self._base = self._build_base()
        layer = self._base.copy()
        self._draw_fog(layer, energy, now_ms)
        surface.blit(pygame.transform.smoothscale(layer, (self.width, self.height)), (0, 0))

        self.step(energy)
        self._draw_particles(surface, energy)
        return surface

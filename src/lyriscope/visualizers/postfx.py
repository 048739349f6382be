"""
Post-processing for pygame surfaces.

The backdrop blur runs through Pillow on a downscaled copy, so strong
blurs stay affordable at display frame rates. Text halos are small and are
blurred directly with scipy.
"""

import math

import numpy as np
import pygame
from PIL import Image, ImageFilter
from scipy.ndimage import gaussian_filter


def surface_to_array(surface: pygame.Surface) -> np.ndarray:
    """Convert pygame surface to an (H, W, 3) uint8 array for video encoding."""
    # pygame uses (width, height) but numpy expects (height, width)
    arr = pygame.surfarray.array3d(surface)
    return np.ascontiguousarray(np.transpose(arr, (1, 0, 2)))


def array_to_surface(frame: np.ndarray) -> pygame.Surface:
    """Inverse of surface_to_array."""
    return pygame.surfarray.make_surface(np.transpose(frame, (1, 0, 2)))


def soften(
    surface: pygame.Surface,
    radius: float,
    scale: float = 0.25,
) -> pygame.Surface:
    """
    Gaussian-blur a surface.

    Args:
        surface: Source surface (left untouched).
        radius: Blur radius in full-resolution pixels. <= 0 returns the source.
        scale: Working resolution factor for the blur.

    Returns:
        A new, blurred surface of the same size.
    """
    if radius <= 0:
        return surface

    w, h = surface.get_size()
    sw, sh = max(1, int(w * scale)), max(1, int(h * scale))
    small = pygame.transform.smoothscale(surface, (sw, sh))

    img = Image.fromarray(surface_to_array(small))
    img = img.filter(ImageFilter.GaussianBlur(radius=radius * scale))
    blurred = array_to_surface(np.asarray(img))

    return pygame.transform.smoothscale(blurred, (w, h))


def glow_layer(
    source: pygame.Surface,
    color: tuple[int, int, int],
    radius: float,
    alpha: int,
) -> pygame.Surface:
    """
    Soft colored halo shaped like ``source``'s alpha channel.

    Used behind lyric text. The halo is padded by ``radius`` on every side.

    Args:
        source: Per-pixel-alpha surface (e.g. rendered text).
        color: Halo color.
        radius: Blur radius in pixels.
        alpha: Peak opacity of the halo (0-255).

    Returns:
        SRCALPHA surface sized source + 2 * radius.
    """
    pad = int(math.ceil(radius))
    w, h = source.get_size()
    mask = np.zeros((h + 2 * pad, w + 2 * pad), dtype=np.uint8)
    mask[pad:pad + h, pad:pad + w] = pygame.surfarray.array_alpha(source).T

    blurred = gaussian_filter(mask.astype(np.float32), sigma=radius / 2)
    shaped = np.clip(blurred * (alpha / 255.0), 0, 255).astype(np.uint8)

    halo = pygame.Surface((w + 2 * pad, h + 2 * pad), pygame.SRCALPHA, 32)
    halo.fill((*color, 0))
    halo_alpha = pygame.surfarray.pixels_alpha(halo)
    halo_alpha[:] = shaped.T
    del halo_alpha
    return halo

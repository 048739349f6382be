"""
Visual configuration.

Values normally set by the UI (density slider, theme picker, font picker,
blur, lyric size) live here. They can come from a JSON file exported by a
frontend, using either camelCase or snake_case keys.
"""

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Union

from lyriscope.themes import DEFAULT_FONT, DEFAULT_THEME, FONTS, ThemeConfig, get_theme

MIN_DENSITY = 10
MAX_DENSITY = 400

# Render profiles: resolution, frame rate and encoder quality
PROFILES = {
    "low": {"width": 1280, "height": 720, "fps": 30, "quality": "fast"},
    "medium": {"width": 1920, "height": 1080, "fps": 60, "quality": "medium"},
    "high": {"width": 3840, "height": 2160, "fps": 60, "quality": "high"},
}

# Frontend key -> VisualConfig field
_ALIASES = {
    "lyricSize": "lyric_size",
    "blurBg": "blur",
    "themeKey": "theme",
    "fontKey": "font",
    "shadow": "text_glow",
    "textGlow": "text_glow",
}


@dataclass
class VisualConfig:
    """Configuration for the background and lyric overlay."""

    width: int = 1280
    height: int = 720
    fps: int = 60

    density: int = 60  # particle count, clamped to [10, 400]
    theme: str = DEFAULT_THEME
    font: str = DEFAULT_FONT
    lyric_size: int = 72
    text_glow: bool = True
    blur: int = 24  # backdrop blur radius in px (0-40)

    title: str = ""
    artist: str = ""

    @property
    def particle_count(self) -> int:
        return clamp_density(self.density)

    @property
    def theme_config(self) -> ThemeConfig:
        return get_theme(self.theme)

    def validate(self) -> "VisualConfig":
        """Raise ValueError for unknown presets or nonsensical sizes."""
        get_theme(self.theme)
        if self.font not in FONTS:
            raise ValueError(f"Unknown font {self.font!r}; choose from {', '.join(FONTS)}")
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Invalid canvas size {self.width}x{self.height}")
        if self.fps <= 0:
            raise ValueError(f"Invalid fps {self.fps}")
        return self


def clamp_density(density: int) -> int:
    return max(MIN_DENSITY, min(MAX_DENSITY, int(density)))


def config_from_dict(data: dict[str, Any], base: VisualConfig | None = None) -> VisualConfig:
    """
    Overlay known keys from ``data`` onto ``base``.

    Unknown keys are ignored so frontend exports with extra fields load.
    """
    known = {f.name for f in fields(VisualConfig)}
    updates = {}
    for key, value in data.items():
        name = _ALIASES.get(key, key)
        if name in known:
            updates[name] = value
    return replace(base or VisualConfig(), **updates).validate()


def load_config(path: Union[str, Path], base: VisualConfig | None = None) -> VisualConfig:
    """
    Load a JSON config file.

    Raises:
        ValueError: If the file is not a JSON object or names unknown presets.
    """
    with open(path, "r", encoding="utf-8") as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid config file {path}: {e}") from e
    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a JSON object")
    return config_from_dict(data, base)

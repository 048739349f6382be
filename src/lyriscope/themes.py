"""
Theme and font presets.
"""

from dataclasses import dataclass

RGB = tuple[int, int, int]


def parse_hex_color(value: str) -> RGB:
    """
    Parse ``#rgb``, ``#rrggbb`` or ``#rrggbbaa`` into an RGB tuple.

    Any alpha component is ignored.
    """
    h = value.strip().lstrip("#")
    if len(h) == 3:
        h = "".join(c * 2 for c in h)
    if len(h) not in (6, 8):
        raise ValueError(f"Invalid color: {value!r}")
    try:
        return (int(h[0:2], 16), int(h[2:4], 16), int(h[4:6], 16))
    except ValueError:
        raise ValueError(f"Invalid color: {value!r}") from None


@dataclass(frozen=True)
class ThemeConfig:
    """Colors for the animated background."""

    bg_from: RGB
    bg_to: RGB
    accent_a: RGB  # fog
    accent_b: RGB  # particles

    @classmethod
    def from_hex(cls, bg_from: str, bg_to: str, accent_a: str, accent_b: str) -> "ThemeConfig":
        return cls(
            parse_hex_color(bg_from),
            parse_hex_color(bg_to),
            parse_hex_color(accent_a),
            parse_hex_color(accent_b),
        )


THEMES: dict[str, ThemeConfig] = {
    "Midnight Neon": ThemeConfig.from_hex("#0f1023", "#1a1b3a", "#7f5af0", "#2cb67d"),
    "Aurora": ThemeConfig.from_hex("#0b1220", "#102a43", "#5eead4", "#93c5fd"),
    "Sunset": ThemeConfig.from_hex("#1b0f1a", "#2a172b", "#f59e0b", "#ef4444"),
    "Blossom": ThemeConfig.from_hex("#1a1020", "#2a1a2f", "#fb7185", "#a78bfa"),
}

DEFAULT_THEME = "Midnight Neon"

# Font preset -> comma separated system font candidates for pygame.font.match_font.
# None falls back to pygame's bundled default font.
FONTS: dict[str, str | None] = {
    "Inter": "inter,helvetica,arial,dejavusans",
    "Serif": "georgia,timesnewroman,dejavuserif",
    "Mono": "consolas,menlo,dejavusansmono,couriernew",
    "Cinematic": "georgia,times,timesnewroman",
    "Grotesk": "spacegrotesk,helvetica,arial",
}

DEFAULT_FONT = "Inter"


def get_theme(name: str) -> ThemeConfig:
    """Look up a theme preset by name (case-insensitive)."""
    for key, theme in THEMES.items():
        if key.lower() == name.lower():
            return theme
    raise ValueError(f"Unknown theme {name!r}; choose from {', '.join(THEMES)}")

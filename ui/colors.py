"""
Display-only mapping from the opaque presentation tags the core hands out ("text-red-500",
"bg-teal-900", "bg-transparent") to RGB. Shades are interpolated from the 500 swatch: lighter
toward white below 500, darker toward black above it.
"""

import numpy as np

BACKGROUND = np.array([0, 0, 0], dtype=np.float64)
WHITE = np.array([255, 255, 255], dtype=np.float64)

# 500 swatches
_BASE = {
    "red": (239, 68, 68),
    "rose": (244, 63, 94),
    "orange": (249, 115, 22),
    "yellow": (234, 179, 8),
    "green": (34, 197, 94),
    "teal": (20, 184, 166),
    "blue": (59, 130, 246),
    "indigo": (99, 102, 241),
    "purple": (168, 85, 247),
    "pink": (236, 72, 153),
    "gray": (107, 114, 128),
}
_FIXED = {
    "black": (0, 0, 0),
    "white": (255, 255, 255),
}

_CACHE: dict[str, np.ndarray | None] = {}


def _shade(base: np.ndarray, level: int) -> np.ndarray:
    if level <= 500:
        t = (500 - level) / 500.0
        return base + (WHITE - base) * t * 0.9
    t = (level - 500) / 500.0
    return base * (1.0 - t * 0.85)


def tag_to_rgb(tag: str | None) -> np.ndarray | None:
    """RGB (float64, 0-255) for a tag, or None for transparent/empty/unknown tags."""
    if tag is None:
        return None
    if tag in _CACHE:
        return _CACHE[tag]
    rgb = None
    parts = tag.split("-")
    if len(parts) >= 2 and parts[0] in ("text", "bg"):
        hue = parts[1]
        if hue in _FIXED:
            rgb = np.array(_FIXED[hue], dtype=np.float64)
        elif hue in _BASE:
            try:
                level = int(parts[2]) if len(parts) > 2 else 500
            except ValueError:
                level = 500
            rgb = np.clip(_shade(np.array(_BASE[hue], dtype=np.float64), level), 0, 255)
    _CACHE[tag] = rgb
    return rgb


def blend(rgb: np.ndarray, opacity: float, under: np.ndarray = BACKGROUND) -> tuple[int, int, int]:
    """Alpha-blend rgb over `under`; returns an int triple ready for pygame."""
    a = float(np.clip(opacity, 0.0, 1.0))
    out = np.clip(rgb * a + under * (1.0 - a), 0, 255).round().astype(np.uint8)
    return int(out[0]), int(out[1]), int(out[2])

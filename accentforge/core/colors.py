"""Pure color transforms over 32-bit ARGB integers.

Every function returns an opaque color and no transform raises for in-range
channels. Shift factors and blend ratios are clamped to ``[0, 1]``; the
multiplicative scale is not, only its resulting channels are.

Two lightness shifts exist:

* :func:`shift_additive` moves every channel by a fixed delta of
  ``255 * factor``. All generated overlay accents use it.
* :func:`shift_multiplicative` scales every channel by ``factor``.
"""

from __future__ import annotations

OPAQUE = 0xFF000000
BLACK = 0xFF000000
WHITE = 0xFFFFFFFF

RED_WEIGHT = 0.299
GREEN_WEIGHT = 0.587
BLUE_WEIGHT = 0.114
DARKNESS_THRESHOLD = 0.5


def argb(red: int, green: int, blue: int) -> int:
    """Pack channels into an opaque ARGB int, clamping each to 0-255."""
    return OPAQUE | (_clamp_channel(red) << 16) | (_clamp_channel(green) << 8) | _clamp_channel(blue)


def channels(color: int) -> tuple[int, int, int]:
    return (color >> 16) & 0xFF, (color >> 8) & 0xFF, color & 0xFF


def to_hex(color: int) -> str:
    """Render as six uppercase hex digits; the alpha byte is dropped."""
    return f"{color & 0xFFFFFF:06X}"


def shift_additive(color: int, factor: float, lighter: bool = True) -> int:
    """Move each channel toward white (or black) by ``round(255 * factor)``."""
    delta = _round_half_up(255 * _clamp_unit(factor))
    red, green, blue = channels(color)
    if lighter:
        return argb(min(255, red + delta), min(255, green + delta), min(255, blue + delta))
    return argb(max(0, red - delta), max(0, green - delta), max(0, blue - delta))


def shift_multiplicative(color: int, factor: float) -> int:
    """Scale each channel by ``factor``; results are clamped to 0-255."""
    scale = float(factor)
    red, green, blue = channels(color)
    return argb(
        _round_half_up(red * scale),
        _round_half_up(green * scale),
        _round_half_up(blue * scale),
    )


def rotate_hue(color: int, degrees: float) -> int:
    """Rotate the HSV hue, keeping saturation and value."""
    hue, saturation, value = _to_hsv(color)
    if hue < 0:
        # achromatic, there is no hue to rotate
        return OPAQUE | (color & 0xFFFFFF)
    rotated = (hue * 360.0 + degrees) % 360.0
    return _from_hsv(rotated / 360.0, saturation, value)


def desaturate(color: int, factor: float) -> int:
    """Multiply HSV saturation by ``factor`` (0 gives grey, 1 the original)."""
    hue, saturation, value = _to_hsv(color)
    if hue < 0:
        return OPAQUE | (color & 0xFFFFFF)
    return _from_hsv(hue, saturation * _clamp_unit(factor), value)


def blend(color_a: int, color_b: int, ratio: float) -> int:
    """Per-channel ``A * ratio + B * (1 - ratio)``."""
    weight = _clamp_unit(ratio)
    inverse = 1.0 - weight
    mixed = [
        _round_half_up(a * weight + b * inverse)
        for a, b in zip(channels(color_a), channels(color_b))
    ]
    return argb(*mixed)


def is_light(color: int) -> bool:
    """Perceptual-weight lightness test used to pick on-color text."""
    red, green, blue = channels(color)
    darkness = 1 - (RED_WEIGHT * red + GREEN_WEIGHT * green + BLUE_WEIGHT * blue) / 255
    return darkness < DARKNESS_THRESHOLD


def on_color(color: int) -> int:
    return BLACK if is_light(color) else WHITE


def _to_hsv(color: int) -> tuple[float, float, float]:
    from PySide6.QtGui import QColor

    red, green, blue = channels(color)
    hue, saturation, value, _alpha = QColor.fromRgb(red, green, blue).getHsvF()
    return hue, saturation, value


def _from_hsv(hue: float, saturation: float, value: float) -> int:
    from PySide6.QtGui import QColor

    qcolor = QColor.fromHsvF(hue, _clamp_unit(saturation), _clamp_unit(value))
    return argb(qcolor.red(), qcolor.green(), qcolor.blue())


def _round_half_up(value: float) -> int:
    return int(value + 0.5)


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, float(value)))


def _clamp_channel(value: int) -> int:
    return min(255, max(0, int(value)))

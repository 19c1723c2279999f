"""
Color Space Utilities

Conversions shared by the palette extractor and the synthetic palette
generator: RGB <-> HEX, RGB <-> HSL, plus the rounding and number formatting
rules used when colors are rendered as CSS.

All integer results use round-half-up so that channel averages, HSL
conversions and gradient stops round the same way everywhere.
"""

import math
import string

import numpy as np


def round_half_up(value):
    """Round a real number to the nearest integer, halves rounding up."""
    return int(math.floor(value + 0.5))


def clamp_channel(value):
    """Round a channel value and clamp it to the 8-bit range [0, 255]."""
    return max(0, min(255, round_half_up(value)))


def format_css_number(value):
    """
    Format a number the way it should appear in CSS.

    Integral values are rendered without a fractional part (90.0 -> "90"),
    anything else keeps its shortest decimal representation (45.5 -> "45.5").
    Numpy floats are rendered at their own precision, so float32(0.1) is "0.1".

    Raises:
        ValueError: If the value is infinite or NaN
    """
    if not isinstance(value, np.floating):
        value = float(value)
    if not np.isfinite(value):
        raise ValueError(f"CSS numbers must be finite, got {value!r}")
    if value == 0:
        return "0"
    return np.format_float_positional(value, trim='-')


def rgb_to_hex(r, g, b, alpha=None):
    """
    Convert RGB values (0-255) to a lowercase hex string.

    Args:
        r, g, b: Channel values, rounded and clamped to 0-255
        alpha (float): Optional opacity in [0, 1]. When its 8-bit value is
            below 255 an alpha byte is appended (#rrggbbaa).

    Returns:
        str: "#rrggbb" or "#rrggbbaa"
    """
    hex_string = "#" + "".join(f"{clamp_channel(c):02x}" for c in (r, g, b))
    if alpha is not None:
        alpha_byte = clamp_channel(float(alpha) * 255)
        if alpha_byte < 255:
            hex_string += f"{alpha_byte:02x}"
    return hex_string


def hex_to_rgb(hex_string):
    """
    Parse a hex color string into an (r, g, b) tuple.

    Accepts "#rrggbb", "rrggbb", the "#rgb" shorthand and "#rrggbbaa"
    (the alpha byte is discarded). Parsing is case-insensitive.

    Raises:
        ValueError: If the string is not a valid hex color
    """
    if not isinstance(hex_string, str):
        raise ValueError(f"Hex color must be a string, got {type(hex_string).__name__}")

    digits = hex_string.strip().lstrip("#")
    if len(digits) == 3:
        digits = "".join(d * 2 for d in digits)
    if len(digits) not in (6, 8) or any(d not in string.hexdigits for d in digits):
        raise ValueError(f"Invalid hex color: {hex_string!r}")

    return tuple(int(digits[i:i + 2], 16) for i in (0, 2, 4))


def hsl_to_rgb(h, s, l):
    """
    Convert HSL to RGB using the standard piecewise formula.

    Args:
        h (float): Hue in degrees (wrapped into [0, 360))
        s (float): Saturation in percent [0, 100]
        l (float): Lightness in percent [0, 100]

    Returns:
        tuple: (r, g, b) integers in [0, 255]
    """
    h = float(h) % 360
    s = float(s) / 100
    l = float(l) / 100
    a = s * min(l, 1 - l)

    def channel(n):
        k = (n + h / 30) % 12
        return l - a * max(-1, min(k - 3, 9 - k, 1))

    return (
        clamp_channel(255 * channel(0)),
        clamp_channel(255 * channel(8)),
        clamp_channel(255 * channel(4)),
    )


def rgb_to_hsl(r, g, b):
    """
    Convert RGB values (0-255) to HSL.

    Returns:
        tuple: (h, s, l) where h is in [0, 360) and s, l are percentages
    """
    r, g, b = r / 255.0, g / 255.0, b / 255.0
    max_c = max(r, g, b)
    min_c = min(r, g, b)
    delta = max_c - min_c
    l = (max_c + min_c) / 2

    if delta == 0:
        return 0.0, 0.0, l * 100

    s = delta / (1 - abs(2 * l - 1))

    if max_c == r:
        h = 60 * (((g - b) / delta) % 6)
    elif max_c == g:
        h = 60 * ((b - r) / delta + 2)
    else:
        h = 60 * ((r - g) / delta + 4)

    return h % 360, s * 100, l * 100

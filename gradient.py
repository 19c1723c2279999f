"""
CSS Gradient Builder

Formats extracted colors into a CSS ``linear-gradient(...)`` declaration and
renders the same gradient to a raster preview image.

The formatter is a pure function: colors are emitted in exactly the order
given, with no sorting or deduplication.
"""

import math
from dataclasses import dataclass

import cv2
import numpy as np

from color_utils import format_css_number, hex_to_rgb, rgb_to_hex, round_half_up

DEFAULT_ANGLE = 90


def color_to_hex(color):
    """Resolve a hex string, an object with a ``hex`` attribute, or an RGB triple to hex."""
    if isinstance(color, str):
        return color
    if hasattr(color, "hex"):
        return color.hex
    r, g, b = color
    return rgb_to_hex(r, g, b)


def format_gradient(color_stops, angle):
    """
    Build a CSS linear-gradient string.

    Args:
        color_stops: Sequence of (color, stop_percent) pairs, in output order.
            A color is a hex string or anything exposing ``.hex``.
        angle (float): Gradient angle in degrees

    Returns:
        str: e.g. "linear-gradient(90deg, #ff0000 0%, #0000ff 100%)"

    Raises:
        ValueError: If no color stops are given
    """
    parts = [f"{color_to_hex(color)} {format_css_number(stop)}%" for color, stop in color_stops]
    if not parts:
        raise ValueError("A gradient needs at least one color")
    return f"linear-gradient({format_css_number(angle)}deg, {', '.join(parts)})"


def generate_gradient(colors, angle, stops):
    """Format a gradient from parallel lists of colors and stop percentages."""
    if len(colors) != len(stops):
        raise ValueError(f"Got {len(colors)} colors but {len(stops)} stops")
    return format_gradient(list(zip(colors, stops)), angle)


def css_declaration(gradient):
    """Wrap a gradient string in a CSS ``background`` declaration."""
    return f"background: {gradient};"


def default_stops(count):
    """
    Evenly spaced stop percentages for ``count`` colors.

    The first color sits at 0% and the last at 100%; a single color gets 0%.
    """
    if count <= 0:
        return []
    if count == 1:
        return [0]
    return [round_half_up(index / (count - 1) * 100) for index in range(count)]


def angle_from_point(x, y, width, height):
    """
    Gradient angle pointing from the centre of a preview towards (x, y).

    Uses the CSS convention where 0deg points up and angles grow clockwise.

    Returns:
        int: Angle in degrees, in [0, 360)
    """
    dx = x - width / 2
    dy = y - height / 2
    angle = math.degrees(math.atan2(dy, dx)) + 90
    if angle < 0:
        angle += 360
    return round_half_up(angle) % 360


@dataclass(frozen=True)
class GradientSpec:
    """An angle plus ordered (color, stop_percent) pairs, built fresh per render."""
    angle: float
    stops: tuple

    def __post_init__(self):
        stops = tuple((color, stop) for color, stop in self.stops)
        if not stops:
            raise ValueError("A gradient needs at least one color")
        for _, stop in stops:
            if not 0 <= stop <= 100:
                raise ValueError(f"Stop position must be between 0 and 100, got {stop}")
        object.__setattr__(self, "angle", self.angle % 360)
        object.__setattr__(self, "stops", stops)

    @classmethod
    def from_colors(cls, colors, angle=DEFAULT_ANGLE, stops=None):
        """Pair colors with the given stops, or evenly spaced ones when omitted."""
        if stops is None:
            stops = default_stops(len(colors))
        if len(colors) != len(stops):
            raise ValueError(f"Got {len(colors)} colors but {len(stops)} stops")
        return cls(angle, tuple(zip(colors, stops)))

    def to_css(self):
        return format_gradient(self.stops, self.angle)


def render_gradient(colors, stops, angle, width=800, height=400):
    """
    Rasterize a CSS linear gradient.

    Follows the CSS model: the gradient line passes through the centre of the
    box at ``angle`` (0deg = towards the top, clockwise) and is long enough for
    the corners to reach 0% and 100%. Stops are forced to be non-decreasing,
    and colors are held flat before the first and after the last stop.

    Args:
        colors: Sequence of hex strings, ``.hex`` objects or RGB triples
        stops: Stop percentages, one per color
        angle (float): Gradient angle in degrees
        width (int): Output width in pixels
        height (int): Output height in pixels

    Returns:
        numpy.ndarray: (height, width, 3) uint8 RGB image
    """
    if len(colors) == 0:
        raise ValueError("A gradient needs at least one color")
    if len(colors) != len(stops):
        raise ValueError(f"Got {len(colors)} colors but {len(stops)} stops")
    if width < 1 or height < 1:
        raise ValueError(f"Preview size must be positive, got {width}x{height}")

    rgb = np.array([hex_to_rgb(color_to_hex(c)) for c in colors], dtype=np.float64)
    positions = np.maximum.accumulate(np.asarray(stops, dtype=np.float64))

    radians = math.radians(angle)
    dir_x, dir_y = math.sin(radians), -math.cos(radians)
    line_length = abs(width * dir_x) + abs(height * dir_y)

    # Pixel centres relative to the box centre (y grows downwards)
    xs = np.arange(width, dtype=np.float64) + 0.5 - width / 2
    ys = np.arange(height, dtype=np.float64) + 0.5 - height / 2
    grid_x, grid_y = np.meshgrid(xs, ys)
    percent = ((grid_x * dir_x + grid_y * dir_y) / line_length + 0.5) * 100

    image = np.empty((height, width, 3), dtype=np.float64)
    for channel in range(3):
        image[:, :, channel] = np.interp(percent, positions, rgb[:, channel])

    return np.clip(np.floor(image + 0.5), 0, 255).astype(np.uint8)


def save_gradient_preview(output_path, colors, stops, angle, width=800, height=400):
    """
    Render a gradient and write it to an image file.

    Raises:
        OSError: If OpenCV fails to write the file
    """
    image = render_gradient(colors, stops, angle, width, height)
    # OpenCV expects BGR channel order
    try:
        success = cv2.imwrite(str(output_path), image[:, :, ::-1].copy())
    except cv2.error as e:
        raise OSError(f"Failed to save image to {output_path}: {e}") from e
    if not success:
        raise OSError(f"Failed to save image to {output_path}")
    print(f"Gradient preview saved to: {output_path}")
    return image

#!/usr/bin/env python3
"""
Synthetic Palette Generator

Generates random colors around a base hue, with saturation and lightness
drawn from preset bands, and renders them as hex, rgba() or hsla() strings.

Usage: python palette_generator.py --count 5 --hue 210 --saturation high --format rgb
"""

import argparse
import uuid

import numpy as np

from color_utils import format_css_number, hsl_to_rgb, rgb_to_hex, round_half_up

HUE_SPREAD = 60

SATURATION_RANGES = {
    'low': (20, 40),
    'medium': (50, 70),
    'high': (80, 100),
}

LIGHTNESS_RANGES = {
    'low': (20, 40),
    'medium': (45, 65),
    'high': (70, 90),
}

COLOR_FORMATS = ('hex', 'rgb', 'hsl')


def format_color(hue, saturation, lightness, color_format='hex', alpha=1.0):
    """
    Render an HSL color in the requested output format.

    Args:
        hue (float): Hue in degrees
        saturation (float): Saturation in percent
        lightness (float): Lightness in percent
        color_format (str): 'hex', 'rgb' or 'hsl'
        alpha (float): Opacity in [0, 1]

    Returns:
        str: "#rrggbb[aa]", "rgba(r, g, b, a)" or "hsla(h, s%, l%, a)"
    """
    if color_format == 'hex':
        return rgb_to_hex(*hsl_to_rgb(hue, saturation, lightness), alpha=alpha)
    if color_format == 'rgb':
        r, g, b = hsl_to_rgb(hue, saturation, lightness)
        return f"rgba({r}, {g}, {b}, {format_css_number(alpha)})"
    if color_format == 'hsl':
        return (f"hsla({round_half_up(hue)}, {round_half_up(saturation)}%, "
                f"{round_half_up(lightness)}%, {format_css_number(alpha)})")
    raise ValueError(f"Unknown color format {color_format!r}, expected one of {', '.join(COLOR_FORMATS)}")


def generate_palette(count=5, base_hue=0, saturation='medium', lightness='medium',
                     color_format='hex', opacity=100, rng=None):
    """
    Generate ``count`` random colors around a base hue.

    Each hue is drawn uniformly within +/-30 degrees of ``base_hue``;
    saturation and lightness are drawn uniformly from the selected band.

    Args:
        count (int): Number of colors
        base_hue (float): Centre hue in degrees
        saturation (str): 'low', 'medium' or 'high'
        lightness (str): 'low', 'medium' or 'high'
        color_format (str): 'hex', 'rgb' or 'hsl'
        opacity (float): Opacity in percent [0, 100]
        rng (numpy.random.Generator): Random source, for reproducible palettes

    Returns:
        list: [{'id': str, 'value': str}, ...]
    """
    if saturation not in SATURATION_RANGES:
        raise ValueError(f"Unknown saturation range {saturation!r}")
    if lightness not in LIGHTNESS_RANGES:
        raise ValueError(f"Unknown lightness range {lightness!r}")
    if color_format not in COLOR_FORMATS:
        raise ValueError(f"Unknown color format {color_format!r}, expected one of {', '.join(COLOR_FORMATS)}")
    if not 0 <= opacity <= 100:
        raise ValueError(f"Opacity must be between 0 and 100, got {opacity}")
    if count < 0:
        raise ValueError(f"count must be non-negative, got {count}")

    if rng is None:
        rng = np.random.default_rng()

    min_sat, max_sat = SATURATION_RANGES[saturation]
    min_light, max_light = LIGHTNESS_RANGES[lightness]
    alpha = opacity / 100

    colors = []
    for _ in range(count):
        hue = (base_hue + rng.random() * HUE_SPREAD - HUE_SPREAD / 2 + 360) % 360
        sat = min_sat + rng.random() * (max_sat - min_sat)
        light = min_light + rng.random() * (max_light - min_light)
        colors.append({
            'id': str(uuid.uuid4()),
            'value': format_color(hue, sat, light, color_format, alpha),
        })

    return colors


def main():
    """Main function to run the palette generator."""
    parser = argparse.ArgumentParser(
        description="Generate a random color palette around a base hue"
    )
    parser.add_argument("--count", type=int, default=5, help="Number of colors to generate (default: 5)")
    parser.add_argument("--hue", type=float, default=0, help="Base hue in degrees, 0-360 (default: 0)")
    parser.add_argument("--saturation", choices=list(SATURATION_RANGES), default="medium",
                       help="Saturation band (default: medium)")
    parser.add_argument("--lightness", choices=list(LIGHTNESS_RANGES), default="medium",
                       help="Lightness band (default: medium)")
    parser.add_argument("--format", choices=list(COLOR_FORMATS), default="hex",
                       help="Output color format (default: hex)")
    parser.add_argument("--opacity", type=float, default=100, help="Opacity in percent (default: 100)")
    parser.add_argument("--seed", type=int, help="Random seed for a reproducible palette")

    args = parser.parse_args()

    if args.count < 1:
        print("Error: --count must be at least 1")
        return 1

    try:
        palette = generate_palette(
            count=args.count,
            base_hue=args.hue,
            saturation=args.saturation,
            lightness=args.lightness,
            color_format=args.format,
            opacity=args.opacity,
            rng=np.random.default_rng(args.seed),
        )
    except ValueError as e:
        print(f"Error: {e}")
        return 1

    for color in palette:
        print(color['value'])

    return 0


if __name__ == "__main__":
    exit(main())

#!/usr/bin/env python3
"""
Prism Extract

Extracts a small palette of dominant colors from an image with the median cut
algorithm and composes them into a CSS linear gradient. The palette can be
previewed as a swatch chart and the gradient rendered to an image.

Usage: python prism_extract.py input_image.jpg --colors 6 --angle 90 --preview gradient.png
"""

import argparse
import time
import uuid
from dataclasses import dataclass

import matplotlib.pyplot as plt
import numpy as np
from matplotlib.patches import Rectangle

from color_utils import rgb_to_hex, rgb_to_hsl
from gradient import DEFAULT_ANGLE, GradientSpec, css_declaration, default_stops, save_gradient_preview
from median_cut import quantize
from pixel_sampler import MAX_SAMPLE_SIZE, sample_image_file, sample_pixels

DEFAULT_COLOR_COUNT = 6
MIN_COLOR_COUNT = 3
MAX_COLOR_COUNT = 12


@dataclass(frozen=True)
class ColorInfo:
    """One extracted color: a unique id, its RGB triple, hex encoding and extraction rank."""
    id: str
    rgb: tuple
    hex: str
    count: int


def format_time(seconds):
    """Format time in a human-readable way."""
    if seconds < 1:
        return f"{seconds*1000:.1f}ms"
    elif seconds < 60:
        return f"{seconds:.2f}s"
    else:
        minutes = int(seconds // 60)
        remaining_seconds = seconds % 60
        return f"{minutes}m {remaining_seconds:.1f}s"


def build_color_infos(colors):
    """
    Wrap quantized colors in ColorInfo records.

    Each record gets a fresh UUID so callers can track selection by id rather
    than by position; ``count`` is the color's index in extraction order.
    """
    return [
        ColorInfo(id=str(uuid.uuid4()), rgb=tuple(int(c) for c in color), hex=rgb_to_hex(*color), count=index)
        for index, color in enumerate(colors)
    ]


def _palette_from_samples(samples, color_count, start_time):
    if len(samples) == 0:
        print("Warning: no usable pixels left after filtering; every color will be black")

    colors = quantize(samples, color_count)
    color_infos = build_color_infos(colors)
    print(f"Extracted {len(color_infos)} colors in {format_time(time.time() - start_time)}")
    return color_infos


def extract_colors(image_path, color_count=DEFAULT_COLOR_COUNT, max_size=MAX_SAMPLE_SIZE):
    """
    Extract dominant colors from an image file.

    Args:
        image_path (str): Path to the input image
        color_count (int): Number of colors to extract
        max_size (int): Longest side of the downscaled sampling image

    Returns:
        list: Exactly ``color_count`` ColorInfo records in extraction order

    Raises:
        ImageLoadError: If the image cannot be decoded
    """
    start_time = time.time()
    samples = sample_image_file(image_path, max_size=max_size)
    return _palette_from_samples(samples, color_count, start_time)


def extract_colors_from_array(image, color_count=DEFAULT_COLOR_COUNT, max_size=MAX_SAMPLE_SIZE):
    """Extract dominant colors from an in-memory RGB(A) or grayscale array."""
    start_time = time.time()
    samples = sample_pixels(image, max_size=max_size)
    return _palette_from_samples(samples, color_count, start_time)


def toggle_selection(selected_ids, color_id):
    """
    Toggle a color id in a selection set.

    Returns a new set. Deselecting the last selected color is refused and the
    selection is returned unchanged.
    """
    selected = set(selected_ids)
    if color_id in selected:
        if len(selected) > 1:
            selected.discard(color_id)
    else:
        selected.add(color_id)
    return selected


def active_color_stops(colors, selected_ids, stops):
    """
    Pair each selected color with its stop position.

    Colors keep their extraction order. A color's stop is looked up by its
    index in the full ``colors`` list, so deselecting one color does not shift
    the stops of the others. Missing stops default to 0.
    """
    pairs = []
    for index, color in enumerate(colors):
        if color.id not in selected_ids:
            continue
        stop = stops[index] if index < len(stops) else 0
        pairs.append((color, stop))
    return pairs


def create_palette_chart(colors, output_path):
    """
    Save a swatch chart of extracted colors with their hex codes.

    Args:
        colors (list): ColorInfo records
        output_path (str): Path to save the chart image
    """
    if not colors:
        print("No colors available for palette chart")
        return

    fig, ax = plt.subplots(figsize=(max(6, 1.2 * len(colors)), 2.5))

    for index, color in enumerate(colors):
        face = np.array(color.rgb, dtype=np.float64) / 255.0
        ax.add_patch(Rectangle((index, 0), 1, 1, facecolor=face, edgecolor='white', linewidth=2))

        # Dark text on light swatches, light text on dark ones
        _, _, lightness = rgb_to_hsl(*color.rgb)
        text_color = 'black' if lightness > 60 else 'white'
        ax.text(index + 0.5, 0.5, color.hex, ha='center', va='center', fontsize=10, color=text_color)
        ax.text(index + 0.5, -0.12, f"#{color.count + 1}", ha='center', va='top', fontsize=9)

    ax.set_xlim(0, len(colors))
    ax.set_ylim(-0.3, 1)
    ax.set_aspect('equal')
    ax.axis('off')
    ax.set_title(f'Extracted Palette ({len(colors)} colors)', fontsize=12)

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"Palette chart saved to: {output_path}")


def main():
    """Main function to run the palette extractor."""
    parser = argparse.ArgumentParser(
        description="Extract dominant colors from an image and build a CSS linear gradient"
    )
    parser.add_argument("input_image", help="Path to the input image")
    parser.add_argument("--colors", type=int, default=DEFAULT_COLOR_COUNT,
                       help=f"Number of colors to extract, {MIN_COLOR_COUNT}-{MAX_COLOR_COUNT} (default: {DEFAULT_COLOR_COUNT})")
    parser.add_argument("--max-size", type=int, default=MAX_SAMPLE_SIZE,
                       help=f"Longest side of the downscaled sampling image (default: {MAX_SAMPLE_SIZE})")
    parser.add_argument("--angle", type=float, default=DEFAULT_ANGLE,
                       help=f"Gradient angle in degrees (default: {DEFAULT_ANGLE})")
    parser.add_argument("--stops", type=float, nargs="+",
                       help="Stop position (0-100) for every extracted color (default: evenly spaced)")
    parser.add_argument("--exclude", type=int, nargs="+", default=[],
                       help="1-based indices of colors to leave out of the gradient")
    parser.add_argument("--preview", help="Also render the gradient to this image file")
    parser.add_argument("--preview-size", type=int, nargs=2, default=[800, 400], metavar=("WIDTH", "HEIGHT"),
                       help="Size of the gradient preview image (default: 800 400)")
    parser.add_argument("--palette-chart", help="Also save a swatch chart of the palette to this file")
    parser.add_argument("--css", action="store_true",
                       help="Print a full 'background: ...;' declaration instead of the bare gradient")

    args = parser.parse_args()

    if not MIN_COLOR_COUNT <= args.colors <= MAX_COLOR_COUNT:
        print(f"Error: --colors must be between {MIN_COLOR_COUNT} and {MAX_COLOR_COUNT}")
        return 1

    if args.stops is not None and len(args.stops) != args.colors:
        print(f"Error: Expected {args.colors} stop positions but got {len(args.stops)}")
        return 1

    for index in args.exclude:
        if not 1 <= index <= args.colors:
            print(f"Error: Cannot exclude color {index}, valid indices are 1-{args.colors}")
            return 1

    try:
        total_start = time.time()

        print(f"Loading and analyzing image: {args.input_image}")
        colors = extract_colors(args.input_image, args.colors, args.max_size)

        print("\nExtracted palette:")
        for color in colors:
            r, g, b = color.rgb
            print(f"  {color.count + 1:>2}  {color.hex}  rgb({r}, {g}, {b})")

        stops = args.stops if args.stops is not None else default_stops(len(colors))

        selected = {color.id for color in colors}
        for index in sorted(set(args.exclude)):
            updated = toggle_selection(selected, colors[index - 1].id)
            if updated == selected:
                print(f"Warning: keeping color {index}, at least one color must stay in the gradient")
            selected = updated

        spec = GradientSpec(args.angle, active_color_stops(colors, selected, stops))
        gradient = spec.to_css()

        print("\nGradient:")
        print(css_declaration(gradient) if args.css else gradient)

        if args.preview:
            width, height = args.preview_size
            save_gradient_preview(
                args.preview,
                [color for color, _ in spec.stops],
                [stop for _, stop in spec.stops],
                spec.angle,
                width,
                height,
            )

        if args.palette_chart:
            create_palette_chart(colors, args.palette_chart)

        total_time = time.time() - total_start
        print(f"\nTotal processing completed in {format_time(total_time)}")

    except Exception as e:
        print(f"Error: {e}")
        return 1

    return 0


if __name__ == "__main__":
    exit(main())

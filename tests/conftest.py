"""
pytest configuration and shared fixtures for the Prism Extract test suite
"""

import pytest
import numpy as np
import cv2
import tempfile
from pathlib import Path


def write_rgb_image(path, image_rgb):
    """Write an RGB array to disk with OpenCV (which expects BGR)."""
    cv2.imwrite(str(path), image_rgb[:, :, [2, 1, 0]])
    return str(path)


def write_rgba_image(path, image_rgba):
    """Write an RGBA array to a PNG with OpenCV (which expects BGRA)."""
    cv2.imwrite(str(path), image_rgba[:, :, [2, 1, 0, 3]])
    return str(path)


@pytest.fixture
def temp_dir():
    """Create a temporary directory for test files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def sample_image_rgb():
    """Create a simple 10x10 RGB test image with known colors."""
    image = np.zeros((10, 10, 3), dtype=np.uint8)

    # Create a simple pattern with known colors
    image[0:3, 0:3] = [255, 0, 0]      # Red
    image[0:3, 3:6] = [0, 255, 0]      # Green
    image[0:3, 6:10] = [0, 0, 255]     # Blue
    image[3:6, 0:3] = [255, 255, 0]    # Yellow
    image[3:6, 3:6] = [255, 0, 255]    # Magenta
    image[3:6, 6:10] = [0, 255, 255]   # Cyan
    image[6:10, 0:10] = [128, 128, 128] # Gray

    return image


@pytest.fixture
def sample_image_path(sample_image_rgb, temp_dir):
    """Save the sample RGB image to a temporary file and return the path."""
    return write_rgb_image(temp_dir / "sample_image.png", sample_image_rgb)


@pytest.fixture
def two_tone_image():
    """10x10 image: left half muted red, right half muted blue."""
    image = np.zeros((10, 10, 3), dtype=np.uint8)
    image[:, 0:5] = [200, 30, 30]
    image[:, 5:10] = [30, 30, 200]
    return image


@pytest.fixture
def two_tone_image_path(two_tone_image, temp_dir):
    """Save the two-tone image to a temporary file and return the path."""
    return write_rgb_image(temp_dir / "two_tone.png", two_tone_image)


@pytest.fixture
def white_image_path(temp_dir):
    """A fully white image, which the sampler filters out completely."""
    return write_rgb_image(temp_dir / "white.png", np.full((20, 20, 3), 255, dtype=np.uint8))


@pytest.fixture
def transparent_image_path(temp_dir):
    """A colorful but fully transparent RGBA image."""
    image = np.zeros((20, 20, 4), dtype=np.uint8)
    image[:, :, 0] = 200
    image[:, :, 2] = 100
    return write_rgba_image(temp_dir / "transparent.png", image)


@pytest.fixture
def gradient_image():
    """Create a gradient test image for more complex testing."""
    height, width = 100, 100
    image = np.zeros((height, width, 3), dtype=np.uint8)

    for y in range(height):
        for x in range(width):
            # Create a diagonal gradient
            r = int(255 * x / width)
            g = int(255 * y / height)
            b = int(255 * (x + y) / (width + height))
            image[y, x] = [r, g, b]

    return image


@pytest.fixture
def gradient_image_path(gradient_image, temp_dir):
    """Save the gradient image to a temporary file and return the path."""
    return write_rgb_image(temp_dir / "gradient_image.png", gradient_image)


@pytest.fixture
def random_pixels():
    """A reproducible set of 500 random RGB samples."""
    rng = np.random.default_rng(1234)
    return rng.integers(0, 256, size=(500, 3), dtype=np.uint8)


class TestHelpers:
    """Helper functions for testing."""

    @staticmethod
    def sorted_rows(pixels):
        """Rows of a pixel array as a sorted list of tuples, for multiset comparison."""
        return sorted(map(tuple, np.asarray(pixels).reshape(-1, 3).tolist()))

    @staticmethod
    def assert_valid_palette(colors, expected_count):
        """
        Assert that an extracted palette has valid properties.

        Args:
            colors: List of ColorInfo records
            expected_count: Number of colors that were requested
        """
        assert len(colors) == expected_count, f"Expected {expected_count} colors, got {len(colors)}"

        ids = [color.id for color in colors]
        assert len(set(ids)) == len(ids), "Color ids should be unique"

        for index, color in enumerate(colors):
            assert color.count == index, "count should be the extraction rank"
            assert len(color.rgb) == 3, "Color should be RGB tuple"
            assert all(isinstance(c, int) for c in color.rgb), "Color values should be integers"
            assert all(0 <= c <= 255 for c in color.rgb), "Color values should be 0-255"
            assert color.hex == "#" + "".join(f"{c:02x}" for c in color.rgb)


@pytest.fixture
def test_helpers():
    """Provide access to test helper functions."""
    return TestHelpers

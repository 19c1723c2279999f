"""
Pixel Sampler

Turns a decoded image into the flat list of pixel samples fed to the median
cut quantizer. The image is downscaled so its longer side is at most
``max_size`` pixels, then pixels that are translucent, near white or near
black are dropped so the palette favours distinguishing mid-tone colors.

Image decoding itself is delegated to OpenCV.
"""

import cv2
import numpy as np

MAX_SAMPLE_SIZE = 200
ALPHA_THRESHOLD = 125
NEAR_WHITE_THRESHOLD = 240
NEAR_BLACK_THRESHOLD = 15


class ImageLoadError(ValueError):
    """The image file could not be read or decoded."""


class PixelSurfaceError(RuntimeError):
    """A decoded image cannot provide an RGBA pixel surface."""


def load_image_rgba(image_path):
    """
    Load an image file and return it as an RGBA uint8 array.

    Grayscale, BGR and BGRA images are supported; 16-bit images are reduced
    to 8 bits per channel.

    Args:
        image_path (str): Path to the input image

    Returns:
        numpy.ndarray: (height, width, 4) RGBA image

    Raises:
        ImageLoadError: If OpenCV cannot decode the file
    """
    try:
        image = cv2.imread(str(image_path), cv2.IMREAD_UNCHANGED)
    except cv2.error as e:
        raise ImageLoadError(f"Could not load image from {image_path}: {e}") from e

    if image is None:
        raise ImageLoadError(f"Could not load image from {image_path}")

    # OpenCV decodes to BGR(A); everything downstream works in RGB(A)
    if image.ndim == 3 and image.shape[2] == 3:
        image = cv2.cvtColor(image, cv2.COLOR_BGR2RGB)
    elif image.ndim == 3 and image.shape[2] == 4:
        image = cv2.cvtColor(image, cv2.COLOR_BGRA2RGBA)

    return to_rgba_surface(image)


def to_rgba_surface(image):
    """
    Normalize an in-memory image to an RGBA uint8 surface.

    Accepts (H, W) grayscale, (H, W, 1), (H, W, 3) RGB and (H, W, 4) RGBA
    arrays of dtype uint8 or uint16. Missing alpha is filled with 255.

    Raises:
        PixelSurfaceError: If the array cannot be read as RGBA pixels
    """
    if not isinstance(image, np.ndarray):
        raise PixelSurfaceError(f"Expected a numpy array, got {type(image).__name__}")

    if image.ndim == 3 and image.shape[2] == 1:
        image = image[:, :, 0]

    if image.ndim not in (2, 3):
        raise PixelSurfaceError(f"Unsupported image dimensionality: {image.shape}")
    if image.ndim == 3 and image.shape[2] not in (3, 4):
        raise PixelSurfaceError(f"Unsupported channel count: {image.shape[2]}")
    if image.shape[0] == 0 or image.shape[1] == 0:
        raise PixelSurfaceError(f"Image has no pixels: {image.shape}")

    if image.dtype == np.uint16:
        image = (image >> 8).astype(np.uint8)
    elif image.dtype != np.uint8:
        raise PixelSurfaceError(f"Unsupported pixel dtype: {image.dtype}")

    image = np.ascontiguousarray(image)

    if image.ndim == 2:
        return cv2.cvtColor(image, cv2.COLOR_GRAY2RGBA)
    if image.shape[2] == 3:
        return cv2.cvtColor(image, cv2.COLOR_RGB2RGBA)
    return image


def fit_size(width, height, max_size=MAX_SAMPLE_SIZE):
    """
    Compute sampling dimensions that fit within ``max_size`` on the longer side.

    Aspect ratio is preserved, images are only ever shrunk, and neither side
    drops below one pixel.

    Returns:
        tuple: (new_width, new_height)
    """
    if max_size < 1:
        raise ValueError(f"max_size must be at least 1, got {max_size}")

    if max(width, height) <= max_size:
        return width, height

    if width >= height:
        return max_size, max(1, height * max_size // width)
    return max(1, width * max_size // height), max_size


def downscale_surface(surface, size):
    """
    Shrink an RGBA surface with area averaging on premultiplied alpha.

    Color is weighted by alpha while averaging, so fully transparent pixels
    add nothing to the color of the visible pixels they are merged with.
    Pixels that end up fully transparent come back as (0, 0, 0, 0).

    Args:
        surface (numpy.ndarray): (H, W, 4) RGBA uint8 surface
        size (tuple): Target (width, height)

    Returns:
        numpy.ndarray: RGBA uint8 surface of the requested size
    """
    if np.all(surface[:, :, 3] == 255):
        return cv2.resize(surface, size, interpolation=cv2.INTER_AREA)

    premultiplied = surface.astype(np.float32)
    premultiplied[:, :, :3] *= premultiplied[:, :, 3:] / 255.0
    resized = cv2.resize(premultiplied, size, interpolation=cv2.INTER_AREA)

    alpha = resized[:, :, 3:]
    rgb = np.zeros_like(resized[:, :, :3])
    np.divide(resized[:, :, :3] * 255.0, alpha, out=rgb, where=alpha > 0)

    result = np.concatenate([rgb, alpha], axis=2)
    return np.clip(np.floor(result + 0.5), 0, 255).astype(np.uint8)


def sample_pixels(image, max_size=MAX_SAMPLE_SIZE, alpha_threshold=ALPHA_THRESHOLD,
                  white_threshold=NEAR_WHITE_THRESHOLD, black_threshold=NEAR_BLACK_THRESHOLD):
    """
    Downscale an image and collect the pixels worth quantizing.

    A pixel is kept when its alpha is above ``alpha_threshold`` and it is
    neither near white (every channel above ``white_threshold``) nor near
    black (every channel below ``black_threshold``). Alpha is used only for
    filtering and is not part of the result.

    Args:
        image (numpy.ndarray): RGB(A) or grayscale image
        max_size (int): Maximum length of the longer side while sampling

    Returns:
        numpy.ndarray: (N, 3) uint8 array of RGB samples; N may be 0
    """
    surface = to_rgba_surface(image)
    height, width = surface.shape[:2]
    new_width, new_height = fit_size(width, height, max_size)

    if (new_width, new_height) != (width, height):
        surface = downscale_surface(surface, (new_width, new_height))
        print(f"Downscaled {width}x{height} image to {new_width}x{new_height} for sampling")

    pixels = surface.reshape(-1, 4)
    rgb = pixels[:, :3]

    visible = pixels[:, 3] > alpha_threshold
    near_white = np.all(rgb > white_threshold, axis=1)
    near_black = np.all(rgb < black_threshold, axis=1)
    keep = visible & ~near_white & ~near_black

    samples = np.ascontiguousarray(rgb[keep])
    print(f"Kept {len(samples):,} of {len(pixels):,} pixels after filtering")
    return samples


def sample_image_file(image_path, max_size=MAX_SAMPLE_SIZE, **thresholds):
    """Load an image file and return its filtered pixel samples."""
    image = load_image_rgba(image_path)
    samples = sample_pixels(image, max_size=max_size, **thresholds)
    # Drop the full-resolution bitmap before quantization
    del image
    return samples

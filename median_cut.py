"""
Median Cut Quantizer

Reduces a set of sampled pixels to a small number of representative colors.
The pixel set is recursively sorted along the channel with the greatest range
and cut at its positional median; after ``depth`` levels every leaf bucket is
averaged into one color.

Output order follows the split history (lower half first at every level), not
any visual property, and is fully deterministic for a given input.
"""

import numpy as np


def split_depth(color_count):
    """
    Number of split levels needed for ``color_count`` colors: ceil(log2(n)).

    Raises:
        ValueError: If color_count is not a positive integer
    """
    if isinstance(color_count, bool) or not isinstance(color_count, (int, np.integer)):
        raise ValueError(f"color_count must be an integer, got {color_count!r}")
    if color_count < 1:
        raise ValueError(f"color_count must be at least 1, got {color_count}")
    return (int(color_count) - 1).bit_length()


def as_pixel_array(pixels):
    """
    Coerce pixel samples to an (N, 3) uint8 array.

    Accepts a numpy array or any sequence of (r, g, b) or (r, g, b, a)
    values. An alpha column is dropped.

    Raises:
        ValueError: If the shape is wrong, the values are not integers or a
            channel falls outside 0-255
    """
    array = np.asarray(pixels)
    if array.size == 0:
        return np.empty((0, 3), dtype=np.uint8)

    if array.ndim != 2 or array.shape[1] not in (3, 4):
        raise ValueError(f"Pixels must have shape (N, 3) or (N, 4), got {array.shape}")
    if not np.issubdtype(array.dtype, np.integer):
        raise ValueError(f"Pixel channel values must be integers, got dtype {array.dtype}")
    if array.min() < 0 or array.max() > 255:
        raise ValueError("Pixel channel values must be in the range 0-255")

    return array[:, :3].astype(np.uint8)


def select_split_channel(bucket):
    """
    Index of the channel with the greatest (max - min) range in a bucket.

    Ties resolve in channel order: red, then green, then blue.
    """
    if len(bucket) == 0:
        return 0
    ranges = bucket.max(axis=0).astype(np.int64) - bucket.min(axis=0)
    # argmax returns the first maximum, which gives the red > green > blue priority
    return int(np.argmax(ranges))


def average_color(bucket):
    """
    Component-wise mean of a bucket, rounded half up.

    An empty bucket averages to black (0, 0, 0).
    """
    count = len(bucket)
    if count == 0:
        return (0, 0, 0)
    sums = bucket.sum(axis=0, dtype=np.int64)
    # Exact integer form of floor(sum / count + 0.5)
    return tuple(int((2 * s + count) // (2 * count)) for s in sums)


def median_cut_buckets(pixels, depth):
    """
    Partition pixels into exactly ``2 ** depth`` buckets by median cut.

    Every bucket is a slice of one working copy of the input, so the buckets
    are disjoint and together contain each input pixel exactly once. Buckets
    may be empty when there are fewer pixels than leaves. Empty buckets keep
    splitting into empty halves, so they sit at their place in the split
    order rather than being appended at the end: one pixel at depth 2 gives
    three empty buckets followed by the pixel. The caller's pixels are never
    reordered.

    Args:
        pixels: (N, 3) array or sequence of RGB triples
        depth (int): Number of split levels

    Returns:
        list: ``2 ** depth`` arrays of shape (k, 3), in split order
    """
    if depth < 0:
        raise ValueError(f"depth must be non-negative, got {depth}")

    work = as_pixel_array(pixels).copy()
    ranges = []
    _split(work, 0, len(work), depth, ranges)
    return [work[start:end] for start, end in ranges]


def _split(work, start, end, depth, ranges):
    """Sort work[start:end] on its widest channel and recurse into both halves."""
    if depth == 0:
        ranges.append((start, end))
        return

    if end > start:
        bucket = work[start:end]
        channel = select_split_channel(bucket)
        order = np.argsort(bucket[:, channel], kind="stable")
        work[start:end] = bucket[order]

    mid = start + (end - start) // 2
    _split(work, start, mid, depth - 1, ranges)
    _split(work, mid, end, depth - 1, ranges)


def quantize(pixels, color_count):
    """
    Extract ``color_count`` representative colors from pixel samples.

    Runs median cut to depth ceil(log2(color_count)), averages every bucket,
    and keeps the first ``color_count`` averages. Extra buckets are discarded,
    not merged. An empty pixel set yields black for every color.

    Args:
        pixels: (N, 3) array or sequence of RGB triples
        color_count (int): Number of colors to return (>= 1)

    Returns:
        list: ``color_count`` (r, g, b) integer tuples
    """
    depth = split_depth(color_count)
    colors = [average_color(bucket) for bucket in median_cut_buckets(pixels, depth)]
    return colors[:color_count]

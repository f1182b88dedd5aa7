"""Block-average a flat RGBA buffer into a grid of color samples."""
from typing import Tuple

import numpy as np

from ..errors import InvalidDimensions

CHANNELS = 4


def grid_shape(width: int, height: int, x_step: int = 1, y_step: int = 1) -> Tuple[int, int]:
    """Number of (rows, cols) of cells covering a ``width`` x ``height`` image."""
    rows = -(-height // y_step)
    cols = -(-width // x_step)
    return rows, cols


def to_pixel_array(buffer, width: int, height: int) -> np.ndarray:
    """
    Validate ``buffer`` against the image size and view it as (h, w, 4).

    Raises:
        InvalidDimensions: if the sizes are not positive, the buffer is not a
            whole number of RGBA pixels, or the pixel count is not w * h.
    """
    if width <= 0 or height <= 0:
        raise InvalidDimensions(f"width and height must be positive, got {width}x{height}")

    if isinstance(buffer, (bytes, bytearray, memoryview)):
        pixels = np.frombuffer(buffer, dtype=np.uint8)
    else:
        pixels = np.asarray(buffer)
    if pixels.ndim != 1:
        pixels = pixels.reshape(-1)
    if pixels.size % CHANNELS != 0:
        raise InvalidDimensions(
            f"buffer length {pixels.size} is not a multiple of {CHANNELS}"
        )
    if pixels.size // CHANNELS != width * height:
        raise InvalidDimensions(
            f"buffer holds {pixels.size // CHANNELS} pixels but "
            f"{width}x{height} needs {width * height}"
        )
    return pixels.reshape(height, width, CHANNELS)


def sample_pixels(buffer, width: int, height: int, x_step: int = 1, y_step: int = 1) -> np.ndarray:
    """
    Average each ``x_step`` x ``y_step`` block of the image into one sample.

    Cells on the right and bottom edges may be cut short by the image
    border; their mean is taken over the pixels actually inside the image.

    Returns:
        float64 array of shape (rows * cols, 4) in row-major cell order.
    """
    pixels = to_pixel_array(buffer, width, height).astype(np.float64)

    row_starts = np.arange(0, height, y_step)
    col_starts = np.arange(0, width, x_step)

    # Sum rows of each cell band, then columns within each band.
    sums = np.add.reduceat(pixels, row_starts, axis=0)
    sums = np.add.reduceat(sums, col_starts, axis=1)

    row_counts = np.diff(np.append(row_starts, height))
    col_counts = np.diff(np.append(col_starts, width))
    counts = np.outer(row_counts, col_counts).astype(np.float64)

    means = sums / counts[:, :, np.newaxis]
    return means.reshape(-1, CHANNELS)

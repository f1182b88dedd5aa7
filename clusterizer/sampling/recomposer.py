"""Expand a grid of samples back into a full-resolution RGBA buffer."""
import numpy as np

from ..errors import GridSizeMismatch
from .sampler import CHANNELS, grid_shape


def recompose_pixels(samples, width: int, height: int, x_step: int = 1, y_step: int = 1) -> np.ndarray:
    """
    Paint every in-bounds pixel of each cell with that cell's sample.

    The step values must be the ones the grid was sampled with.

    Returns:
        Flat array of length ``width * height * 4`` with the samples' dtype.
    """
    samples = np.asarray(samples)
    rows, cols = grid_shape(width, height, x_step, y_step)
    if samples.ndim != 2 or samples.shape[1] != CHANNELS or len(samples) != rows * cols:
        raise GridSizeMismatch(
            f"grid of shape {samples.shape} does not match {rows}x{cols} cells "
            f"for a {width}x{height} image with steps ({x_step}, {y_step})"
        )

    grid = samples.reshape(rows, cols, CHANNELS)
    full = np.repeat(np.repeat(grid, y_step, axis=0), x_step, axis=1)
    return np.ascontiguousarray(full[:height, :width]).reshape(-1)

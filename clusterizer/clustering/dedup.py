"""Distinct-color extraction used to seed centroids from real data."""
import numpy as np


def unique_colors(samples) -> np.ndarray:
    """Return the distinct rows of ``samples`` in first-occurrence order."""
    samples = np.asarray(samples, dtype=np.float64)
    if len(samples) == 0:
        return samples.reshape(0, 4)

    _, first_index = np.unique(samples, axis=0, return_index=True)
    return samples[np.sort(first_index)].copy()

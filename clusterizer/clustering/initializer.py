"""Random selection of initial centroids."""
from typing import Optional

import numpy as np

from ..errors import InsufficientUniqueColors, InvalidOptions
from ..utils.logger import get_logger

logger = get_logger(__name__)


def initialize_centroids(
    unique, cluster_quantity: int, rng: Optional[np.random.Generator] = None
) -> np.ndarray:
    """
    Pick ``cluster_quantity`` distinct colors uniformly at random.

    Positions are drawn without replacement with a partial Fisher-Yates
    shuffle, so the draw always terminates after ``cluster_quantity`` swaps.

    Args:
        unique: Distinct colors, shape (n, 4).
        cluster_quantity: Number of centroids to pick.
        rng: Random generator; a fresh unseeded one is used if omitted.

    Returns:
        float64 array of shape (cluster_quantity, 4), independent of ``unique``.

    Raises:
        InsufficientUniqueColors: if ``cluster_quantity > n``.
    """
    unique = np.asarray(unique, dtype=np.float64)
    if cluster_quantity < 1:
        raise InvalidOptions(f"cluster_quantity must be >= 1, got {cluster_quantity}")
    available = len(unique)
    if cluster_quantity > available:
        raise InsufficientUniqueColors(cluster_quantity, available)

    if rng is None:
        rng = np.random.default_rng()

    positions = np.arange(available)
    for i in range(cluster_quantity):
        j = int(rng.integers(i, available))
        positions[i], positions[j] = positions[j], positions[i]

    chosen = positions[:cluster_quantity]
    logger.debug(f"Seeded {cluster_quantity} centroids from positions {chosen.tolist()}")
    return unique[chosen].copy()

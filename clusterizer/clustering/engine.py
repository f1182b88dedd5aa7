"""Iterative k-means (Lloyd) loop over color samples."""
from dataclasses import dataclass
from enum import Enum
import time
from typing import Callable, Optional

import numpy as np

from ..errors import InvalidOptions
from ..utils.logger import get_logger

logger = get_logger(__name__)

IterationHook = Callable[[int, float, np.ndarray], None]


class EngineState(Enum):
    RUNNING = "running"
    CONVERGED = "converged"
    MAX_ITERATIONS_REACHED = "max_iterations_reached"


@dataclass
class ClusteringResult:
    """Outcome of a finished engine run."""

    centroids: np.ndarray
    labels: np.ndarray
    state: EngineState
    # Index of the last pass that ran (0-based).
    iteration: int
    # Centroid movement measured in the last pass.
    shifts: np.ndarray

    @property
    def iterations(self) -> int:
        """Number of full passes executed."""
        return self.iteration + 1

    @property
    def converged(self) -> bool:
        return self.state is EngineState.CONVERGED


class KMeansEngine:
    """
    Assign samples to the nearest centroid and move centroids to the mean of
    their members until no centroid moves by ``tolerance`` or more.

    Distances are squared Euclidean over all four channels with equal
    weight. Ties go to the lowest centroid index. A centroid that receives
    no samples keeps its previous value.
    """

    def __init__(
        self,
        max_iterations: int = 100,
        tolerance: float = 0.1,
        on_iteration: Optional[IterationHook] = None,
        chunk_size: int = 1048576,
    ):
        if max_iterations < 1:
            raise InvalidOptions(f"max_iterations must be >= 1, got {max_iterations}")
        if tolerance < 0:
            raise InvalidOptions(f"tolerance must be >= 0, got {tolerance}")
        if chunk_size < 1:
            raise InvalidOptions(f"chunk_size must be >= 1, got {chunk_size}")
        self.max_iterations = max_iterations
        self.tolerance = tolerance
        self.on_iteration = on_iteration
        self.chunk_size = chunk_size

        self.state = EngineState.RUNNING
        self.iteration = 0

    def run(self, samples, centroids) -> ClusteringResult:
        """
        Cluster ``samples`` starting from ``centroids``.

        Neither input is modified; the engine works on its own copy of the
        centroids.

        Returns:
            ClusteringResult with final centroids and one label per sample.
        """
        samples = np.asarray(samples, dtype=np.float64)
        centroids = np.array(centroids, dtype=np.float64, copy=True)

        self.state = EngineState.RUNNING
        self.iteration = 0
        started = time.perf_counter()

        labels = np.zeros(len(samples), dtype=np.intp)
        shifts = np.zeros(len(centroids), dtype=np.float64)

        for iteration in range(self.max_iterations):
            self.iteration = iteration
            previous = centroids.copy()

            labels = self.assign(samples, centroids)
            centroids = self.update(samples, labels, previous)

            shifts = np.sqrt(np.sum((centroids - previous) ** 2, axis=1))

            elapsed = time.perf_counter() - started
            logger.debug(
                f"Iteration {iteration}: max shift {float(shifts.max()):.4f} "
                f"({elapsed:.3f}s)"
            )
            if self.on_iteration is not None:
                self.on_iteration(iteration, elapsed, shifts.copy())

            if np.all(shifts < self.tolerance):
                self.state = EngineState.CONVERGED
                break
        else:
            self.state = EngineState.MAX_ITERATIONS_REACHED

        if self.state is EngineState.CONVERGED:
            logger.info(f"Converged after {self.iteration + 1} iterations")
        else:
            logger.info(
                f"Stopped at max_iterations={self.max_iterations} without converging "
                f"(max shift {float(shifts.max()):.4f})"
            )

        return ClusteringResult(
            centroids=centroids,
            labels=labels,
            state=self.state,
            iteration=self.iteration,
            shifts=shifts,
        )

    def assign(self, samples: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """Label every sample with the index of its nearest centroid."""
        labels = np.empty(len(samples), dtype=np.intp)
        rows = self.block_rows(len(centroids))
        for start in range(0, len(samples), rows):
            block = samples[start:start + rows]
            diff = block[:, np.newaxis, :] - centroids[np.newaxis, :, :]
            distances = np.einsum("ijk,ijk->ij", diff, diff)
            # argmin returns the first minimum, i.e. the lowest centroid index.
            labels[start:start + len(block)] = np.argmin(distances, axis=1)
        return labels

    def block_rows(self, cluster_count: int) -> int:
        """Samples per distance block, so a block holds about chunk_size distances."""
        return max(1, self.chunk_size // max(1, cluster_count))

    @staticmethod
    def update(samples: np.ndarray, labels: np.ndarray, centroids: np.ndarray) -> np.ndarray:
        """Mean of each cluster's members; empty clusters keep ``centroids``."""
        k = len(centroids)
        counts = np.bincount(labels, minlength=k)
        sums = np.zeros_like(centroids, dtype=np.float64)
        np.add.at(sums, labels, samples)

        updated = centroids.copy()
        filled = counts > 0
        updated[filled] = sums[filled] / counts[filled, np.newaxis]
        return updated

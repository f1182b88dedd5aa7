from .dedup import unique_colors
from .initializer import initialize_centroids
from .engine import ClusteringResult, EngineState, KMeansEngine

__all__ = [
    "unique_colors",
    "initialize_centroids",
    "ClusteringResult",
    "EngineState",
    "KMeansEngine",
]

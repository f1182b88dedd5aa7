"""Main orchestrator that ties the quantization pipeline together."""
from pathlib import Path
from typing import Mapping, Optional

import numpy as np
import yaml

from .clustering.dedup import unique_colors
from .clustering.engine import ClusteringResult, IterationHook, KMeansEngine
from .clustering.initializer import initialize_centroids
from .options import QuantizeOptions
from .sampling.recomposer import recompose_pixels
from .sampling.sampler import sample_pixels
from .utils.logger import get_logger

logger = get_logger(__name__)

DEFAULTS_PATH = Path(__file__).parent / "config" / "defaults.yaml"


class ImageQuantizer:
    """
    Complete k-means color quantization pipeline.

    Pipeline:
      1. Average the RGBA buffer into a grid of samples
      2. Collect the distinct sample colors
      3. Seed centroids from random distinct colors
      4. Run k-means until convergence or the iteration cap
      5. Replace each sample by its centroid color, rounded
      6. Expand the grid back to full resolution
    """

    def __init__(
        self,
        config: dict = None,
        config_path: str = None,
        preset: str = None,
        on_iteration: Optional[IterationHook] = None,
    ):
        """
        Initialize with config dict, YAML path, or preset name.

        Args:
            config: Direct config dictionary.
            config_path: Path to YAML config file.
            preset: Preset name ("preview", "poster", "palette").
            on_iteration: Called after every k-means pass with
                (iteration, elapsed_seconds, centroid_shifts).
        """
        self.config = self._load_config(config, config_path, preset)
        self.defaults = QuantizeOptions.from_mapping(self.config.get("options", {}))
        self.chunk_size = self.config.get("engine", {}).get("chunk_size", 1048576)
        self.on_iteration = on_iteration
        self.last_result: Optional[ClusteringResult] = None

    def _load_config(self, config, config_path, preset) -> dict:
        """Load and merge configuration."""
        if DEFAULTS_PATH.exists():
            with open(DEFAULTS_PATH) as f:
                base_config = yaml.safe_load(f) or {}
        else:
            base_config = {}

        if preset:
            presets = base_config.get("presets", {})
            if preset not in presets:
                raise ValueError(
                    f"Unknown preset {preset!r}; choose from {sorted(presets)}"
                )
            base_config = self._deep_merge(base_config, presets[preset])

        if config_path:
            with open(config_path) as f:
                file_config = yaml.safe_load(f) or {}
            base_config = self._deep_merge(base_config, file_config)

        if config:
            base_config = self._deep_merge(base_config, config)

        return base_config

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> dict:
        """Deep merge two dicts. Override takes precedence."""
        result = base.copy()
        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = ImageQuantizer._deep_merge(result[key], value)
            else:
                result[key] = value
        return result

    def resolve_options(self, options: Optional[Mapping] = None) -> QuantizeOptions:
        """Shallow-merge per-call ``options`` over the configured defaults."""
        if isinstance(options, QuantizeOptions):
            return options
        return QuantizeOptions.from_mapping(options, base=self.defaults)

    def quantize(self, buffer, width: int, height: int, options: Optional[Mapping] = None) -> np.ndarray:
        """
        Reduce the image to ``cluster_quantity`` colors.

        Args:
            buffer: Flat RGBA pixel data (any array-like or bytes).
            width: Image width in pixels.
            height: Image height in pixels.
            options: Partial options; unset keys keep their defaults.

        Returns:
            New uint8 buffer with the same length as ``buffer``.

        Raises:
            InvalidDimensions: buffer length does not match width x height.
            InsufficientUniqueColors: fewer distinct colors than clusters.
            InvalidOptions: an option is out of range.
        """
        opts = self.resolve_options(options)
        if opts.initialization_method != "random":
            logger.warning(
                f"initialization_method={opts.initialization_method!r} is not "
                "implemented; using uniform random seeding"
            )

        logger.info(
            f"Quantizing {width}x{height} image to {opts.cluster_quantity} colors "
            f"(steps {opts.x_step}x{opts.y_step})"
        )

        # --- Step 1: Sample ---
        samples = sample_pixels(buffer, width, height, opts.x_step, opts.y_step)
        logger.info(f"  Sampled {len(samples)} cells")

        # --- Step 2-3: Seed ---
        unique = unique_colors(samples)
        logger.info(f"  Found {len(unique)} unique colors")
        rng = np.random.default_rng(opts.seed)
        centroids = initialize_centroids(unique, opts.cluster_quantity, rng)

        # --- Step 4: Cluster ---
        engine = KMeansEngine(
            max_iterations=opts.max_iterations,
            tolerance=opts.tolerance,
            on_iteration=self.on_iteration,
            chunk_size=self.chunk_size,
        )
        result = engine.run(samples, centroids)
        self.last_result = result

        # --- Step 5-6: Rebuild ---
        palette = round_half_up(result.centroids)
        quantized = palette[result.labels]
        output = recompose_pixels(quantized, width, height, opts.x_step, opts.y_step)

        logger.info("Quantization complete!")
        return output


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer (.5 goes up) and clamp into uint8."""
    return np.clip(np.floor(np.asarray(values) + 0.5), 0, 255).astype(np.uint8)


def quantize_image(buffer, width: int, height: int, options: Optional[Mapping] = None) -> np.ndarray:
    """One-shot quantization with the default configuration."""
    return ImageQuantizer().quantize(buffer, width, height, options)

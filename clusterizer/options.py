"""Quantization options and their request-side (camelCase) spelling."""
from dataclasses import dataclass, fields, replace
import math
import numbers
from typing import Any, Mapping, Optional

from .errors import InvalidOptions

# Request keys accepted on the worker boundary, mapped to option fields.
REQUEST_KEYS = {
    "xStep": "x_step",
    "yStep": "y_step",
    "horizontalStep": "x_step",
    "verticalStep": "y_step",
    "clusterQuantity": "cluster_quantity",
    "maxIterations": "max_iterations",
    "tolerance": "tolerance",
    "initializationMethod": "initialization_method",
    "seed": "seed",
}

INITIALIZATION_METHODS = ("random", "kmeans++")


@dataclass(frozen=True)
class QuantizeOptions:
    """Settings for one quantization run."""

    x_step: int = 1
    y_step: int = 1
    cluster_quantity: int = 2
    max_iterations: int = 100
    tolerance: float = 0.1
    # "kmeans++" is accepted but seeding is always uniform random.
    initialization_method: str = "random"
    seed: Optional[int] = None

    def __post_init__(self):
        for name in ("x_step", "y_step", "cluster_quantity", "max_iterations"):
            object.__setattr__(self, name, _positive_int(name, getattr(self, name)))

        tolerance = self.tolerance
        if isinstance(tolerance, bool) or not isinstance(tolerance, numbers.Real):
            raise InvalidOptions(f"tolerance must be a number, got {tolerance!r}")
        tolerance = float(tolerance)
        if math.isnan(tolerance) or tolerance < 0:
            raise InvalidOptions(f"tolerance must be >= 0, got {tolerance!r}")
        object.__setattr__(self, "tolerance", tolerance)

        if self.initialization_method not in INITIALIZATION_METHODS:
            raise InvalidOptions(
                f"initialization_method must be one of {INITIALIZATION_METHODS}, "
                f"got {self.initialization_method!r}"
            )

        if self.seed is not None:
            if isinstance(self.seed, bool) or not isinstance(self.seed, numbers.Integral):
                raise InvalidOptions(f"seed must be an integer, got {self.seed!r}")
            object.__setattr__(self, "seed", int(self.seed))

    @classmethod
    def field_names(cls) -> tuple:
        return tuple(f.name for f in fields(cls))

    @classmethod
    def from_mapping(
        cls, mapping: Optional[Mapping[str, Any]], base: "QuantizeOptions" = None
    ) -> "QuantizeOptions":
        """
        Shallow-merge ``mapping`` over ``base`` (or the built-in defaults).

        Keys may be field names or their request spelling (``xStep``...).
        Unknown keys are ignored; a value of ``None`` counts as unset.
        """
        base = base if base is not None else cls()
        if not mapping:
            return base

        known = set(cls.field_names())
        updates = {}
        for key, value in mapping.items():
            name = REQUEST_KEYS.get(key, key)
            if name not in known or value is None:
                continue
            updates[name] = value
        return replace(base, **updates)


def whole_number(name: str, value: Any) -> int:
    """Coerce ``value`` to int; integral floats pass, bools and fractions do not."""
    if isinstance(value, bool):
        raise InvalidOptions(f"{name} must be an integer, got {value!r}")
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real) and float(value).is_integer():
        # JSON-style numbers such as 2.0 arrive from loosely typed callers.
        return int(value)
    raise InvalidOptions(f"{name} must be an integer, got {value!r}")


def _positive_int(name: str, value: Any) -> int:
    value = whole_number(name, value)
    if value < 1:
        raise InvalidOptions(f"{name} must be an integer >= 1, got {value!r}")
    return value

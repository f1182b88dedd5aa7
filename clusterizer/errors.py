"""Error taxonomy for the clustering pipeline."""


class ClusterizerError(Exception):
    """Base class for every failure raised by the clusterizer."""

    kind = "ClusterizerError"

    def describe(self) -> str:
        """Message used on the worker boundary: ``"<kind>: <detail>"``."""
        detail = str(self)
        return f"{self.kind}: {detail}" if detail else self.kind


class InvalidDimensions(ClusterizerError):
    """Buffer length is inconsistent with width x height x 4."""

    kind = "InvalidDimensions"


class GridSizeMismatch(ClusterizerError):
    """Sample grid does not match the recomposition target (programmer error)."""

    kind = "GridSizeMismatch"


class InsufficientUniqueColors(ClusterizerError):
    """Fewer distinct colors than requested clusters."""

    kind = "InsufficientUniqueColors"

    def __init__(self, requested: int, available: int):
        self.requested = requested
        self.available = available
        super().__init__(
            f"requested {requested} clusters but the image only has "
            f"{available} unique colors"
        )


class InvalidOptions(ClusterizerError, ValueError):
    """An option value is out of its allowed range."""

    kind = "InvalidOptions"


class WorkerTransportFailure(ClusterizerError):
    """The background executor failed before producing a response."""

    kind = "WorkerTransportFailure"

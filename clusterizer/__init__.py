"""K-means color quantization for RGBA pixel buffers."""
from .errors import (
    ClusterizerError,
    GridSizeMismatch,
    InsufficientUniqueColors,
    InvalidDimensions,
    InvalidOptions,
    WorkerTransportFailure,
)
from .options import QuantizeOptions
from .quantizer import ImageQuantizer, quantize_image
from .worker import QuantizeWorker, handle_request

__all__ = [
    "ClusterizerError",
    "GridSizeMismatch",
    "InsufficientUniqueColors",
    "InvalidDimensions",
    "InvalidOptions",
    "WorkerTransportFailure",
    "QuantizeOptions",
    "ImageQuantizer",
    "quantize_image",
    "QuantizeWorker",
    "handle_request",
]

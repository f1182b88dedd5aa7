"""
Background execution boundary.

``handle_request`` is the message handler: it turns one request dict into
one response dict and never raises for pipeline errors. ``QuantizeWorker``
runs it in a ``concurrent.futures`` executor so the caller's thread stays
free while the clustering runs.
"""
from concurrent.futures import Executor, Future, ProcessPoolExecutor
from typing import Mapping, Optional

import numpy as np

from .errors import ClusterizerError, WorkerTransportFailure
from .options import whole_number
from .quantizer import ImageQuantizer
from .utils.logger import get_logger

logger = get_logger(__name__)


def handle_request(request: Mapping) -> dict:
    """
    Process ``{"buffer", "width", "height", "options"?}``.

    Returns:
        ``{"status": "success", "buffer": ...}`` or
        ``{"status": "error", "message": "<ErrorKind>: <detail>"}``.
    """
    try:
        buffer = request["buffer"]
        width = whole_number("width", request["width"])
        height = whole_number("height", request["height"])
        options = request.get("options")
        if not isinstance(options, (Mapping, type(None))):
            raise TypeError(f"options must be a mapping, got {type(options).__name__}")
    except (KeyError, TypeError, ValueError) as e:
        return {"status": "error", "message": f"BadRequest: {e}"}

    try:
        output = ImageQuantizer().quantize(buffer, width, height, options)
    except ClusterizerError as e:
        logger.warning(f"Quantization failed: {e.describe()}")
        return {"status": "error", "message": e.describe()}

    return {"status": "success", "buffer": output}


class QuantizeWorker:
    """
    One-shot request/response runner on a background executor.

    Each call sends a single buffer and gets a single buffer back. There is
    no streaming and no cancellation once a job has started.
    """

    def __init__(self, executor: Optional[Executor] = None, max_workers: int = 1):
        self._owns_executor = executor is None
        self.executor = executor or ProcessPoolExecutor(max_workers=max_workers)

    def submit(self, buffer, width: int, height: int, options: Optional[Mapping] = None) -> Future:
        """Queue a job; the future resolves to the response dict."""
        request = {
            "buffer": np.array(buffer, copy=True) if not isinstance(buffer, bytes) else buffer,
            "width": width,
            "height": height,
            "options": dict(options) if options else None,
        }
        try:
            return self.executor.submit(handle_request, request)
        except RuntimeError as e:
            raise WorkerTransportFailure(f"could not submit job: {e}") from e

    def run(
        self,
        buffer,
        width: int,
        height: int,
        options: Optional[Mapping] = None,
        timeout: Optional[float] = None,
    ) -> dict:
        """
        Submit a job and wait for its response.

        Raises:
            WorkerTransportFailure: if the executor died or the job raised
                instead of answering.
        """
        future = self.submit(buffer, width, height, options)
        try:
            return future.result(timeout=timeout)
        except Exception as e:
            raise WorkerTransportFailure(f"worker failed: {e!r}") from e

    def close(self) -> None:
        if self._owns_executor:
            self.executor.shutdown(wait=True)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

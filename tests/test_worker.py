"""Tests for the request/response boundary and background runner."""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest

from clusterizer.errors import WorkerTransportFailure
from clusterizer.worker import QuantizeWorker, handle_request


def _make_request(**overrides) -> dict:
    buffer = np.array(
        [
            200, 10, 10, 255,
            10, 200, 10, 255,
            10, 10, 200, 255,
            250, 250, 250, 255,
        ],
        dtype=np.uint8,
    )
    request = {"buffer": buffer, "width": 2, "height": 2, "options": {"seed": 8}}
    request.update(overrides)
    return request


class TestHandleRequest:
    def test_success(self):
        response = handle_request(_make_request())
        assert response["status"] == "success"
        assert response["buffer"].shape == (16,)
        assert response["buffer"].dtype == np.uint8

    def test_options_are_optional(self):
        request = _make_request()
        del request["options"]
        assert handle_request(request)["status"] == "success"

    def test_insufficient_unique_colors(self):
        response = handle_request(_make_request(options={"clusterQuantity": 9}))
        assert response["status"] == "error"
        assert response["message"].startswith("InsufficientUniqueColors")

    def test_invalid_dimensions(self):
        response = handle_request(_make_request(width=3))
        assert set(response) == {"status", "message"}
        assert response["status"] == "error"
        assert response["message"].startswith("InvalidDimensions")

    def test_invalid_options(self):
        response = handle_request(_make_request(options={"xStep": 0}))
        assert response["status"] == "error"
        assert response["message"].startswith("InvalidOptions")

    def test_malformed_request(self):
        response = handle_request({"buffer": [0, 0, 0, 0]})
        assert response["status"] == "error"
        assert response["message"].startswith("BadRequest")

    def test_options_must_be_a_mapping(self):
        response = handle_request(_make_request(options=[("xStep", 1)]))
        assert response["status"] == "error"
        assert response["message"].startswith("BadRequest")

    @pytest.mark.parametrize("field, value", [("width", 2.9), ("height", 1.5), ("width", True)])
    def test_fractional_or_bool_size_is_rejected(self, field, value):
        response = handle_request(_make_request(**{field: value}))
        assert response["status"] == "error"
        assert response["message"].startswith("BadRequest"), response["message"]

    def test_integral_float_size_is_accepted(self):
        response = handle_request(_make_request(width=2.0, height=2.0))
        assert response["status"] == "success"


class TestQuantizeWorker:
    def test_run_on_thread_pool(self):
        request = _make_request()
        with ThreadPoolExecutor(max_workers=1) as executor:
            worker = QuantizeWorker(executor=executor)
            response = worker.run(request["buffer"], 2, 2, {"clusterQuantity": 2, "seed": 1})
        assert response["status"] == "success"
        assert len({tuple(p) for p in response["buffer"].reshape(-1, 4).tolist()}) == 2

    def test_run_on_process_pool(self):
        request = _make_request()
        with QuantizeWorker() as worker:
            future = worker.submit(request["buffer"], 2, 2, {"clusterQuantity": 4})
            response = future.result(timeout=60)
        assert response["status"] == "success"
        assert np.array_equal(response["buffer"], request["buffer"])

    def test_errors_come_back_as_responses(self):
        with ThreadPoolExecutor(max_workers=1) as executor:
            worker = QuantizeWorker(executor=executor)
            response = worker.run(np.zeros(12, dtype=np.uint8), 2, 2)
        assert response["status"] == "error"

    def test_dead_executor_is_a_transport_failure(self):
        executor = ThreadPoolExecutor(max_workers=1)
        executor.shutdown()
        worker = QuantizeWorker(executor=executor)
        with pytest.raises(WorkerTransportFailure):
            worker.run(np.zeros(16, dtype=np.uint8), 2, 2)

    def test_job_crash_is_a_transport_failure(self):
        with ThreadPoolExecutor(max_workers=1) as executor:
            worker = QuantizeWorker(executor=executor)
            with pytest.raises(WorkerTransportFailure):
                # Right size, but the values cannot be averaged.
                worker.run(np.array(["x"] * 16, dtype=object), 2, 2)

"""Prometheus collectors for the activity store."""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Iterator

from prometheus_client import Counter, Histogram

ACTIVITY_OPERATIONS = Counter(
	"album_activity_operations_total",
	"Activity store operations by outcome",
	["operation", "result"],
)

ACTIVITY_OPERATION_LATENCY = Histogram(
	"album_activity_operation_duration_seconds",
	"Activity store operation latency in seconds",
	["operation"],
	buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)


@contextmanager
def observe_operation(operation: str) -> Iterator[None]:
	"""Time the wrapped block and count it as ok or error."""
	started = time.perf_counter()
	result = "ok"
	try:
		yield
	except Exception:
		result = "error"
		raise
	finally:
		ACTIVITY_OPERATION_LATENCY.labels(operation=operation).observe(time.perf_counter() - started)
		ACTIVITY_OPERATIONS.labels(operation=operation, result=result).inc()

import time
from contextlib import asynccontextmanager

from prometheus_client import Counter, Histogram

from .errors import NotFoundError, ValidationError

OPERATION_COUNT = Counter(
    "product_store_operations_total",
    "Product store operations by outcome",
    ["operation", "outcome"],
)
OPERATION_LATENCY = Histogram(
    "product_store_operation_duration_seconds",
    "Product store operation latency",
    ["operation"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.075, 0.1, 0.25, 0.5, 0.75, 1.0, 2.5, 5.0, 7.5, 10.0, float("inf"))
)


def _outcome(exc: BaseException) -> str:
    if isinstance(exc, ValidationError):
        return "invalid"
    if isinstance(exc, NotFoundError):
        return "not_found"
    if isinstance(exc, GeneratorExit):
        # stream abandoned by the consumer
        return "closed"
    return "error"


@asynccontextmanager
async def track(operation: str):
    """Count and time one store operation. Exceptions are re-raised as is."""
    start = time.perf_counter()
    try:
        yield
    except BaseException as e:
        OPERATION_COUNT.labels(operation=operation, outcome=_outcome(e)).inc()
        raise
    else:
        OPERATION_COUNT.labels(operation=operation, outcome="ok").inc()
    finally:
        OPERATION_LATENCY.labels(operation=operation).observe(time.perf_counter() - start)

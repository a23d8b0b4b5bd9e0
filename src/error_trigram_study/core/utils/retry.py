"""
Purpose: Retry a flaky call with exponential backoff.
Constraints: Utility only; callers decide which exceptions are retriable.
"""

# Imports
import logging
import random
import time
from typing import Callable, Iterable, Optional, TypeVar

T = TypeVar("T")

logger = logging.getLogger(__name__)


# Helpers
def backoff_delay(attempt: int, base_delay: float, max_delay: float, jitter: float = 0.0) -> float:
    """Delay before retry number `attempt` (1-based), capped at max_delay before jitter."""
    delay = min(max_delay, base_delay * (2 ** (attempt - 1)))
    if jitter:
        delay += random.uniform(0, jitter)
    return delay


def _log_retry(attempt: int, exc: Exception) -> None:
    logger.warning("Attempt %d failed (%s: %s); retrying", attempt, type(exc).__name__, exc)


# Public API
def retry(
    func: Callable[[], T],
    *,
    attempts: int = 3,
    base_delay: float = 0.5,
    max_delay: float = 5.0,
    jitter: float = 0.2,
    exceptions: Iterable[type[Exception]] = (Exception,),
    on_retry: Optional[Callable[[int, Exception], None]] = _log_retry,
    sleep: Callable[[float], None] = time.sleep,
) -> T:
    """Call func until it succeeds or attempts run out; re-raise the last failure."""
    if attempts < 1:
        raise ValueError("attempts must be >= 1")
    retriable = tuple(exceptions)
    last_exc: Optional[Exception] = None
    for attempt in range(1, attempts + 1):
        try:
            return func()
        except retriable as exc:  # type: ignore[misc]
            last_exc = exc
            if attempt >= attempts:
                break
            if on_retry:
                on_retry(attempt, exc)
            sleep(backoff_delay(attempt, base_delay, max_delay, jitter))
    raise last_exc if last_exc else RuntimeError("retry: failed without exception")

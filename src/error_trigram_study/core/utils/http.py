"""
Purpose: GET requests against the search API with retry on transient failures.
Constraints: No business logic; callers validate the JSON payload.
"""

from __future__ import annotations

import os
from typing import Any, Mapping, Optional

import requests

from error_trigram_study.core.utils.retry import retry

RETRY_ON_STATUS = frozenset({500, 502, 503, 504})


class RetryableHTTPError(RuntimeError):
    """Raised for a status code worth retrying."""

    def __init__(self, status_code: int, url: str):
        super().__init__(f"Retryable HTTP status {status_code} from {url}")
        self.status_code = status_code


def request_with_retry(
    method: str,
    url: str,
    *,
    session: Optional[requests.Session] = None,
    retry_on_status: Optional[frozenset[int]] = None,
    attempts: Optional[int] = None,
    base_delay: Optional[float] = None,
    max_delay: Optional[float] = None,
    jitter: Optional[float] = None,
    **kwargs: Any,
) -> requests.Response:
    retry_on_status = retry_on_status or RETRY_ON_STATUS
    attempts = attempts or int(os.getenv("HTTP_RETRY_ATTEMPTS", "3"))
    base_delay = base_delay if base_delay is not None else float(os.getenv("HTTP_RETRY_BASE_DELAY", "0.5"))
    max_delay = max_delay if max_delay is not None else float(os.getenv("HTTP_RETRY_MAX_DELAY", "5.0"))
    jitter = jitter if jitter is not None else float(os.getenv("HTTP_RETRY_JITTER", "0.2"))
    sender = session or requests

    def _do_request() -> requests.Response:
        resp = sender.request(method, url, **kwargs)
        if resp.status_code in retry_on_status:
            raise RetryableHTTPError(resp.status_code, url)
        return resp

    return retry(
        _do_request,
        attempts=attempts,
        base_delay=base_delay,
        max_delay=max_delay,
        jitter=jitter,
        exceptions=(RetryableHTTPError, requests.ConnectionError, requests.Timeout),
    )


def get_with_retry(url: str, params: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> requests.Response:
    return request_with_retry("GET", url, params=params, **kwargs)

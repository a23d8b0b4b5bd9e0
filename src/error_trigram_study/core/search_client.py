"""
Purpose: Search clients for tagged posts and a paginating fetch helper.
Constraints: API helpers only; no analysis logic.
"""

# Imports
import logging
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Mapping, Optional, Protocol, Sequence

import requests

from error_trigram_study.core.config_models import SearchSettings
from error_trigram_study.core.metrics import get_metrics
from error_trigram_study.core.utils.http import RetryableHTTPError, get_with_retry

logger = logging.getLogger(__name__)

API_ROOT = "https://api.stackexchange.com/2.3"


class SearchClientError(RuntimeError):
    """The search API returned an error payload or an unusable response."""

    def __init__(self, message: str, status_code: Optional[int] = None, error_name: str = ""):
        super().__init__(message)
        self.status_code = status_code
        self.error_name = error_name


@dataclass
class SearchPage:
    items: List[Dict[str, Any]] = field(default_factory=list)
    has_more: bool = False
    quota_remaining: Optional[int] = None
    backoff: int = 0


class SearchClient(Protocol):
    """Anything that turns query parameters into a page of post records."""

    def search(
        self,
        tagged: str,
        body: str,
        page: int = 1,
        pagesize: int = 100,
        sort: str = "activity",
        order: str = "desc",
    ) -> SearchPage:
        ...


class StackExchangeClient:
    """Client for the /search/advanced endpoint, returning post bodies."""

    def __init__(
        self,
        site: str = "stackoverflow",
        api_key: str = "",
        timeout: int = 10,
        session: Optional[requests.Session] = None,
        sleep: Callable[[float], None] = time.sleep,
    ):
        self.site = site
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()
        self._sleep = sleep
        self._backoff_until = 0.0

    def _wait_for_backoff(self) -> None:
        remaining = self._backoff_until - time.monotonic()
        if remaining > 0:
            logger.info("Honouring API backoff: sleeping %.1fs", remaining)
            self._sleep(remaining)

    def search(
        self,
        tagged: str,
        body: str,
        page: int = 1,
        pagesize: int = 100,
        sort: str = "activity",
        order: str = "desc",
    ) -> SearchPage:
        params = {
            "site": self.site,
            "tagged": tagged,
            "body": body,
            "page": page,
            "pagesize": pagesize,
            "sort": sort,
            "order": order,
            "filter": "withbody",
        }
        if self.api_key:
            params["key"] = self.api_key

        self._wait_for_backoff()
        try:
            resp = get_with_retry(
                f"{API_ROOT}/search/advanced",
                params=params,
                session=self.session,
                timeout=self.timeout,
            )
        except RetryableHTTPError as exc:
            raise SearchClientError(str(exc), status_code=exc.status_code) from exc
        try:
            payload = resp.json()
        except ValueError as exc:
            raise SearchClientError(
                f"Non-JSON response (HTTP {resp.status_code})", status_code=resp.status_code
            ) from exc

        if resp.status_code != 200 or "error_id" in payload:
            raise SearchClientError(
                f"Search API error {payload.get('error_id', resp.status_code)}: "
                f"{payload.get('error_message', 'unknown error')}",
                status_code=resp.status_code,
                error_name=payload.get("error_name", ""),
            )

        backoff = int(payload.get("backoff") or 0)
        if backoff:
            self._backoff_until = time.monotonic() + backoff
        return SearchPage(
            items=list(payload.get("items") or []),
            has_more=bool(payload.get("has_more", False)),
            quota_remaining=payload.get("quota_remaining"),
            backoff=backoff,
        )


class MockSearchClient:
    """Serves a fixed list of posts, sliced into pages."""

    def __init__(self, posts: Sequence[Mapping[str, Any]]):
        self.posts = list(posts)
        self.calls: List[Dict[str, Any]] = []

    def search(
        self,
        tagged: str,
        body: str,
        page: int = 1,
        pagesize: int = 100,
        sort: str = "activity",
        order: str = "desc",
    ) -> SearchPage:
        self.calls.append({"tagged": tagged, "body": body, "page": page, "pagesize": pagesize})
        matching = [
            dict(p) for p in self.posts
            if (not tagged or tagged in (p.get("tags") or [tagged]))
            and body.lower() in (p.get("body") or "").lower()
        ]
        start = (page - 1) * pagesize
        return SearchPage(
            items=matching[start:start + pagesize],
            has_more=start + pagesize < len(matching),
        )


# Helpers
def fetch_posts(
    client: SearchClient,
    tagged: str,
    body: str,
    num_pages: int,
    pagesize: int = 100,
    sort: str = "activity",
    order: str = "desc",
) -> List[Dict[str, Any]]:
    """Page through search results until has_more is false or num_pages is reached."""
    items: List[Dict[str, Any]] = []
    metrics = get_metrics()
    for page in range(1, num_pages + 1):
        try:
            result = client.search(tagged, body, page=page, pagesize=pagesize, sort=sort, order=order)
        except (SearchClientError, requests.RequestException):
            metrics.record_error("search.page")
            raise
        items.extend(result.items)
        metrics.record("search.page")
        logger.debug(
            "Fetched page %d (%d items, quota_remaining=%s)",
            page, len(result.items), result.quota_remaining,
        )
        if not result.has_more:
            break

    metrics.record("posts.fetched", amount=len(items))
    return items


def make_search_client(settings: Optional[SearchSettings] = None) -> StackExchangeClient:
    """Create a Stack Exchange client from search settings."""
    settings = settings or SearchSettings()
    return StackExchangeClient(site=settings.site, api_key=settings.api_key, timeout=settings.timeout)

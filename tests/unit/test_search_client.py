import pytest
import requests

from error_trigram_study.core.metrics import get_metrics
from error_trigram_study.core.search_client import (
    API_ROOT,
    MockSearchClient,
    SearchClientError,
    StackExchangeClient,
    fetch_posts,
    make_search_client,
)
from error_trigram_study.core.config_models import SearchSettings
from error_trigram_study.pipeline.mock_posts import MOCK_POSTS


class FakeResponse:
    def __init__(self, status_code=200, payload=None, json_error=False):
        self.status_code = status_code
        self._payload = payload if payload is not None else {}
        self._json_error = json_error

    def json(self):
        if self._json_error:
            raise ValueError("no json")
        return self._payload


class FakeSession:
    def __init__(self, responses):
        self.responses = list(responses)
        self.calls = []

    def request(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        item = self.responses.pop(0)
        if isinstance(item, Exception):
            raise item
        return item


def _page(items, has_more=False, **extra):
    return FakeResponse(200, {"items": items, "has_more": has_more, "quota_remaining": 290, **extra})


def test_search_sends_expected_query():
    session = FakeSession([_page([{"body": "Error: x</p>"}])])
    client = StackExchangeClient(site="stackoverflow", api_key="k3y", session=session)
    page = client.search("r", "Error", page=2, pagesize=50)

    call = session.calls[0]
    assert call["method"] == "GET"
    assert call["url"] == f"{API_ROOT}/search/advanced"
    assert call["params"]["tagged"] == "r"
    assert call["params"]["body"] == "Error"
    assert call["params"]["page"] == 2
    assert call["params"]["pagesize"] == 50
    assert call["params"]["filter"] == "withbody"
    assert call["params"]["key"] == "k3y"
    assert page.items == [{"body": "Error: x</p>"}]
    assert page.quota_remaining == 290
    assert page.has_more is False


def test_api_error_payload_raises():
    payload = {"error_id": 400, "error_message": "pagesize", "error_name": "bad_parameter"}
    client = StackExchangeClient(session=FakeSession([FakeResponse(400, payload)]))
    with pytest.raises(SearchClientError) as excinfo:
        client.search("r", "Error")
    assert excinfo.value.status_code == 400
    assert excinfo.value.error_name == "bad_parameter"


def test_non_json_response_raises():
    client = StackExchangeClient(session=FakeSession([FakeResponse(200, json_error=True)]))
    with pytest.raises(SearchClientError):
        client.search("r", "Error")


def test_transient_errors_are_retried():
    session = FakeSession([FakeResponse(503), requests.ConnectionError("reset"), _page([{"body": "b"}])])
    client = StackExchangeClient(session=session)
    assert client.search("r", "Error").items == [{"body": "b"}]
    assert len(session.calls) == 3


def test_persistent_5xx_becomes_client_error():
    session = FakeSession([FakeResponse(502)] * 3)
    client = StackExchangeClient(session=session)
    with pytest.raises(SearchClientError) as excinfo:
        client.search("r", "Error")
    assert excinfo.value.status_code == 502


def test_backoff_is_honoured_before_next_request():
    slept = []
    session = FakeSession([_page([], has_more=True, backoff=5), _page([])])
    client = StackExchangeClient(session=session, sleep=slept.append)
    client.search("r", "Error", page=1)
    assert slept == []
    client.search("r", "Error", page=2)
    assert len(slept) == 1
    assert 4.0 < slept[0] <= 5.0


def test_fetch_posts_pages_until_has_more_false():
    session = FakeSession([
        _page([{"body": "1"}, {"body": "2"}], has_more=True),
        _page([{"body": "3"}], has_more=False),
        _page([{"body": "never"}]),
    ])
    client = StackExchangeClient(session=session)
    posts = fetch_posts(client, "r", "Error", num_pages=5, pagesize=2)
    assert [p["body"] for p in posts] == ["1", "2", "3"]
    assert len(session.calls) == 2
    assert get_metrics().total("posts.fetched") == 3
    assert get_metrics().total("search.page") == 2


def test_fetch_posts_respects_page_limit():
    client = MockSearchClient(MOCK_POSTS)
    posts = fetch_posts(client, "r", "Error", num_pages=1, pagesize=4)
    assert len(posts) == 4
    assert len(client.calls) == 1


def test_fetch_posts_propagates_failures():
    payload = {"error_id": 502, "error_message": "throttle violation", "error_name": "throttle_violation"}
    client = StackExchangeClient(session=FakeSession([FakeResponse(400, payload)]))
    with pytest.raises(SearchClientError):
        fetch_posts(client, "r", "Error", num_pages=3)
    assert get_metrics().snapshot()["errors"]["search.page"] == 1


def test_mock_client_filters_and_pages():
    client = MockSearchClient(MOCK_POSTS)
    posts = fetch_posts(client, "r", "Error", num_pages=10, pagesize=4)
    assert len(posts) == len(MOCK_POSTS)
    assert [c["page"] for c in client.calls] == [1, 2]
    assert fetch_posts(MockSearchClient(MOCK_POSTS), "python", "Error", num_pages=2) == []


def test_make_search_client_uses_settings():
    client = make_search_client(SearchSettings(site="superuser", api_key="abc", timeout=3))
    assert client.site == "superuser"
    assert client.api_key == "abc"
    assert client.timeout == 3

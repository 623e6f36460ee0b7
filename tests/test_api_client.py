import pytest
import requests

from livescore.api_client import FootballApiClient, TTLCache
from livescore.errors import APIError

from fakes import FakeResponse, FakeSession


class Clock:
    def __init__(self, now=1000.0):
        self.now = now

    def __call__(self):
        return self.now


def _client(responses, clock=None):
    session = FakeSession(responses)
    cache = TTLCache(clock=clock or Clock())
    return FootballApiClient("secret", "api.test", "v3", session=session, cache=cache), session


def test_build_url_keeps_param_order():
    client, _ = _client([])
    url = client.build_url("fixtures", {"date": "2024-05-01", "league": 39, "season": None})
    assert url == "https://api.test/v3/fixtures?date=2024-05-01&league=39"


def test_build_url_accepts_repeated_pairs():
    client, _ = _client([])
    url = client.build_url("fixtures", [("ids", "1"), ("ids", "2"), ("live", None)])
    assert url == "https://api.test/v3/fixtures?ids=1&ids=2"


def test_cached_response_is_reused_within_window():
    clock = Clock()
    body = {"response": [1, 2], "results": 2}
    client, session = _client([FakeResponse(200, body)], clock)

    first = client.fetch_from_api("fixtures", {"live": "all"}, cache_duration=30)
    clock.now += 29
    second = client.fetch_from_api("fixtures", {"live": "all"}, cache_duration=30)

    assert first is second
    assert len(session.calls) == 1


def test_expired_entry_triggers_new_request():
    clock = Clock()
    client, session = _client([FakeResponse(200, {"n": 1}), FakeResponse(200, {"n": 2})], clock)

    assert client.fetch_from_api("standings", {"league": 39}, cache_duration=60) == {"n": 1}
    clock.now += 60
    assert client.fetch_from_api("standings", {"league": 39}, cache_duration=60) == {"n": 2}
    assert len(session.calls) == 2


def test_sends_api_key_headers():
    client, session = _client([FakeResponse(200, {})])
    client.fetch_from_api("status")
    headers = session.calls[0][2]["headers"]
    assert headers["x-rapidapi-key"] == "secret"
    assert headers["x-rapidapi-host"] == "api.test"
    assert headers["x-apisports-key"] == "secret"


def test_non_2xx_raises_and_is_not_cached():
    client, session = _client([FakeResponse(429, text="Too many"), FakeResponse(200, {"ok": True})])

    with pytest.raises(APIError) as exc:
        client.fetch_from_api("fixtures", {"date": "2024-05-01"})
    assert exc.value.code == "429"
    assert exc.value.status_code == 429
    assert exc.value.message == "API request failed with status 429"

    assert client.fetch_from_api("fixtures", {"date": "2024-05-01"}) == {"ok": True}
    assert len(session.calls) == 2


def test_network_error_is_wrapped():
    client, _ = _client([requests.ConnectionError("boom")])
    with pytest.raises(APIError) as exc:
        client.fetch_from_api("fixtures")
    assert exc.value.code == "network_error"


def test_convenience_getters_use_expected_params():
    client, session = _client([FakeResponse(200, {}) for _ in range(3)])
    client.get_live_fixtures()
    client.get_head_to_head(33, 34)
    client.get_fixture_events(99)
    urls = [call[1] for call in session.calls]
    assert urls[0].endswith("/fixtures?live=all")
    assert urls[1].endswith("/fixtures/headtohead?h2h=33-34")
    assert urls[2].endswith("/fixtures/events?fixture=99")

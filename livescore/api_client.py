"""Client for the API-Football (API-SPORTS) HTTP API with a TTL response cache."""
from __future__ import annotations

import logging
import threading
import time
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union
from urllib.parse import urlencode

import requests

from . import endpoints, settings
from .config import (
    API_TIMEOUT,
    DEFAULT_CACHE_DURATION,
    EVENTS_CACHE_DURATION,
    LIVE_CACHE_DURATION,
    STANDINGS_CACHE_DURATION,
)
from .constants import RATE_LIMIT_HEADERS
from .endpoints import ApiOptions
from .errors import APIError
from .logging_utils import warn_once
from .utils import scrub_url

log = logging.getLogger(__name__)


class TTLCache:
    """A small thread-safe cache of ``key -> (timestamp, value)`` entries.

    Freshness is decided by the caller on each ``get`` so one cache can hold
    entries with different lifetimes. Entries are only replaced, never evicted.
    """

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._d: Dict[Any, Tuple[float, Any]] = {}
        self._l = threading.Lock()
        self._clock = clock

    def get(self, key: Any, ttl: float) -> Any:
        now = self._clock()
        with self._l:
            value = self._d.get(key)
            if value is None:
                return None
            ts, data = value
            if now - ts >= ttl:
                return None
            return data

    def set(self, key: Any, value: Any) -> None:
        with self._l:
            self._d[key] = (self._clock(), value)

    def clear(self) -> None:
        with self._l:
            self._d.clear()

    def __len__(self) -> int:
        with self._l:
            return len(self._d)


Params = Union[Mapping[str, Any], Sequence[Tuple[str, Any]]]


def _clean_params(params: Optional[Params]) -> List[Tuple[str, str]]:
    """Normalise a mapping or a list of pairs; pairs keep repeated keys in order."""
    pairs = params.items() if isinstance(params, Mapping) else (params or ())
    return [(str(k), str(v)) for k, v in pairs if v is not None]


class FootballApiClient:
    """Fetches API-Football resources, serving repeated URLs from the cache."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        api_host: Optional[str] = None,
        api_version: Optional[str] = None,
        *,
        session: Optional[requests.Session] = None,
        cache: Optional[TTLCache] = None,
        timeout: float = API_TIMEOUT,
    ) -> None:
        self.api_key = settings.API_KEY if api_key is None else api_key
        self.api_host = api_host or settings.API_HOST
        self.api_version = api_version or settings.API_VERSION
        self.session = session or requests.Session()
        self.cache = cache if cache is not None else TTLCache()
        self.timeout = timeout
        if not self.api_key:
            warn_once("football_api_key_missing", "API_KEY is not set; football API calls will be rejected", logger=log)

    @property
    def base_url(self) -> str:
        return f"https://{self.api_host}/{self.api_version}"

    @property
    def headers(self) -> Dict[str, str]:
        return {
            "x-rapidapi-key": self.api_key,
            "x-rapidapi-host": self.api_host,
            "x-apisports-key": self.api_key,
        }

    def build_url(self, endpoint: str, params: Optional[Params] = None) -> str:
        query = urlencode(_clean_params(params), doseq=True)
        url = f"{self.base_url}/{endpoint.lstrip('/')}"
        return f"{url}?{query}" if query else url

    def _log_rate_limits(self, response: requests.Response) -> None:
        for header in RATE_LIMIT_HEADERS:
            value = response.headers.get(header)
            if value is not None:
                log.debug("%s: %s", header, value)

    def fetch_from_api(
        self,
        endpoint: str,
        params: Optional[Mapping[str, Any]] = None,
        cache_duration: float = DEFAULT_CACHE_DURATION,
    ) -> Any:
        """GET ``endpoint`` and return the parsed JSON body.

        A cached body younger than ``cache_duration`` seconds is returned as
        the same object without touching the network. Errors are never cached.
        """
        url = self.build_url(endpoint, params)
        cached = self.cache.get(url, cache_duration)
        if cached is not None:
            log.debug("Using cached data for %s", scrub_url(url))
            return cached

        log.info("Fetching %s", scrub_url(url))
        try:
            response = self.session.get(url, headers=self.headers, timeout=self.timeout)
        except requests.exceptions.RequestException as exc:
            log.error("Error fetching data from API: %s", exc)
            raise APIError("API-Football", "network_error", str(exc)) from exc

        self._log_rate_limits(response)

        if not 200 <= response.status_code < 300:
            log.error("API-Football %s returned %s", endpoint, response.status_code)
            raise APIError(
                "API-Football",
                str(response.status_code),
                f"API request failed with status {response.status_code}",
                details=(response.text or "")[:500] or None,
            )

        try:
            data = response.json()
        except ValueError as exc:
            raise APIError("API-Football", "invalid_json", "API returned a non-JSON body") from exc

        self.cache.set(url, data)
        return data

    def forward(self, endpoint: str, params: Optional[Mapping[str, Any]] = None) -> requests.Response:
        """Uncached raw GET used by the proxy route."""
        return self.session.get(self.build_url(endpoint, params), headers=self.headers, timeout=self.timeout)

    def fetch(self, options: ApiOptions) -> Any:
        """Fetch a prepared :class:`ApiOptions` request."""
        duration = DEFAULT_CACHE_DURATION if options.cache_duration is None else options.cache_duration
        return self.fetch_from_api(options.endpoint, options.params, cache_duration=duration)

    # ---- convenience getters ----
    def get_live_fixtures(self, league: Optional[int] = None) -> Any:
        opts = endpoints.fixtures_endpoint(live="all", league=league)
        opts.cache_duration = LIVE_CACHE_DURATION
        return self.fetch(opts)

    def get_fixtures_by_date(self, date: str, league: Optional[int] = None, season: Optional[int] = None) -> Any:
        return self.fetch(endpoints.fixtures_endpoint(date=date, league=league, season=season))

    def get_league_standings(self, league: int, season: int) -> Any:
        opts = endpoints.standings_endpoint(league, season)
        opts.cache_duration = STANDINGS_CACHE_DURATION
        return self.fetch(opts)

    def get_fixture(self, fixture_id: int) -> Any:
        return self.fetch(endpoints.fixtures_endpoint(id=fixture_id))

    def get_fixture_statistics(self, fixture_id: int) -> Any:
        return self.fetch(endpoints.fixture_statistics_endpoint(fixture_id))

    def get_fixture_events(self, fixture_id: int) -> Any:
        opts = endpoints.fixture_events_endpoint(fixture_id)
        opts.cache_duration = EVENTS_CACHE_DURATION
        return self.fetch(opts)

    def get_fixture_lineups(self, fixture_id: int) -> Any:
        return self.fetch(endpoints.fixture_lineups_endpoint(fixture_id))

    def get_fixture_predictions(self, fixture_id: int) -> Any:
        return self.fetch(endpoints.predictions_endpoint(fixture_id))

    def get_head_to_head(self, team1: int, team2: int) -> Any:
        return self.fetch(endpoints.head_to_head_endpoint(team1, team2))


_client: Optional[FootballApiClient] = None
_client_lock = threading.Lock()


def get_client() -> FootballApiClient:
    """Return the process-wide client, building it from settings on first use."""
    global _client
    with _client_lock:
        if _client is None:
            _client = FootballApiClient()
        return _client


def set_client(client: Optional[FootballApiClient]) -> None:
    """Replace (or reset with ``None``) the process-wide client."""
    global _client
    with _client_lock:
        _client = client

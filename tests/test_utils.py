import logging

from livescore.logging_utils import RateLimitedLogger, reset_warn_once_cache, warn_once
from livescore.utils import RETRYABLE_STATUSES, create_retry_session, parse_iso, scrub_url, to_db_datetime, to_iso


def test_retry_session_mounts_urllib3_retries():
    session = create_retry_session(3, backoff_factor=0.1)
    for url in ("https://newsapi.org/v2/everything", "http://localhost/"):
        retry = session.get_adapter(url).max_retries
        assert retry.total == 3
        assert retry.backoff_factor == 0.1
        assert set(retry.status_forcelist) == set(RETRYABLE_STATUSES)
        assert retry.raise_on_status is False
        assert retry.is_retry("GET", 503)
        assert not retry.is_retry("GET", 404)
        assert not retry.is_retry("POST", 503)


def test_scrub_url_drops_query():
    assert scrub_url("https://newsapi.org/v2/everything?apiKey=abc&q=x") == "https://newsapi.org/v2/everything"
    assert scrub_url(None) == ""


def test_iso_helpers_normalise_to_utc():
    dt = parse_iso("2024-05-01T12:00:00+07:00")
    assert to_iso(dt) == "2024-05-01T05:00:00Z"
    assert to_db_datetime("2024-05-01").tzinfo is None
    assert parse_iso("") is None


def test_rate_limited_logger_suppresses_repeats(caplog):
    limited = RateLimitedLogger(logging.getLogger("livescore.test"), window_seconds=60)
    with caplog.at_level(logging.WARNING):
        assert limited.warning(("ad", "1"), "first") is True
        assert limited.warning(("ad", "1"), "second") is False
        assert limited.warning(("ad", "2"), "other") is True
    assert "second" not in caplog.text


def test_warn_once():
    reset_warn_once_cache()
    assert warn_once("k", "hello") is True
    assert warn_once("k", "hello") is False
    reset_warn_once_cache()

from concurrent.futures import ThreadPoolExecutor

import pytest

from livescore import db
from livescore.errors import ValidationError
from livescore.logging_utils import RateLimitedLogger
from livescore.models import Base
from livescore.services import advertisements as ads


def _new_ad(**overrides):
    data = {
        "name": "X",
        "position": "sidebar",
        "size": "medium",
        "imageUrl": "http://i/1.png",
        "url": "https://sponsor.example",
        "status": "active",
        "startDate": "2024-01-01T00:00:00Z",
        "endDate": "2099-01-01T00:00:00Z",
    }
    data.update(overrides)
    return ads.create_ad(data)


def test_compute_ctr():
    assert ads.compute_ctr(5, 0) == 0
    assert ads.compute_ctr(25, 100) == 25.0


def test_create_then_get_returns_same_image_and_zero_ctr():
    created = _new_ad()
    fetched = ads.get_advertisement_by_id(created["id"])
    assert fetched["imageUrl"] == "http://i/1.png"
    assert fetched["ctr"] == 0
    assert fetched["impressions"] == 0
    assert fetched["startDate"] == "2024-01-01T00:00:00Z"


def test_get_missing_ad_returns_none():
    assert ads.get_advertisement_by_id("does-not-exist") is None


def test_create_rejects_unknown_position():
    with pytest.raises(ValidationError) as exc:
        _new_ad(position="popup")
    assert exc.value.field == "position"


def test_update_only_touches_supplied_fields():
    created = _new_ad()
    updated = ads.update_ad(created["id"], {"status": "paused"})
    assert updated["status"] == "paused"
    assert updated["name"] == "X"
    assert updated["imageUrl"] == "http://i/1.png"
    assert ads.update_ad("missing", {"status": "paused"}) is None


def test_update_rejects_null_or_blank_name():
    created = _new_ad()
    for bad in (None, "   "):
        with pytest.raises(ValidationError) as exc:
            ads.update_ad(created["id"], {"name": bad})
        assert exc.value.field == "name"
    assert ads.get_advertisement_by_id(created["id"])["name"] == "X"


def test_update_null_link_clears_it():
    created = _new_ad()
    updated = ads.update_ad(created["id"], {"url": None})
    assert updated["url"] == ""
    assert updated["imageUrl"] == "http://i/1.png"
    with pytest.raises(ValidationError):
        ads.update_ad(created["id"], {"imageUrl": 42})


def test_delete_returns_bool():
    created = _new_ad()
    assert ads.delete_advertisement(created["id"]) is True
    assert ads.delete_advertisement(created["id"]) is False


def test_delete_with_image_removes_blob(monkeypatch):
    removed = []

    class Storage:
        def delete_file(self, url):
            removed.append(url)
            return True

    monkeypatch.setattr(ads, "get_storage", lambda: Storage())
    created = _new_ad(imageUrl="https://abc.public.blob.vercel-storage.com/ads/1.png")
    assert ads.delete_advertisement(created["id"], delete_image=True)
    assert removed == ["https://abc.public.blob.vercel-storage.com/ads/1.png"]


def test_tracking_recomputes_ctr():
    ad_id = _new_ad()["id"]
    for _ in range(4):
        ads.track_impression(ad_id)
    counters = ads.track_click(ad_id)
    assert counters == {"impressions": 4, "clicks": 1, "ctr": 25.0}


def test_click_before_any_impression_keeps_ctr_zero():
    ad_id = _new_ad()["id"]
    assert ads.track_click(ad_id) == {"impressions": 0, "clicks": 1, "ctr": 0.0}


def test_tracking_unknown_ad_returns_none():
    assert ads.track_impression("nope") is None
    assert ads.track_click("nope") is None


def test_tracking_log_keys_do_not_grow_per_ad(monkeypatch):
    monkeypatch.setattr(ads, "_tracking_log", RateLimitedLogger(ads.log, window_seconds=60))
    for i in range(500):
        assert ads.track_impression(f"unknown-{i}") is None
    assert list(ads._tracking_log._last_logged) == [("impression", "missing")]


def test_concurrent_impressions_are_not_lost(tmp_path):
    # separate connections per thread need a file-backed database
    db.configure(f"sqlite:///{tmp_path / 'ads.db'}")
    Base.metadata.create_all(db.get_engine())
    ad_id = _new_ad()["id"]
    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: ads.track_impression(ad_id), range(40)))
    assert ads.get_advertisement_by_id(ad_id)["impressions"] == 40


def test_active_by_position_respects_window_and_status():
    live = _new_ad()
    _new_ad(status="paused")
    _new_ad(endDate="2020-01-01T00:00:00Z", startDate="2019-01-01T00:00:00Z")
    _new_ad(position="hero")

    found = ads.get_active_advertisements_by_position("sidebar", now="2024-06-01T00:00:00Z")
    assert [a["id"] for a in found] == [live["id"]]


def test_summarize_performance():
    summary = ads.summarize_performance([
        {"impressions": 100, "clicks": 5, "revenue": 10, "status": "active"},
        {"impressions": 100, "clicks": 15, "revenue": 2.5, "status": "paused"},
    ])
    assert summary == {
        "count": 2,
        "active": 1,
        "impressions": 200,
        "clicks": 20,
        "revenue": 12.5,
        "ctr": 10.0,
    }

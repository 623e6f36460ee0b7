import requests

from livescore.blob_storage import BlobStorage, format_blob_url, is_valid_blob_url, sanitize_filename

from fakes import FakeResponse, FakeSession

STORE_URL = "https://abc.public.blob.vercel-storage.com/ads/1_a.png"


def test_format_blob_url_cases():
    assert format_blob_url("") == ""
    assert format_blob_url(None) == ""
    assert format_blob_url("/ads/banner.png") == "/ads/banner.png"
    assert format_blob_url(STORE_URL) == (
        "/api/blob-proxy?url=https%3A%2F%2Fabc.public.blob.vercel-storage.com%2Fads%2F1_a.png"
    )
    assert format_blob_url("https://cdn.example.com/x.png") == "https://cdn.example.com/x.png"
    assert format_blob_url("banner.png") == "/ads/banner.png"
    assert format_blob_url("ads/banner.png") == "/ads/banner.png"


def test_is_valid_blob_url():
    assert is_valid_blob_url(STORE_URL)
    assert is_valid_blob_url("/ads/x.png")
    assert not is_valid_blob_url("https://cdn.example.com/x.png")


def test_sanitize_filename():
    assert sanitize_filename("my banner (1).png") == "my_banner__1_.png"


def test_upload_returns_store_url():
    session = FakeSession([FakeResponse(200, {"url": STORE_URL})])
    storage = BlobStorage(token="tok", api_url="https://blob.test", session=session)

    assert storage.upload_file("a.png", b"data", "image/png") == STORE_URL
    method, url, kwargs = session.calls[0]
    assert method == "PUT"
    assert url.startswith("https://blob.test/ads/") and url.endswith("_a.png")
    assert kwargs["headers"]["authorization"] == "Bearer tok"


def test_upload_failure_falls_back_to_local_path():
    session = FakeSession([requests.ConnectionError("down")])
    storage = BlobStorage(token="tok", api_url="https://blob.test", session=session)

    path = storage.upload_file("my logo.png", b"data", folder="logos")
    assert path.startswith("/logos/")
    assert path.endswith("_my_logo.png")


def test_delete_skips_non_store_urls():
    session = FakeSession([])
    storage = BlobStorage(token="tok", session=session)
    assert storage.delete_file("/ads/local.png") is True
    assert session.calls == []


def test_delete_reports_failure():
    storage = BlobStorage(token="tok", session=FakeSession([FakeResponse(500)]))
    assert storage.delete_file(STORE_URL) is False

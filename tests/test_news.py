import pytest
import requests

from livescore.errors import APIError
from livescore.services import news
from livescore.services.translation import MOCK_PREFIX, translate_text

from fakes import FakeResponse, FakeSession


def _newsapi_payload(*titles):
    return {
        "status": "ok",
        "articles": [
            {
                "title": title,
                "description": "The team scored a late goal",
                "url": f"https://news.example/{i}",
                "urlToImage": None,
                "publishedAt": "2024-05-01T10:00:00Z",
                "source": {"name": "Example"},
            }
            for i, title in enumerate(titles)
        ],
    }


def test_create_slug_keeps_thai_characters():
    assert news.create_slug("เกียรติศักดิ์ เสนาเมือง") == "เกียรติศักดิ์-เสนาเมือง"


def test_create_slug_collapses_and_truncates():
    assert news.create_slug("Hello,  World -- Again!") == "hello-world-again"
    assert len(news.create_slug("word " * 60)) == 100


def test_create_slug_drops_accented_latin_letters():
    assert news.create_slug("Mbappé scores in São Paulo") == "mbapp-scores-in-so-paulo"


def test_fetch_international_news_rejects_non_json_body():
    session = FakeSession([FakeResponse(200, payload=None, text="<html>maintenance</html>")])
    with pytest.raises(APIError) as exc:
        news.fetch_international_news(session=session)
    assert exc.value.code == "invalid_json"


def test_translate_prefers_longer_phrases():
    out = translate_text("Premier League match", "en", "th")
    assert out == f"{MOCK_PREFIX}พรีเมียร์ลีก การแข่งขัน"


def test_translate_other_pairs_unchanged():
    assert translate_text("goal", "en", "fr") == "goal"
    assert translate_text("", "en", "th") == ""


def test_fetch_international_news_translates_articles():
    session = FakeSession([FakeResponse(200, _newsapi_payload("Big match tonight"))])
    articles = news.fetch_international_news(session=session)

    assert len(articles) == 1
    article = articles[0]
    assert article["originalTitle"] == "Big match tonight"
    assert article["title"].startswith(MOCK_PREFIX)
    assert article["category"] == "international"
    assert article["slug"] == news.create_slug(article["title"])
    assert session.calls[0][2]["params"]["q"] == "football OR soccer"


def test_fetch_international_news_raises_on_http_error():
    session = FakeSession([FakeResponse(401, text="bad key")])
    with pytest.raises(APIError) as exc:
        news.fetch_international_news(session=session)
    assert exc.value.code == "401"


def test_sync_upserts_by_slug():
    first = FakeSession([FakeResponse(200, _newsapi_payload("Title A"))])
    assert news.sync_all_news(session=first) == 4

    second = FakeSession([FakeResponse(200, _newsapi_payload("Title A"))])
    assert news.sync_all_news(session=second) == 4

    stored = news.get_news(limit=50)
    assert len(stored) == 4
    assert len(news.get_news(category="thai")) == 3


def test_sync_aborts_when_fetch_fails():
    session = FakeSession([requests.ConnectionError("offline")])
    with pytest.raises(APIError):
        news.sync_all_news(session=session)
    assert news.get_news() == []


def test_get_article_by_slug():
    news.save_news(news.fetch_thai_news())
    article = news.get_news_article_by_slug("buriram-united-ninth-thai-league-championship")
    assert article["source"] == "สยามกีฬา"
    assert news.get_news_article_by_slug("missing") is None

import pytest
from sqlalchemy.pool import StaticPool

from livescore import api_client, blob_storage, db
from livescore.models import Base
from livescore.routes import blob_proxy, proxy
from livescore.services import news


@pytest.fixture(autouse=True)
def database():
    db.configure("sqlite://", poolclass=StaticPool)
    Base.metadata.create_all(db.get_engine())
    yield
    Base.metadata.drop_all(db.get_engine())


@pytest.fixture(autouse=True)
def _reset_singletons(monkeypatch):
    api_client.set_client(None)
    blob_storage.set_storage(None)
    monkeypatch.setattr(proxy, "_http", None)
    monkeypatch.setattr(blob_proxy, "_http", None)
    monkeypatch.setattr(news, "_news_http", None)
    yield
    api_client.set_client(None)
    blob_storage.set_storage(None)


@pytest.fixture
def app():
    from livescore.app import create_app

    test_app = create_app()
    test_app.testing = True
    return test_app


@pytest.fixture
def client(app):
    with app.test_client() as test_client:
        yield test_client

import pytest
import asyncio
import logging
from unittest.mock import Mock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from cinevault import main
from cinevault.config import APP_TITLE, APP_DESCRIPTION, VERSION
from cinevault.db.models import Base
from cinevault.service.metadata_service import OMDBMetadataService
from cinevault.service.notifications import ERROR


@pytest.fixture
def app_env(monkeypatch):
    """Point startup at an in-memory database and skip log files."""
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    monkeypatch.setattr(main, "SessionLocal", sessionmaker(bind=engine))
    monkeypatch.setattr(main, "setup_logging", lambda: None)
    monkeypatch.setattr(main, "init_db", lambda: None)


def test_startup_without_api_key(app_env, monkeypatch):
    """Test that the app starts without an API key and search fails gracefully."""
    monkeypatch.setattr("cinevault.service.metadata_service.OMDB_API_KEY", None)
    notifier = Mock()

    context = main.startup(notifier=notifier)
    try:
        assert isinstance(context.metadata_service, OMDBMetadataService)
        assert context.collection_service.user.get_movie_count() == 0

        result = asyncio.run(context.collection_service.search("alien"))
        added = asyncio.run(context.collection_service.add_to_collection("tt0078748"))
    finally:
        asyncio.run(context.close())

    assert result.success is False
    assert result.message.startswith("Search failed")
    assert added.success is False
    assert context.collection_service.user.get_movie_count() == 0
    notifier.notify.assert_any_call(result.message, ERROR)


def test_startup_uses_given_metadata_service(app_env, caplog):
    """Test that an injected catalog client is used as is and the app announces itself."""
    metadata_service = Mock(spec=["search_movies", "get_movie_details"])

    with caplog.at_level(logging.INFO, logger="cinevault.main"):
        context = main.startup(metadata_service=metadata_service, notifier=Mock())
    asyncio.run(context.close())

    assert context.metadata_service is metadata_service
    assert context.collection_service.metadata_service is metadata_service
    assert f"Starting {APP_TITLE} {VERSION}: {APP_DESCRIPTION}" in caplog.text

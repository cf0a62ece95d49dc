import pytest
from unittest.mock import Mock
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from cinevault.config.environment import DEFAULT_USER_NAME
from cinevault.db.models import Base
from cinevault.domain.models import Movie, User
from cinevault.repositories import SQLAlchemyCollectionStorage
from cinevault.service.dependencies import get_user, get_collection_service


@pytest.fixture
def session():
    engine = create_engine("sqlite:///:memory:")
    Base.metadata.create_all(bind=engine)
    db = sessionmaker(bind=engine)()
    yield db
    db.close()


def test_get_user_defaults_on_first_start():
    """Test that an empty store gives a fresh default-named user."""
    storage = Mock()
    storage.load_user.return_value = None

    user = get_user(storage)

    assert user.name == DEFAULT_USER_NAME
    assert user.get_movie_count() == 0


def test_get_user_restores_persisted():
    """Test that a persisted user is used when present."""
    stored = User("Ada")
    storage = Mock()
    storage.load_user.return_value = stored

    assert get_user(storage) is stored


def test_collection_service_restores_session(session):
    """Test that a new session picks up what the previous one saved."""
    user = User("Ada")
    user.add_movie(Movie("Alien", "1979", "", "", "", None, "", "", "tt0078748"))
    SQLAlchemyCollectionStorage(session).save(user)

    service = get_collection_service(session, metadata_service=Mock())

    assert service.user.name == "Ada"
    assert service.user.has_movie("tt0078748")

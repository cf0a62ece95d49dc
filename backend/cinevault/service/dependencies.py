from typing import Optional

from sqlalchemy.orm import Session

from cinevault.config.environment import DEFAULT_USER_NAME
from cinevault.domain.factory import MovieFactory
from cinevault.domain.models import User
from cinevault.repositories import CollectionStorage, SQLAlchemyCollectionStorage
from cinevault.service.collection_service import CollectionService
from cinevault.service.metadata_service import MetadataService, OMDBMetadataService
from cinevault.service.notifications import Notifier


def get_storage(db: Session) -> CollectionStorage:
    return SQLAlchemyCollectionStorage(db)

def get_metadata_service(api_key: Optional[str] = None) -> MetadataService:
    return OMDBMetadataService(api_key=api_key)

def get_user(storage: CollectionStorage) -> User:
    """The persisted user, or a fresh default-named one on first start."""
    return storage.load_user() or User(DEFAULT_USER_NAME)

def get_collection_service(
    db: Session,
    metadata_service: Optional[MetadataService] = None,
    notifier: Optional[Notifier] = None
) -> CollectionService:
    storage = get_storage(db)
    return CollectionService(
        user=get_user(storage),
        storage=storage,
        metadata_service=metadata_service or get_metadata_service(),
        factory=MovieFactory(),
        notifier=notifier
    )

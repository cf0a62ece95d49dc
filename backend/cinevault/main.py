import logging
from typing import Optional

from cinevault.config import APP_TITLE, APP_DESCRIPTION, VERSION, DATA_DIR
from cinevault.config.logging import setup_logging
from cinevault.db.database import engine, Base, SessionLocal
from cinevault.db.models import KeyValueORM
from cinevault.service.collection_service import CollectionService
from cinevault.service.dependencies import get_collection_service
from cinevault.service.metadata_service import MetadataService
from cinevault.service.notifications import Notifier

logger = logging.getLogger(__name__)


def init_db():
    DATA_DIR.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine, tables=[KeyValueORM.__table__])


class AppContext:
    """Everything one running session needs, built once at startup and passed to the UI."""

    def __init__(self, session, collection_service: CollectionService, metadata_service: MetadataService):
        self.session = session
        self.collection_service = collection_service
        self.metadata_service = metadata_service

    async def close(self):
        close = getattr(self.metadata_service, "aclose", None)
        if close is not None:
            await close()
        self.session.close()
        logger.info("Session closed")


def startup(
    metadata_service: Optional[MetadataService] = None,
    notifier: Optional[Notifier] = None
) -> AppContext:
    setup_logging()
    logger.info(f"Starting {APP_TITLE} {VERSION}: {APP_DESCRIPTION}")
    init_db()

    db = SessionLocal()
    try:
        collection_service = get_collection_service(db, metadata_service=metadata_service, notifier=notifier)
    except Exception as e:
        db.close()
        logger.error(f"Error initializing collection: {str(e)}")
        raise

    stats = collection_service.get_stats()
    logger.info(
        f"Loaded collection for '{collection_service.user.name}': "
        f"{stats.movie_count} movies, {stats.review_count} reviews"
    )
    return AppContext(db, collection_service, collection_service.metadata_service)

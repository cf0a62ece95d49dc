from cinevault.repositories.interface.collection_storage import CollectionStorage
from cinevault.repositories.implementation.sql_alchemy_collection_storage import SQLAlchemyCollectionStorage

__all__ = ["CollectionStorage", "SQLAlchemyCollectionStorage"]

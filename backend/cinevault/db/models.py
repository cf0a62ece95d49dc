from sqlalchemy import Column, String, Text, DateTime
from sqlalchemy.sql import func
from cinevault.db.database import Base

class KeyValueORM(Base):
    """Local key-value store. The whole collection lives under a single key."""
    __tablename__ = "key_value_store"

    key = Column(String, primary_key=True, index=True)
    value = Column(Text, nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

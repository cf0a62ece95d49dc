from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase
from cinevault.config.environment import DATABASE_URL

class Base(DeclarativeBase):
    pass

if DATABASE_URL.startswith("sqlite"):
    connect_args = {"check_same_thread": True}
else:
    connect_args = {}

engine = create_engine(DATABASE_URL, connect_args=connect_args)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# icebreaker/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from icebreaker.core.config import settings


def engine_options(database_url: str) -> dict:
    """SQLite is shared across request threads; server databases get pre-ping."""
    if database_url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False}}
    return {"pool_pre_ping": True}


engine = create_engine(settings.DATABASE_URL, **engine_options(settings.DATABASE_URL))

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

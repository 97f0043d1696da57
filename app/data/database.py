# app/data/database.py
from pathlib import Path

from sqlalchemy import create_engine, event
from sqlalchemy.orm import sessionmaker, declarative_base

from app.utils.settings import DATABASE_URL


def _ensure_sqlite_dir(url: str) -> None:
    if url.startswith("sqlite:///") and ":memory:" not in url:
        Path(url.split("sqlite:///")[-1]).expanduser().resolve().parent.mkdir(parents=True, exist_ok=True)


def make_engine(url: str = DATABASE_URL):
    _ensure_sqlite_dir(url)
    engine = create_engine(url, pool_pre_ping=True)

    if engine.dialect.name == "sqlite":
        # SQLite nie wymusza kluczy obcych bez tego pragma
        @event.listens_for(engine, "connect")
        def _enable_foreign_keys(dbapi_connection, _):
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA foreign_keys=ON")
            cursor.close()

    return engine


def make_session_factory(bind):
    return sessionmaker(bind=bind, autoflush=False, expire_on_commit=False)


Base = declarative_base()
engine = make_engine()
SessionLocal = make_session_factory(engine)


def get_db():
    db = SessionLocal()
    try:
        yield db
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

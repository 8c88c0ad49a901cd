from __future__ import annotations

from functools import lru_cache

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from hesab.settings import get_settings


def _default_sqlite_url() -> str:
    # fallback dev: backend/data/hesab.db
    settings = get_settings()
    db_path = settings.data_dir / "hesab.db"
    return f"sqlite:///{db_path.as_posix()}"


def get_database_url() -> str:
    url = get_settings().database_url
    if url:
        return url
    return _default_sqlite_url()


@lru_cache
def get_engine(url: str | None = None) -> Engine:
    url = url or get_database_url()

    # sqlite needs check_same_thread for FastAPI sync access
    connect_args = {}
    if url.startswith("sqlite:///"):
        connect_args = {"check_same_thread": False}

    return create_engine(url, future=True, connect_args=connect_args)


@lru_cache
def get_session_factory(url: str | None = None) -> sessionmaker[Session]:
    return sessionmaker(bind=get_engine(url), autoflush=False, autocommit=False, future=True)


def new_session(url: str | None = None) -> Session:
    return get_session_factory(url)()


def init_db(url: str | None = None) -> None:
    # import here to avoid circular imports
    from hesab.repositories.sql_document_repository import DocumentRow  # noqa: F401
    from hesab.db_base import Base

    Base.metadata.create_all(get_engine(url))

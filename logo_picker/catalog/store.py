"""Database store utilities for the logo catalog."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from ..config import get_settings
from .models import Base


def get_engine(database_url: Optional[str] = None) -> Engine:
    """Create a SQLAlchemy engine for the configured database."""

    url = database_url or get_settings().database_url
    kwargs = {}
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {"check_same_thread": False}
        database = make_url(url).database
        if database and database != ":memory:":
            Path(database).parent.mkdir(parents=True, exist_ok=True)
        else:
            # An in-memory database lives in one connection; share it across threads.
            kwargs["poolclass"] = StaticPool
    return create_engine(url, echo=False, future=True, **kwargs)


def init_db(engine: Optional[Engine] = None) -> Engine:
    """Create all tables in the configured database."""

    engine = engine or get_engine()
    Base.metadata.create_all(bind=engine)
    return engine


def get_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)


@contextmanager
def session_scope(factory: sessionmaker):
    session: Session = factory()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

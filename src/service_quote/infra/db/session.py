from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from service_quote.infra.db.config import database_url, echo_sql, pool_size

# Lazy initialization - only create engine/session when needed
_engine: Engine | None = None
_session_local: sessionmaker[Session] | None = None


def get_engine() -> Engine:
    """
    Get or create the database engine (lazy initialization).

    The quoting path only reads rule tables, so the pool stays small:
    - pool_size: DATABASE_POOL_SIZE (default 5), overflow up to the same number again
    - pool_pre_ping: Verify connection health before use
    - pool_recycle: Recycle connections hourly
    """
    global _engine
    if _engine is None:
        size = pool_size()
        _engine = create_engine(
            database_url(),
            pool_size=size,
            max_overflow=size,
            pool_pre_ping=True,
            pool_recycle=3600,
            echo=echo_sql(),
        )
    return _engine


def get_session_local() -> sessionmaker[Session]:
    """Get or create the session factory (lazy initialization)."""
    global _session_local
    if _session_local is None:
        _session_local = sessionmaker(
            bind=get_engine(),
            class_=Session,
            expire_on_commit=False,
        )
    return _session_local


@contextmanager
def get_session() -> Iterator[Session]:
    """Read-write session with automatic commit/rollback (admin scripts, seeding)."""
    session = get_session_local()()

    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


@contextmanager
def get_read_session() -> Iterator[Session]:
    """Session for loading rule snapshots; never commits."""
    session = get_session_local()()

    try:
        yield session
    finally:
        session.rollback()
        session.close()

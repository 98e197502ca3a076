"""SQLAlchemy engine and session helpers for the decisions store."""

from __future__ import annotations

from contextlib import contextmanager

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from .paths import db_url

_SQLITE_URL = db_url()

# одна БД на приложение; check_same_thread=False, т.к. запросы идут из worker-потоков
engine = create_engine(
    _SQLITE_URL,
    connect_args={"check_same_thread": False},
    future=True,
)

SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False, future=True)


@contextmanager
def get_session():
    """
    Context-managed DB session.

    Usage:
        with get_session() as s:
            ...
    """
    session = SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

"""Database configuration and session management for MediaHub.

The engine (and its connection pool) is built once per application from
``Settings`` and kept on ``app.state``; ``get_db`` hands each request its own
session from that shared pool.
"""
from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from .core.config import Settings


class Base(DeclarativeBase):
    """Base class for SQLAlchemy models."""


def build_engine(settings: Settings) -> Engine:
    url = settings.sqlalchemy_url()
    if url.startswith("sqlite"):
        # FastAPI runs sync handlers in a thread pool, so the SQLite
        # connection must be shareable across threads.
        return create_engine(url, connect_args={"check_same_thread": False})
    return create_engine(
        url,
        pool_pre_ping=True,
        pool_size=settings.db_pool_size,
        max_overflow=settings.db_max_overflow,
    )


def build_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def check_connection(engine: Engine) -> None:
    """Round-trip ``SELECT 1``; raises ``SQLAlchemyError`` if the store is unreachable."""
    with engine.connect() as conn:
        conn.execute(text("SELECT 1"))


def get_db(request: Request):
    """FastAPI dependency that provides a database session per request.

    Yields a SQLAlchemy session and ensures it is closed after the request
    is complete, even if an exception occurs.
    """
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()

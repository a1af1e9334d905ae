"""Database engine and session configuration."""

from __future__ import annotations

from collections.abc import Generator

from fastapi import Request
from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import DeclarativeBase, Session, sessionmaker
from sqlalchemy.pool import StaticPool


class Base(DeclarativeBase):
    """Declarative base shared by all ORM models."""


def build_engine(database_url: str, *, echo: bool = False) -> Engine:
    """Create an engine for ``database_url``.

    SQLite connections are shared across threads; an in-memory URL is pinned
    to a single connection so every session sees the same tables.
    """
    if database_url.startswith("sqlite"):
        kwargs: dict[str, object] = {"connect_args": {"check_same_thread": False}}
        if database_url in {"sqlite://", "sqlite:///:memory:"}:
            kwargs["poolclass"] = StaticPool
        return create_engine(database_url, echo=echo, **kwargs)
    return create_engine(database_url, pool_pre_ping=True, echo=echo)


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Return a session factory bound to ``engine``."""
    return sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)


def get_db(request: Request) -> Generator[Session, None, None]:
    """Yield a database session from the application's session factory."""
    db = request.app.state.session_factory()
    try:
        yield db
    finally:
        db.close()


def create_tables(engine: Engine) -> None:
    """Create all database tables."""
    # Model modules register their tables on Base.metadata when imported.
    import flodaz_community.models  # noqa: F401

    Base.metadata.create_all(bind=engine)

# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase, Session, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from authsvc.shared.config import load_config
from authsvc.shared.config.settings import DatabaseConfig
from authsvc.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def _engine_kwargs(database: DatabaseConfig) -> dict[str, Any]:
    url = database.url
    if url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every thread sees an empty database
        return {
            "connect_args": {"check_same_thread": False},
            "poolclass": StaticPool,
        }

    kwargs: dict[str, Any] = {
        "pool_pre_ping": True,
        "pool_size": database.pool_size,
        "max_overflow": database.max_overflow,
        "pool_timeout": database.pool_timeout,
    }
    if url.startswith("sqlite"):
        kwargs["connect_args"] = {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }
    return kwargs


def build_engine(database: DatabaseConfig) -> Engine:
    engine = create_engine(database.url, echo=False, **_engine_kwargs(database))

    if database.url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def _set_sqlite_pragmas(dbapi_conn, _):
            cur = dbapi_conn.cursor()
            try:
                cur.execute("PRAGMA foreign_keys=ON;")
                cur.execute("PRAGMA busy_timeout=30000;")
            finally:
                cur.close()

    return engine


def make_session_factory(engine: Engine) -> scoped_session[Session]:
    return scoped_session(
        sessionmaker(bind=engine, autoflush=False, autocommit=False, expire_on_commit=False)
    )


ENGINE: Engine = build_engine(_config.database)
SessionLocal = make_session_factory(ENGINE)


def engine_for(database: DatabaseConfig) -> Engine:
    """Process engine when the settings match the environment, a new one otherwise."""
    if database == _config.database:
        return ENGINE
    logger.info("db.engine: building engine for explicit database settings")
    return build_engine(database)


def session_factory_for(engine: Engine) -> scoped_session[Session]:
    if engine is ENGINE:
        return SessionLocal
    return make_session_factory(engine)


@contextmanager
def session_scope(factory: scoped_session[Session] | None = None) -> Iterator[Session]:
    factory = factory or SessionLocal
    session = factory()
    logger.debug("db.session: opened scoped session")
    try:
        yield session
        session.commit()
        logger.debug("db.session: committed scoped session")
    except Exception as exc:
        logger.debug(f"db.session: {type(exc).__name__}, rolling back")
        session.rollback()
        raise
    finally:
        session.close()
        factory.remove()
        logger.debug("db.session: closed scoped session")


def init_db(engine: Engine | None = None) -> None:
    from . import models  # noqa: F401  (register tables on Base.metadata)

    Base.metadata.create_all(bind=engine or ENGINE)
    logger.info("Database schema ensured")

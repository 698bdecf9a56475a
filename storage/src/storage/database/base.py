"""Engine and session management.

``init_db`` must be called once per process (the CLI does it lazily through
its config, the API in its lifespan, tests in a fixture). ``get_db`` yields a
session that commits when the block exits cleanly and rolls back otherwise.
"""

from contextlib import contextmanager
from typing import Iterator, Optional

from loguru import logger
from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from storage.entity.base import Base

_engine: Optional[Engine] = None
_SessionLocal: Optional[sessionmaker] = None


def _enable_sqlite_foreign_keys(dbapi_conn, connection_record):
    cursor = dbapi_conn.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def init_db(database_url: str, echo: bool = False) -> Engine:
    """Create the engine, register the schema and bind the session factory."""
    global _engine, _SessionLocal
    # Entity modules register their tables on Base.metadata when imported.
    import storage.entity.task  # noqa: F401
    import storage.entity.task_history  # noqa: F401

    if _engine is not None:
        _engine.dispose()

    connect_args = {}
    if database_url.startswith("sqlite"):
        connect_args["check_same_thread"] = False
    engine = create_engine(database_url, echo=echo, pool_pre_ping=True, connect_args=connect_args)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    Base.metadata.create_all(engine)
    _engine = engine
    _SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)
    logger.info("Database initialized url={}", engine.url.render_as_string(hide_password=True))
    return engine


def get_engine() -> Engine:
    if _engine is None:
        raise RuntimeError("Database not initialized; call init_db() first")
    return _engine


@contextmanager
def get_db() -> Iterator[Session]:
    if _SessionLocal is None:
        raise RuntimeError("Database not initialized; call init_db() first")
    session = _SessionLocal()
    try:
        yield session
        session.commit()
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()

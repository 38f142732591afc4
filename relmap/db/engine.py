"""
SQLAlchemy engine and session configuration.

Thin helpers for wiring record kinds to a database; query execution and
connection handling stay with SQLAlchemy.
"""

from sqlalchemy import MetaData, create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from ..hooks import HookPipeline
from .base import RecordBase
from .listeners import install_hooks


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    """Enable foreign keys for SQLite connections."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys = ON")
    cursor.close()


def create_relmap_engine(url: str = "sqlite://", echo: bool = False) -> Engine:
    """
    Create a SQLAlchemy engine.

    Args:
        url: Database URL (default: in-memory SQLite)
        echo: Log emitted SQL

    Returns:
        Configured SQLAlchemy Engine
    """
    engine = create_engine(url, echo=echo)
    if engine.dialect.name == "sqlite":
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(
    engine: Engine,
    pipeline: HookPipeline | None = None,
    hooks: bool = True,
) -> sessionmaker[Session]:
    """
    Create a session factory whose sessions run the lifecycle hooks.

    Args:
        engine: SQLAlchemy Engine
        pipeline: Hook pipeline (default: the process-wide pipeline)
        hooks: Install the lifecycle hooks on the factory

    Returns:
        Configured sessionmaker
    """
    factory = sessionmaker(bind=engine, expire_on_commit=False)
    if hooks:
        install_hooks(factory, pipeline)
    return factory


def init_database(engine: Engine, metadata: MetaData | None = None) -> None:
    """
    Create tables for all mapped record kinds.

    Schema management proper belongs to a migration tool; this is for tests,
    demos and throwaway databases.
    """
    (metadata or RecordBase.metadata).create_all(engine)

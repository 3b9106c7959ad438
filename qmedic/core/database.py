# qmedic/core/database.py
from contextlib import contextmanager
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import sessionmaker, Session

from qmedic.core.config import get_settings

settings = get_settings()


def _install_sqlite_locking(engine: Engine) -> None:
    """
    pysqlite defers BEGIN until the first write, so a SELECT followed by an
    UPDATE can read a stale row. Take the write lock up front instead, which
    gives the same read-modify-write serialization as SELECT ... FOR UPDATE.

    Connections opened with execution option sqlite_begin="DEFERRED" (see
    begin_read_only) start a plain deferred transaction and never queue
    behind writers.
    """

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        mode = conn.get_execution_options().get("sqlite_begin", "IMMEDIATE")
        conn.exec_driver_sql(f"BEGIN {mode}")


def build_engine(
    database_url: str,
    *,
    echo: bool = False,
    lock_timeout_seconds: int = 10,
    **engine_kwargs,
) -> Engine:
    """
    Create an engine for the given URL.

    Lock waits are bounded so a contended item row surfaces as a failed
    transaction instead of blocking the request forever.
    """
    url = str(database_url)
    connect_args: dict = {}

    if url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": lock_timeout_seconds,
        }
    elif url.startswith("postgresql"):
        connect_args = {"options": f"-c lock_timeout={lock_timeout_seconds * 1000}"}

    engine = create_engine(
        url,
        echo=echo,
        future=True,
        pool_pre_ping=True,
        connect_args=connect_args,
        **engine_kwargs,
    )

    if url.startswith("sqlite"):
        _install_sqlite_locking(engine)

    return engine


# Main SQLAlchemy engine
engine = build_engine(
    settings.database_url,
    echo=settings.database_echo,
    lock_timeout_seconds=settings.db_lock_timeout_seconds,
)

# Session factory
SessionLocal = sessionmaker(
    autocommit=False,
    autoflush=False,
    bind=engine,
    future=True,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency that yields a DB session.

    One session per request; nothing about item state outlives it.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def begin_read_only(db: Session) -> Session:
    """
    Open the session's transaction without taking the SQLite write lock.

    Must be called before the first query. Has no effect on other backends.
    """
    db.connection(execution_options={"sqlite_begin": "DEFERRED"})
    return db


def get_read_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for endpoints that never write.
    """
    db = begin_read_only(SessionLocal())
    try:
        yield db
    finally:
        db.close()


@contextmanager
def session_scope() -> Generator[Session, None, None]:
    """
    Context manager for scripts and scheduled jobs.

    Usage:
        with session_scope() as db:
            run_expiry_scan(db)
    """
    db = SessionLocal()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

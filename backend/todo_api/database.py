"""Database engine and helpers.

This module owns the process-wide SQLModel/SQLAlchemy engine. It is
created once at import from `settings` and shared by every request;
handlers receive a short-lived `Session` through `get_session`.

By default the engine points at MySQL (``mysql+pymysql``) built from the
``DB_*`` settings. Setting ``DATABASE_URL`` replaces that with any
SQLAlchemy URL, which is how local runs and the test-suite use SQLite.
"""

from sqlalchemy import text
from sqlalchemy.engine import URL, make_url
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, create_engine, Session

from .config import settings, Settings
from . import models  # noqa: F401  registers the tables on SQLModel.metadata


def build_database_url(cfg: Settings):
    """Return the SQLAlchemy URL for the configured store."""
    if cfg.DATABASE_URL:
        return make_url(cfg.DATABASE_URL)
    return URL.create(
        "mysql+pymysql",
        username=cfg.DB_USER,
        password=cfg.DB_PASSWORD or None,
        host=cfg.DB_HOST,
        port=cfg.DB_PORT,
        database=cfg.DB_DATABASE,
    )


def build_engine(url):
    """Create an engine for `url` with the connect options its dialect needs."""
    url = make_url(url)
    kwargs = {"echo": False}
    if url.get_backend_name() == "sqlite":
        kwargs["connect_args"] = {"check_same_thread": False}
        if url.database in (None, "", ":memory:"):
            # every session must see the same in-memory database
            kwargs["poolclass"] = StaticPool
    else:
        kwargs["pool_pre_ping"] = True
    return create_engine(url, **kwargs)


engine = build_engine(build_database_url(settings))


def check_connection(bind=None):
    """Round-trip a trivial query; raises `SQLAlchemyError` if the store is unreachable."""
    with (bind or engine).connect() as conn:
        conn.execute(text("SELECT 1"))


def create_db_and_tables(bind=None):
    """Create the `todos` table if it does not exist yet.

    There is no migration tooling; `create_all` only adds missing tables
    and never alters existing ones.
    """
    SQLModel.metadata.create_all(bind or engine)


def init_db(bind=None):
    """Verify connectivity and ensure the schema exists."""
    check_connection(bind)
    create_db_and_tables(bind)


def get_session():
    """Yield a database `Session` for FastAPI dependency injection.

    The generator yields a session and ensures it is closed when the
    request scope finishes.
    """
    with Session(engine) as session:
        yield session

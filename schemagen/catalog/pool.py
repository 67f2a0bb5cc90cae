"""Connection pool for catalog queries.

The pool is a SQLAlchemy :class:`~sqlalchemy.engine.Engine` created once by
the caller and handed to the reader; :func:`open_pool` scopes its lifetime.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Iterator

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import ArgumentError, NoSuchModuleError

from ..shared.config import PoolSettings
from ..shared.errors import CatalogError

_SCHEME_ALIASES = {
    "postgres": "postgresql+psycopg2",
    "postgresql": "postgresql+psycopg2",
}


def normalize_dsn(dsn: str) -> str:
    """Turn a libpq-style ``postgres://`` URL into a SQLAlchemy URL.

    URLs that already name a driver (``postgresql+psycopg://``) are left alone.
    """
    scheme, sep, rest = dsn.partition("://")
    if not sep:
        return dsn
    return f"{_SCHEME_ALIASES.get(scheme.lower(), scheme)}://{rest}"


def redact_dsn(dsn: str) -> str:
    """Render ``dsn`` with its password hidden, for progress output."""
    try:
        return make_url(normalize_dsn(dsn)).render_as_string(hide_password=True)
    except ArgumentError:
        return "<unparseable dsn>"


def create_pool(dsn: str, settings: PoolSettings | None = None) -> Engine:
    """Create a bounded connection pool for ``dsn``.

    No connection is opened until the first query.

    Raises:
        CatalogError: If the URL is malformed or its driver is not installed.
    """
    settings = settings or PoolSettings()
    try:
        return create_engine(
            normalize_dsn(dsn),
            pool_size=settings.size,
            max_overflow=settings.max_overflow,
            pool_recycle=settings.recycle,
            pool_timeout=settings.timeout,
        )
    except (ArgumentError, NoSuchModuleError, ImportError) as e:
        raise CatalogError(f"Cannot create connection pool: {e}", redact_dsn(dsn)) from e


@contextmanager
def open_pool(dsn: str, settings: PoolSettings | None = None) -> Iterator[Engine]:
    """Yield a connection pool and dispose of it on exit, including on error."""
    engine = create_pool(dsn, settings)
    try:
        yield engine
    finally:
        engine.dispose()

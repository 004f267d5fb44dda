"""
Database configuration helpers.

Uses synchronous SQLAlchemy. Engines are built by the history store from these
helpers rather than created at import time, so the connection pool has an
explicit owner and lifecycle.
"""

from datetime import UTC, datetime

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool

from translator.core.config import settings
from translator.core.logging import get_logger

logger = get_logger(__name__)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in every DateTime column."""
    return datetime.now(UTC).replace(tzinfo=None)


# =============================================================================
# Database Engine Configuration
# =============================================================================


def detect_vendor(database_url: str) -> str:
    """Infer the vendor from a SQLAlchemy URL ("mysql+pymysql://..." -> "mysql")."""
    backend = sa.engine.make_url(database_url).get_backend_name()
    if backend == "postgresql":
        return "postgres"
    return backend


def get_engine_args(vendor: str) -> dict:
    """
    Get database engine arguments based on configuration.

    Server databases get a bounded pool: at most ``db_pool_size + db_max_overflow``
    connections, and callers beyond that wait up to ``db_pool_timeout`` seconds.

    Returns:
        dict: Engine configuration arguments
    """
    args = {
        "pool_pre_ping": settings.db_pool_pre_ping,
        "echo": settings.debug,
    }

    # SQLite doesn't support connection pools in the same way
    if vendor == "sqlite":
        args["connect_args"] = {"check_same_thread": False, "timeout": 30}
        args["poolclass"] = NullPool
    else:
        args["pool_size"] = settings.db_pool_size
        args["max_overflow"] = settings.db_max_overflow
        args["pool_timeout"] = settings.db_pool_timeout
        args["pool_recycle"] = 3600  # Recycle connections after 1 hour

    return args


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for ``database_url`` with vendor-specific pool settings."""
    vendor = detect_vendor(database_url)
    engine = sa.create_engine(database_url, **get_engine_args(vendor))
    if vendor == "sqlite":
        # Cascading deletes on usage links depend on this pragma
        sa.event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    logger.debug(f"Created database engine for vendor={vendor}")
    return engine


def describe_database_url(database_url: str) -> str:
    """Database URL with credentials removed, safe for logs."""
    return database_url.split("@")[-1] if "@" in database_url else database_url

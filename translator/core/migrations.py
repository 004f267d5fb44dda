"""
Programmatic Alembic migrations.
"""

from pathlib import Path

from alembic import command
from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory

from translator.core.db import create_db_engine
from translator.core.logging import get_logger

logger = get_logger(__name__)

PROJECT_DIR = Path(__file__).resolve().parent.parent.parent


def get_alembic_config(database_url: str) -> Config:
    alembic_cfg = Config(str(PROJECT_DIR / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(PROJECT_DIR / "migrations"))
    alembic_cfg.set_main_option("sqlalchemy.url", database_url.replace("%", "%%"))
    # Keep the application's logging handlers in place
    alembic_cfg.attributes["skip_logging_config"] = True
    return alembic_cfg


def upgrade_database(database_url: str) -> None:
    """Upgrade the database to the latest revision if it is behind."""
    alembic_cfg = get_alembic_config(database_url)

    engine = create_db_engine(database_url)
    try:
        with engine.connect() as conn:
            current = MigrationContext.configure(conn).get_current_revision()
    finally:
        engine.dispose()

    head = ScriptDirectory.from_config(alembic_cfg).get_current_head()

    if current != head:
        logger.info(f"Upgrading database: {current} -> {head}")
        command.upgrade(alembic_cfg, "head")
        logger.info("✅ Database migrations completed successfully")
    else:
        logger.info(f"✅ Database already at latest version: {current}")

#!/usr/bin/env python3
"""
Database migration script.

Runs Alembic migrations programmatically without requiring the alembic command.
"""

import sys

from alembic import command

from translator.core.config import settings
from translator.core.db import describe_database_url
from translator.core.migrations import get_alembic_config


def run_migrations():
    """Run database migrations to latest version."""

    print("=" * 80)
    print("Translator Bot Database Migration")
    print("=" * 80)
    print(f"\n📁 Database: {describe_database_url(settings.database_url)}")

    alembic_cfg = get_alembic_config(settings.database_url)

    try:
        print("\n" + "=" * 80)
        print("Current Database Version")
        print("=" * 80)
        command.current(alembic_cfg, verbose=True)

        print("\n" + "=" * 80)
        print("Running Migrations")
        print("=" * 80)
        print("\n⏳ Upgrading to latest version...")

        command.upgrade(alembic_cfg, "head")

        print("\n" + "=" * 80)
        print("New Database Version")
        print("=" * 80)
        command.current(alembic_cfg, verbose=True)

        print("\n" + "=" * 80)
        print("✅ All migrations applied successfully!")
        print("=" * 80)

    except Exception as e:
        print(f"\n❌ Migration failed: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    run_migrations()

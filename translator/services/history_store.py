"""
Translation History Store

Owns the translation cache, user profile and usage link tables and the
connection pool behind them.

Writes that race on the same key are resolved by the database's own
insert-or-update primitive (``ON CONFLICT`` / ``ON DUPLICATE KEY``), keyed by the
unique constraints on (fingerprint, target_language) and (user_id,
cache_entry_id). Increments are done in SQL, so concurrent callers never lose
an update.
"""

from collections.abc import Callable, Generator
from contextlib import contextmanager
from datetime import timedelta

import sqlalchemy as sa
from sqlalchemy.dialects import mysql, postgresql, sqlite
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from translator.core.config import settings
from translator.core.db import Base, create_db_engine, describe_database_url, utcnow
from translator.core.errors import StoreNotInitializedError
from translator.core.logging import get_logger, short_fingerprint
from translator.models import CacheEntry, UsageLink, UserProfile
from translator.schemas.history import (
    AttributionResult,
    CacheEntryRecord,
    DeleteUserDataResult,
    GlobalStats,
    UserHistoryItem,
    UserStats,
)
from translator.services.fingerprint import normalize_language

logger = get_logger(__name__)

_DIALECT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
    "mysql": mysql.insert,
    "mariadb": mysql.insert,
}


class HistoryStore:
    """
    Persistence for cached translations and their attribution to users.

    The store must be initialized before use; every operation on an
    uninitialized store raises ``StoreNotInitializedError``.

    Example:
        store = HistoryStore("sqlite:///./translator.db")
        store.initialize()
        entry = store.lookup(fingerprint("Hello"), "spanish")
    """

    def __init__(self, database_url: str | None = None):
        self.database_url = database_url or settings.database_url
        self._engine: Engine | None = None
        self._session_factory: sessionmaker | None = None

    # =========================================================================
    # Lifecycle
    # =========================================================================

    @property
    def is_initialized(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            raise StoreNotInitializedError()
        return self._engine

    @property
    def dialect(self) -> str:
        return self.engine.dialect.name

    def initialize(self) -> None:
        """Create the engine and session factory. Calling it twice is a no-op."""
        if self._engine is not None:
            return

        engine = create_db_engine(self.database_url)
        if engine.dialect.name not in _DIALECT_INSERTS:
            engine.dispose()
            raise ValueError(f"Unsupported database dialect: {engine.dialect.name}")

        self._engine = engine
        self._session_factory = sessionmaker(
            bind=engine,
            autoflush=False,
            expire_on_commit=False,
        )
        logger.info(f"History store initialized: {describe_database_url(self.database_url)}")

    def close(self) -> None:
        """Dispose of the connection pool."""
        if self._engine is None:
            return
        self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("History store connections closed")

    def create_tables(self) -> None:
        """Create all tables directly (development and test databases)."""
        Base.metadata.create_all(bind=self.engine)

    @contextmanager
    def session_scope(self) -> Generator[Session, None, None]:
        """
        Provide a transactional scope for database operations.

        Commits on successful completion, rolls back on exception and closes
        the session in all cases.

        Yields:
            Session: SQLAlchemy database session
        """
        if self._session_factory is None:
            raise StoreNotInitializedError()

        session = self._session_factory()
        try:
            yield session
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"Database transaction failed, rolling back: {e}", exc_info=True)
            raise
        finally:
            session.close()

    def ping(self) -> bool:
        """
        Check if the database is accessible.

        Returns:
            bool: True if the database answered, False otherwise
        """
        try:
            with self.engine.connect() as conn:
                conn.execute(sa.text("SELECT 1"))
            return True
        except StoreNotInitializedError:
            raise
        except Exception as e:
            logger.error(f"Database health check failed: {e}")
            return False

    # =========================================================================
    # Dialect-specific statements
    # =========================================================================

    def _upsert(
        self,
        table: sa.Table,
        values: dict,
        conflict_columns: list[str],
        build_updates: Callable[[object], dict],
    ):
        """
        INSERT that updates the conflicting row instead of failing.

        ``build_updates`` receives the proposed row (``excluded`` / ``inserted``)
        and returns the column assignments to apply on conflict.
        """
        stmt = _DIALECT_INSERTS[self.dialect](table).values(**values)
        if self.dialect in ("mysql", "mariadb"):
            return stmt.on_duplicate_key_update(**build_updates(stmt.inserted))
        return stmt.on_conflict_do_update(
            index_elements=conflict_columns,
            set_=build_updates(stmt.excluded),
        )

    def _insert_ignore(self, table: sa.Table, values: dict, conflict_columns: list[str]):
        """INSERT that silently does nothing if the row already exists."""
        stmt = _DIALECT_INSERTS[self.dialect](table).values(**values)
        if self.dialect in ("mysql", "mariadb"):
            return stmt.prefix_with("IGNORE")
        return stmt.on_conflict_do_nothing(index_elements=conflict_columns)

    # =========================================================================
    # Translation cache
    # =========================================================================

    def lookup(self, fingerprint: str, language: str) -> CacheEntryRecord | None:
        """
        Find the cached translation for (fingerprint, language).

        NOTE: this read has a side effect. A hit increments ``use_count`` and
        refreshes ``updated_at`` before the row is returned, which is what
        exempts reused entries from the retention purge.

        If several rows match, the one with the highest ``use_count`` and then
        the latest ``updated_at`` wins.

        Returns:
            The row after the increment, or None on a miss
        """
        language = normalize_language(language)

        with self.session_scope() as session:
            entry_id = session.execute(
                sa.select(CacheEntry.id)
                .where(
                    CacheEntry.fingerprint == fingerprint,
                    CacheEntry.target_language == language,
                )
                .order_by(CacheEntry.use_count.desc(), CacheEntry.updated_at.desc())
                .limit(1)
            ).scalar_one_or_none()

            if entry_id is None:
                logger.info(f"Cache MISS for {short_fingerprint(fingerprint)} (lang={language})")
                return None

            session.execute(
                sa.update(CacheEntry)
                .where(CacheEntry.id == entry_id)
                .values(use_count=CacheEntry.use_count + 1, updated_at=utcnow())
                .execution_options(synchronize_session=False)
            )
            entry = session.execute(
                sa.select(CacheEntry).where(CacheEntry.id == entry_id)
            ).scalar_one_or_none()

            if entry is None:
                # Purged between the select and the update
                return None

            logger.info(
                f"Cache HIT for {short_fingerprint(fingerprint)} "
                f"(lang={language}, uses={entry.use_count})"
            )
            return CacheEntryRecord.model_validate(entry)

    def upsert(
        self,
        fingerprint: str,
        original_message: str,
        language: str,
        detected_language: str | None,
        translated_message: str,
    ) -> CacheEntryRecord:
        """
        Store a translation for (fingerprint, language).

        An existing row keeps its ``original_message`` and ``created_at`` but gets
        the new translation and detected language, one more use and a fresh
        ``updated_at``. Otherwise a row is inserted with ``use_count = 1``.

        Returns:
            The resulting row; ``created`` tells whether it was inserted
        """
        language = normalize_language(language)
        now = utcnow()
        table = CacheEntry.__table__

        stmt = self._upsert(
            table,
            values={
                "original_message": original_message,
                "fingerprint": fingerprint,
                "target_language": language,
                "detected_language": detected_language,
                "translated_message": translated_message,
                "created_at": now,
                "updated_at": now,
                "use_count": 1,
            },
            conflict_columns=["fingerprint", "target_language"],
            build_updates=lambda new: {
                "translated_message": new.translated_message,
                "detected_language": new.detected_language,
                "use_count": table.c.use_count + 1,
                "updated_at": now,
            },
        )

        with self.session_scope() as session:
            session.execute(stmt)
            entry = session.execute(
                sa.select(CacheEntry).where(
                    CacheEntry.fingerprint == fingerprint,
                    CacheEntry.target_language == language,
                )
            ).scalar_one()

            record = CacheEntryRecord.model_validate(entry)

        # Inserts start at 1 and every conflict increments
        record.created = record.use_count == 1

        logger.info(
            f"{'Inserted' if record.created else 'Updated'} cache entry {record.id} "
            f"for {short_fingerprint(fingerprint)} (lang={language}, uses={record.use_count})"
        )
        return record

    def purge_stale(self, max_age_days: int) -> int:
        """
        Delete single-use entries created more than ``max_age_days`` ago.

        Entries that were ever reused (``use_count > 1``) are kept. Usage links
        to deleted entries go with them.

        Returns:
            Number of entries deleted
        """
        cutoff = utcnow() - timedelta(days=max_age_days)

        with self.session_scope() as session:
            result = session.execute(
                sa.delete(CacheEntry)
                .where(CacheEntry.created_at < cutoff, CacheEntry.use_count == 1)
                .execution_options(synchronize_session=False)
            )
            count = result.rowcount or 0

        logger.info(f"Purged {count} single-use cache entries older than {max_age_days} days")
        return count

    # =========================================================================
    # Users and attribution
    # =========================================================================

    def attribute_user(self, user_id: str, display_name: str, cache_entry_id: int) -> AttributionResult:
        """
        Record that ``user_id`` used cache entry ``cache_entry_id``.

        The profile is upserted (display name always overwritten) in its own
        transaction, then the link is inserted unless it already exists. If the
        link write fails the profile update stands.
        """
        user_id = str(user_id)
        now = utcnow()

        profile_stmt = self._upsert(
            UserProfile.__table__,
            values={
                "id": user_id,
                "display_name": display_name,
                "created_at": now,
                "updated_at": now,
            },
            conflict_columns=["id"],
            build_updates=lambda new: {
                "display_name": new.display_name,
                "updated_at": now,
            },
        )
        with self.session_scope() as session:
            session.execute(profile_stmt)

        link_stmt = self._insert_ignore(
            UsageLink.__table__,
            values={
                "user_id": user_id,
                "cache_entry_id": cache_entry_id,
                "created_at": now,
            },
            conflict_columns=["user_id", "cache_entry_id"],
        )
        with self.session_scope() as session:
            result = session.execute(link_stmt)
            link_created = (result.rowcount or 0) > 0

        logger.debug(
            f"Attributed cache entry {cache_entry_id} to user {user_id} (new_link={link_created})"
        )
        return AttributionResult(user_id=user_id, cache_entry_id=cache_entry_id, link_created=link_created)

    def delete_user_data(self, user_id: str) -> DeleteUserDataResult:
        """
        Remove a user's links and profile. Cached translations are kept.

        Unknown users yield zero counts and no changes.
        """
        user_id = str(user_id)

        with self.session_scope() as session:
            links_result = session.execute(
                sa.delete(UsageLink)
                .where(UsageLink.user_id == user_id)
                .execution_options(synchronize_session=False)
            )
            user_result = session.execute(
                sa.delete(UserProfile)
                .where(UserProfile.id == user_id)
                .execution_options(synchronize_session=False)
            )
            result = DeleteUserDataResult(
                links_deleted=links_result.rowcount or 0,
                user_deleted=(user_result.rowcount or 0) > 0,
            )

        logger.info(
            f"Deleted data for user {user_id}: "
            f"links={result.links_deleted}, profile={result.user_deleted}"
        )
        return result

    # =========================================================================
    # Read-only projections
    # =========================================================================

    def global_stats(self) -> GlobalStats:
        with self.session_scope() as session:
            row = session.execute(
                sa.select(
                    sa.func.count(CacheEntry.id),
                    sa.func.count(sa.distinct(CacheEntry.fingerprint)),
                    sa.func.count(sa.distinct(CacheEntry.target_language)),
                )
            ).one()

        return GlobalStats(
            total_translations=row[0] or 0,
            unique_messages=row[1] or 0,
            languages_used=row[2] or 0,
        )

    def user_stats(self, user_id: str) -> UserStats:
        with self.session_scope() as session:
            row = session.execute(
                sa.select(
                    sa.func.count(UsageLink.id),
                    sa.func.count(sa.distinct(CacheEntry.fingerprint)),
                    sa.func.count(sa.distinct(CacheEntry.target_language)),
                    sa.func.min(UsageLink.created_at),
                    sa.func.max(UsageLink.created_at),
                )
                .select_from(UsageLink)
                .join(CacheEntry, UsageLink.cache_entry_id == CacheEntry.id)
                .where(UsageLink.user_id == str(user_id))
            ).one()

        return UserStats(
            total_translations=row[0] or 0,
            unique_messages=row[1] or 0,
            languages_used=row[2] or 0,
            oldest_translation=row[3],
            newest_translation=row[4],
        )

    def user_history(self, user_id: str, limit: int = 50) -> list[UserHistoryItem]:
        """Cache entries attributed to ``user_id``, most recent attribution first."""
        with self.session_scope() as session:
            rows = session.execute(
                sa.select(CacheEntry, UsageLink.created_at)
                .join(UsageLink, UsageLink.cache_entry_id == CacheEntry.id)
                .where(UsageLink.user_id == str(user_id))
                .order_by(UsageLink.created_at.desc(), UsageLink.id.desc())
                .limit(limit)
            ).all()

            return [
                UserHistoryItem(
                    **CacheEntryRecord.model_validate(entry).model_dump(),
                    linked_at=linked_at,
                )
                for entry, linked_at in rows
            ]

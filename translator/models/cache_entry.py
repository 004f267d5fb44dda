"""
Translation cache model.

One row per (fingerprint, target_language) pair. Rows are updated in place on
every cache hit and every re-translation, never duplicated.
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from translator.core.db import Base, utcnow


class CacheEntry(Base):
    __tablename__ = "translation_cache"
    __table_args__ = (
        UniqueConstraint("fingerprint", "target_language", name="uq_translation_cache_fingerprint_lang"),
        Index("ix_translation_cache_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    original_message: Mapped[str] = mapped_column(Text, nullable=False)
    fingerprint: Mapped[str] = mapped_column(String(64), nullable=False)
    target_language: Mapped[str] = mapped_column(String(50), nullable=False)
    detected_language: Mapped[str | None] = mapped_column(String(50), nullable=True)
    translated_message: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    use_count: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    usage_links: Mapped[list["UsageLink"]] = relationship(
        back_populates="cache_entry",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return (
            f"<CacheEntry id={self.id} fingerprint={self.fingerprint[:12]} "
            f"lang={self.target_language} uses={self.use_count}>"
        )

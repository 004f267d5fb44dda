"""Link between a user and a cached translation they triggered or reused."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from translator.core.db import Base, utcnow


class UsageLink(Base):
    __tablename__ = "usage_link"
    __table_args__ = (
        UniqueConstraint("user_id", "cache_entry_id", name="uq_usage_link_user_entry"),
        Index("ix_usage_link_user_id", "user_id"),
        Index("ix_usage_link_cache_entry_id", "cache_entry_id"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[str] = mapped_column(
        String(64), ForeignKey("user_profile.id", ondelete="CASCADE"), nullable=False
    )
    cache_entry_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("translation_cache.id", ondelete="CASCADE"), nullable=False
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    user: Mapped["UserProfile"] = relationship(back_populates="usage_links")
    cache_entry: Mapped["CacheEntry"] = relationship(back_populates="usage_links")

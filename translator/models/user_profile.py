"""Discord user known to the bot through an attributed translation."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from translator.core.db import Base, utcnow


class UserProfile(Base):
    __tablename__ = "user_profile"

    # Discord snowflake, kept opaque
    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    display_name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow)

    usage_links: Mapped[list["UsageLink"]] = relationship(
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self) -> str:
        return f"<UserProfile id={self.id} display_name={self.display_name!r}>"

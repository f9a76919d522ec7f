"""
Contact model.
"""

from datetime import datetime, timezone

from sqlalchemy import Boolean, DateTime, Index, Integer, String, func, true
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class Contact(Base):
    """
    A single address-book entry.

    `id` and `creation_date` are assigned on insert and never change
    afterwards. `category` is a free-text label (work, family, client...).
    """

    __tablename__ = "contacts"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
    )
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    phone_no: Mapped[str] = mapped_column(String(50), nullable=False)
    email: Mapped[str] = mapped_column(String(320), nullable=False)
    is_active: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default=true(),
    )
    category: Mapped[str] = mapped_column(String(100), nullable=False)
    creation_date: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=_utc_now,
        server_default=func.now(),
    )

    __table_args__ = (
        Index("idx_contact_email", "email"),
        Index("idx_contact_category", "category", "is_active"),
        Index("idx_contact_creation_date", "creation_date"),
        # Keep SQLite from handing out the id of a deleted row again
        {"sqlite_autoincrement": True},
    )

    def __repr__(self) -> str:
        return f"<Contact id={self.id} email={self.email!r} category={self.category!r}>"

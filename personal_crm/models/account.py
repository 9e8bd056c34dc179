"""Account model - the tenant root."""

from __future__ import annotations

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IntegerIDMixin, TimestampMixin


class Account(IntegerIDMixin, TimestampMixin, Base):
    __tablename__ = "account"

    name: Mapped[str] = mapped_column(String(200))
    slug: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    api_token: Mapped[str] = mapped_column(String(255), unique=True, index=True)

    # Relationships
    contacts: Mapped[list["Contact"]] = relationship(  # noqa: F821
        back_populates="account", cascade="all, delete-orphan"
    )
    activity_types: Mapped[list["ActivityType"]] = relationship(  # noqa: F821
        back_populates="account", cascade="all, delete-orphan"
    )

    def __repr__(self) -> str:
        return f"<Account {self.slug!r}>"

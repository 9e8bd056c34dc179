"""Contact model."""

from __future__ import annotations

from sqlalchemy import Index, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IntegerIDMixin, TimestampMixin, TenantMixin


class Contact(IntegerIDMixin, TimestampMixin, TenantMixin, Base):
    __tablename__ = "contact"
    __table_args__ = (
        Index("ix_contact_account_email", "account_id", "email"),
    )

    first_name: Mapped[str | None] = mapped_column(String(100), default=None)
    last_name: Mapped[str | None] = mapped_column(String(100), default=None)
    email: Mapped[str | None] = mapped_column(String(255), default=None)

    # Relationships
    account: Mapped["Account"] = relationship(back_populates="contacts")  # noqa: F821
    activities: Mapped[list["Activity"]] = relationship(  # noqa: F821
        secondary="activity_contact", viewonly=True, order_by="Activity.date_it_happened"
    )
    activity_statistics: Mapped[list["ActivityStatistic"]] = relationship(  # noqa: F821
        back_populates="contact",
        cascade="all, delete-orphan",
        order_by="ActivityStatistic.year.desc()",
    )

    @property
    def full_name(self) -> str:
        parts = [p for p in (self.first_name, self.last_name) if p]
        return " ".join(parts) or "Unnamed"

    def __repr__(self) -> str:
        return f"<Contact {self.full_name!r}>"

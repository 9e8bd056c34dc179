"""Activity model - a logged interaction with one or more contacts."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IntegerIDMixin, TimestampMixin, TenantMixin


class ActivityType(IntegerIDMixin, TimestampMixin, TenantMixin, Base):
    __tablename__ = "activity_type"

    name: Mapped[str] = mapped_column(String(100))
    location_type: Mapped[str | None] = mapped_column(String(50), default=None)  # outside, inside, online

    # Relationships
    account: Mapped["Account"] = relationship(back_populates="activity_types")  # noqa: F821

    def __repr__(self) -> str:
        return f"<ActivityType {self.name!r}>"


class ActivityContact(Base):
    """M2M join table for activities <-> contacts (attendees)."""

    __tablename__ = "activity_contact"

    activity_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("activity.id", ondelete="CASCADE"), primary_key=True
    )
    contact_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contact.id", ondelete="CASCADE"), primary_key=True
    )
    # Denormalized so association rows can be scoped without a join.
    account_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("account.id", ondelete="CASCADE"), index=True
    )


class Activity(IntegerIDMixin, TimestampMixin, TenantMixin, Base):
    __tablename__ = "activity"

    summary: Mapped[str] = mapped_column(Text)
    description: Mapped[str] = mapped_column(Text)
    date_it_happened: Mapped[date] = mapped_column(Date, index=True)
    activity_type_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("activity_type.id", ondelete="SET NULL"),
        default=None, index=True
    )

    # Relationships
    activity_type: Mapped["ActivityType | None"] = relationship()
    contacts: Mapped[list["Contact"]] = relationship(  # noqa: F821
        secondary="activity_contact",
        viewonly=True,
        order_by="Contact.id",
    )

    def __repr__(self) -> str:
        return f"<Activity {self.summary[:30]!r}>"

"""Per-contact yearly activity statistics."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IntegerIDMixin, TimestampMixin, TenantMixin


class ActivityStatistic(IntegerIDMixin, TimestampMixin, TenantMixin, Base):
    __tablename__ = "activity_statistic"
    __table_args__ = (
        UniqueConstraint("contact_id", "year", name="uq_activity_statistic_contact_year"),
    )

    contact_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("contact.id", ondelete="CASCADE"), index=True
    )
    year: Mapped[int] = mapped_column(Integer)
    count: Mapped[int] = mapped_column(Integer, default=0)

    # Relationships
    contact: Mapped["Contact"] = relationship(back_populates="activity_statistics")  # noqa: F821

    def __repr__(self) -> str:
        return f"<ActivityStatistic contact={self.contact_id} {self.year}={self.count}>"

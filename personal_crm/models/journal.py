"""Journal entry model - audit record derived from a journalable entity."""

from __future__ import annotations

from datetime import date

from sqlalchemy import JSON, Date, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IntegerIDMixin, TimestampMixin, TenantMixin


class JournalEntry(IntegerIDMixin, TimestampMixin, TenantMixin, Base):
    __tablename__ = "journal_entry"
    __table_args__ = (
        UniqueConstraint(
            "journalable_type", "journalable_id", name="uq_journal_entry_journalable"
        ),
    )

    entry_date: Mapped[date] = mapped_column(Date, index=True)
    journalable_type: Mapped[str] = mapped_column(String(50), index=True)  # activity, ...
    journalable_id: Mapped[int] = mapped_column(Integer, index=True)
    title: Mapped[str | None] = mapped_column(Text, default=None)
    snapshot_json: Mapped[dict | None] = mapped_column(JSON, default=None)

    def __repr__(self) -> str:
        return f"<JournalEntry {self.journalable_type} {self.journalable_id}>"

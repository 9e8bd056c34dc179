"""Journal entry schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field


class JournalEntryResponse(BaseModel):
    id: int
    object: str = "journalEntry"
    entry_date: date
    journalable_type: str
    journalable_id: int
    title: str | None = None
    snapshot: dict | None = Field(default=None, validation_alias="snapshot_json")
    created_at: datetime | None = None

    model_config = {"from_attributes": True}

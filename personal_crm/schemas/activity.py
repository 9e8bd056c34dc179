"""Activity schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, Field, field_validator

SUMMARY_MAX_LENGTH = 100_000
DESCRIPTION_MAX_LENGTH = 1_000_000


def coerce_date(value: object) -> object:
    """Coerce common date representations into a Python `date`.

    Values that cannot be read as a date are returned unchanged so pydantic
    reports them against the field.
    """
    if isinstance(value, datetime):
        return value.date()

    if isinstance(value, str):
        raw = value.strip()
        # Plain date: YYYY-MM-DD
        try:
            return date.fromisoformat(raw)
        except ValueError:
            pass
        # ISO datetime string.
        try:
            return datetime.fromisoformat(raw.replace("Z", "+00:00")).date()
        except ValueError:
            return value

    return value


class ActivityPayload(BaseModel):
    """Body accepted by create and update."""

    summary: str = Field(min_length=1, max_length=SUMMARY_MAX_LENGTH)
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    date_it_happened: date
    activity_type_id: int | None = None
    contacts: list[int] = Field(min_length=1)

    @field_validator("summary", "description")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value

    @field_validator("activity_type_id", "contacts", mode="before")
    @classmethod
    def _no_bool_ids(cls, value: object) -> object:
        values = value if isinstance(value, list) else [value]
        if any(isinstance(v, bool) for v in values):
            raise ValueError("ids must be integers")
        return value

    @field_validator("date_it_happened", mode="before")
    @classmethod
    def _parse_date(cls, value: object) -> object:
        return coerce_date(value)

    def activity_fields(self) -> dict:
        return self.model_dump(exclude={"contacts"})


class AccountRef(BaseModel):
    id: int

    model_config = {"from_attributes": True}


class ActivityTypeResponse(BaseModel):
    id: int
    object: str = "activityType"
    name: str
    location_type: str | None = None

    model_config = {"from_attributes": True}


class AttendeeResponse(BaseModel):
    id: int
    object: str = "contact"
    first_name: str | None = None
    last_name: str | None = None
    complete_name: str = Field(validation_alias="full_name")

    model_config = {"from_attributes": True}


class Attendees(BaseModel):
    total: int
    contacts: list[AttendeeResponse]


class ActivityResponse(BaseModel):
    id: int
    object: str = "activity"
    summary: str
    description: str
    date_it_happened: date
    activity_type: ActivityTypeResponse | None = None
    attendees: Attendees
    account: AccountRef
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_activity(cls, activity) -> "ActivityResponse":
        contacts = [AttendeeResponse.model_validate(c) for c in activity.contacts]
        return cls(
            id=activity.id,
            summary=activity.summary,
            description=activity.description,
            date_it_happened=activity.date_it_happened,
            activity_type=(
                ActivityTypeResponse.model_validate(activity.activity_type)
                if activity.activity_type is not None
                else None
            ),
            attendees=Attendees(total=len(contacts), contacts=contacts),
            account=AccountRef(id=activity.account_id),
            created_at=activity.created_at,
            updated_at=activity.updated_at,
        )

import re
from datetime import date as _date
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def strip_time(value: str) -> str:
    """Reduce a date or datetime string to its ``YYYY-MM-DD`` day.

    ``2024-01-01``, ``2024-01-01T09:30:00Z`` and ``2024-01-01 09:30`` all
    become ``2024-01-01``. The calendar day is taken as written, no timezone
    conversion happens.
    """
    day = value.strip().split("T", 1)[0].split(" ", 1)[0]
    if not DATE_RE.match(day):
        raise ValueError(f"invalid date format: {value}")
    try:
        _date.fromisoformat(day)
    except ValueError:
        raise ValueError(f"invalid date: {value}") from None
    return day


def unique_dates(values: list[str]) -> list[str]:
    """Normalize every date and drop repeats, keeping first-seen order."""
    seen: dict[str, None] = {}
    for v in values:
        seen.setdefault(strip_time(v), None)
    return list(seen)


def normalize_day(value: str) -> str:
    """Like ``strip_time`` but hands back the trimmed input when it is not a date.

    Used where an unparseable value must not fail the request: it simply
    never matches an event date.
    """
    try:
        return strip_time(value)
    except ValueError:
        return value.strip()


def _clean_name(v: str, field: str, max_len: int) -> str:
    v = v.strip()
    if not v or len(v) > max_len:
        raise ValueError(f"{field} must be 1-{max_len} characters")
    return v


# Stored records. These mirror the persisted JSON document and carry no
# length or format rules so that any document written by an older build
# still loads. Event dates and selection dates are normalized the same way.


class AttendeeDate(BaseModel):
    date: str
    available: Optional[bool] = None

    @field_validator("date")
    @classmethod
    def normalize_date(cls, v: str) -> str:
        return normalize_day(v)


class Attendee(BaseModel):
    name: str
    dates: list[AttendeeDate] = []


class Event(BaseModel):
    id: str
    name: str
    author: str
    description: Optional[str] = None
    dates: list[str] = []
    attendees: list[Attendee] = []

    @field_validator("dates")
    @classmethod
    def normalize_dates(cls, v: list[str]) -> list[str]:
        return list(dict.fromkeys(normalize_day(d) for d in v))


# Request bodies


class CreateEventRequest(BaseModel):
    name: str
    author: str
    description: Optional[str] = None
    dates: list[str]

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v, "name", 200)

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: str) -> str:
        return _clean_name(v, "author", 100)

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("dates must not be empty")
        return unique_dates(v)


class PatchEventRequest(BaseModel):
    """Partial update. Fields left out of the body are not touched."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    author: Optional[str] = None
    description: Optional[str] = None
    dates: Optional[list[str]] = None

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _clean_name(v, "name", 200)

    @field_validator("author")
    @classmethod
    def validate_author(cls, v: Optional[str]) -> Optional[str]:
        return None if v is None else _clean_name(v, "author", 100)

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        return None if v is None else unique_dates(v)


class AddDatesRequest(BaseModel):
    dates: list[str]

    @field_validator("dates")
    @classmethod
    def validate_dates(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("dates must not be empty")
        return unique_dates(v)


class AttendanceRequest(BaseModel):
    name: str
    dates: list[AttendeeDate] = []

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return _clean_name(v, "name", 100)


# Responses


class AttendeeAvailability(BaseModel):
    name: str
    available: Optional[bool] = None


class DateSummary(BaseModel):
    date: str
    attendees: list[AttendeeAvailability]


class EventResponse(BaseModel):
    id: str
    name: str
    author: str
    description: Optional[str] = None
    dates: list[DateSummary]
    attendees: list[Attendee]


class AttendeeEvent(BaseModel):
    id: str
    name: str
    dates: list[AttendeeDate]


class AttendeeSummary(BaseModel):
    name: str
    events: list[AttendeeEvent]


class MessageResponse(BaseModel):
    message: str

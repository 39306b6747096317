"""In-memory operations on the event collection.

These are pure list manipulations; loading and persisting the document is
left to the controllers.
"""

import secrets
import string
from collections.abc import Iterable

from eventplanner.models.events import (
    Attendee,
    AttendeeDate,
    AttendeeEvent,
    AttendeeSummary,
    Event,
)

EVENT_ID_LENGTH = 10


def _generate_event_id(length: int = EVENT_ID_LENGTH) -> str:
    chars = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(chars) for _ in range(length))


def new_event_id(events: Iterable[Event], attempts: int = 10) -> str:
    taken = {e.id for e in events}
    for _ in range(attempts):
        event_id = _generate_event_id()
        if event_id not in taken:
            return event_id
    raise RuntimeError("Failed to generate unique event ID")


def filter_selections(selections: Iterable[AttendeeDate], dates: list[str]) -> list[AttendeeDate]:
    """Keep selections whose date is one of ``dates``, first one per date wins."""
    allowed = set(dates)
    kept: dict[str, AttendeeDate] = {}
    for sel in selections:
        if sel.date in allowed and sel.date not in kept:
            kept[sel.date] = sel
    return list(kept.values())


def prune_attendee_dates(event: Event) -> None:
    """Drop every attendee selection that no longer matches an event date."""
    for attendee in event.attendees:
        attendee.dates = filter_selections(attendee.dates, event.dates)


def find_attendee_index(event: Event, name: str) -> int:
    for i, attendee in enumerate(event.attendees):
        if attendee.name == name:
            return i
    return -1


def build_attendee(event: Event, name: str, selections: Iterable[AttendeeDate]) -> Attendee:
    return Attendee(name=name, dates=filter_selections(selections, event.dates))


def remove_date(event: Event, day: str) -> bool:
    """Remove ``day`` from the event and from every attendee's selections.

    Returns whether the event listed the date.
    """
    present = day in event.dates
    event.dates = [d for d in event.dates if d != day]
    for attendee in event.attendees:
        attendee.dates = [sel for sel in attendee.dates if sel.date != day]
    return present


def aggregate_attendees(events: Iterable[Event]) -> list[AttendeeSummary]:
    """Group attendance across events by attendee name, in first-seen order."""
    summaries: dict[str, AttendeeSummary] = {}
    for event in events:
        for attendee in event.attendees:
            summary = summaries.setdefault(
                attendee.name, AttendeeSummary(name=attendee.name, events=[])
            )
            summary.events.append(
                AttendeeEvent(
                    id=event.id,
                    name=event.name,
                    dates=[sel.model_copy() for sel in attendee.dates],
                )
            )
    return list(summaries.values())

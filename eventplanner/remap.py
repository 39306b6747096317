from eventplanner.models.events import (
    AttendeeAvailability,
    DateSummary,
    Event,
    EventResponse,
)


def remap_event(event: Event) -> EventResponse:
    """Shape a stored event for clients.

    ``dates`` becomes one entry per candidate date listing every attendee and
    their ``available`` flag for that date (``None`` when they left it unset).
    """
    by_attendee = [
        (a.name, {sel.date: sel.available for sel in a.dates}) for a in event.attendees
    ]
    return EventResponse(
        id=event.id,
        name=event.name,
        author=event.author,
        description=event.description,
        dates=[
            DateSummary(
                date=d,
                attendees=[
                    AttendeeAvailability(name=name, available=selections.get(d))
                    for name, selections in by_attendee
                ],
            )
            for d in event.dates
        ],
        attendees=[a.model_copy(deep=True) for a in event.attendees],
    )

"""Dependency injection for FastAPI endpoints.

Route guards are composed per endpoint as dependencies, in the order they
are listed in the route signature:

    get_store      -> the configured DocumentStore (503 if not initialized)
    get_event_ref  -> loads the collection and resolves ``event_id`` (404)
    require_body   -> rejects an empty JSON body (400)

Body schemas are then checked by the pydantic request models.

Usage in controllers:
    from eventplanner.dependencies import CurrentEvent, Store

    @router.patch("/events/{event_id}")
    async def patch_event(ref: CurrentEvent, store: Store, ...):
        ref.event.name = "..."
        await store.write(ref.events)
"""

from dataclasses import dataclass
from typing import Annotated

from fastapi import Depends, Request

from eventplanner import state
from eventplanner.errors import BadRequestError, NotFoundError, ServiceUnavailableError
from eventplanner.models.events import Event
from eventplanner.store.base import DocumentStore


def get_store() -> DocumentStore:
    """Get the document store.

    Raises:
        ServiceUnavailableError: If the store has not been initialized.

    Returns:
        The DocumentStore instance.
    """
    if state.store is None:
        raise ServiceUnavailableError(detail="Document store not initialized")
    return state.store


Store = Annotated[DocumentStore, Depends(get_store)]


@dataclass
class EventRef:
    """A loaded collection plus the position of the event a route addresses."""

    events: list[Event]
    index: int

    @property
    def event(self) -> Event:
        return self.events[self.index]


def find_event_index(events: list[Event], event_id: str) -> int:
    for i, event in enumerate(events):
        if event.id == event_id:
            return i
    return -1


async def get_event_ref(event_id: str, store: Store) -> EventRef:
    """Resolve the ``event_id`` path parameter against the stored collection.

    Raises:
        NotFoundError: If no stored event has this id.
    """
    events = await store.load()
    index = find_event_index(events, event_id)
    if index == -1:
        raise NotFoundError(detail=f"Event '{event_id}' not found", event_id=event_id)
    return EventRef(events=events, index=index)


CurrentEvent = Annotated[EventRef, Depends(get_event_ref)]


async def require_body(request: Request) -> None:
    """Reject requests whose JSON body is missing or an empty object.

    Raises:
        BadRequestError: If the body is empty, ``{}`` or ``null``.
    """
    raw = (await request.body()).strip()
    if raw in (b"", b"{}", b"null"):
        raise BadRequestError(detail="Request body is required")

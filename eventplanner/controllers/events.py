import logging
from typing import List

from fastapi import APIRouter, Depends

from eventplanner.dependencies import CurrentEvent, Store, find_event_index, require_body
from eventplanner.domain import new_event_id, prune_attendee_dates, remove_date
from eventplanner.errors import BadRequestError, NotFoundError
from eventplanner.models.events import (
    AddDatesRequest,
    CreateEventRequest,
    Event,
    EventResponse,
    MessageResponse,
    PatchEventRequest,
    normalize_day,
)
from eventplanner.remap import remap_event

logger = logging.getLogger("eventplanner.events")
router = APIRouter(tags=["events"])


@router.delete("/events/delete/{event_id}/{date}", response_model=MessageResponse)
async def delete_date(event_id: str, date: str, ref: CurrentEvent, store: Store) -> MessageResponse:
    logger.info("DELETE /events/delete/%s/%s", event_id, date)
    day = normalize_day(date)
    if not remove_date(ref.event, day):
        logger.info("Date %s not listed on event %s, pruning attendees only", day, event_id)
    await store.write(ref.events)
    return MessageResponse(message="Date deleted")


@router.get("/events", response_model=List[EventResponse])
async def list_events(store: Store) -> List[EventResponse]:
    events = await store.load()
    logger.info("GET /events count=%d", len(events))
    return [remap_event(e) for e in events]


@router.get("/events/{event_id}", response_model=EventResponse)
async def get_event(event_id: str, store: Store) -> EventResponse:
    logger.info("GET /events/%s", event_id)
    events = await store.load()
    index = find_event_index(events, event_id)
    if index == -1:
        logger.warning("Event not found: %s", event_id)
        raise NotFoundError(detail=f"Event '{event_id}' not found", event_id=event_id)
    return remap_event(events[index])


@router.post("/events", response_model=EventResponse, status_code=201)
async def create_event(req: CreateEventRequest, store: Store) -> EventResponse:
    logger.info("POST /events name=%s author=%s dates=%d", req.name, req.author, len(req.dates))
    events = await store.load()
    event = Event(
        id=new_event_id(events),
        name=req.name,
        author=req.author,
        description=req.description,
        dates=req.dates,
        attendees=[],
    )
    events.insert(0, event)
    await store.write(events)
    logger.info("Created event id=%s", event.id)
    return remap_event(event)


@router.patch(
    "/events/{event_id}",
    response_model=EventResponse,
    dependencies=[Depends(require_body)],
)
async def patch_event(
    event_id: str, req: PatchEventRequest, ref: CurrentEvent, store: Store
) -> EventResponse:
    changes = req.model_dump(exclude_unset=True)
    logger.info("PATCH /events/%s fields=%s", event_id, sorted(changes))
    if not changes:
        raise BadRequestError(detail="No updatable fields supplied")
    for field in ("name", "author", "dates"):
        if field in changes and changes[field] is None:
            raise BadRequestError(detail=f"{field} cannot be null")
    event = ref.event.model_copy(update=changes)
    if "dates" in changes:
        prune_attendee_dates(event)
    ref.events[ref.index] = event
    await store.write(ref.events)
    return remap_event(event)


@router.delete("/events/{event_id}", response_model=MessageResponse)
async def delete_event(event_id: str, ref: CurrentEvent, store: Store) -> MessageResponse:
    logger.info("DELETE /events/%s", event_id)
    del ref.events[ref.index]
    await store.write(ref.events)
    return MessageResponse(message="Delete successful")


@router.post(
    "/events/{event_id}/add_dates",
    response_model=EventResponse,
    dependencies=[Depends(require_body)],
)
async def add_dates(
    event_id: str, req: AddDatesRequest, ref: CurrentEvent, store: Store
) -> EventResponse:
    logger.info("POST /events/%s/add_dates dates=%d", event_id, len(req.dates))
    event = ref.event
    existing = [d for d in req.dates if d in event.dates]
    if existing:
        logger.warning("Duplicate dates %s for event %s", existing, event_id)
        raise BadRequestError(detail="One or more dates already exist.", dates=existing)
    event.dates.extend(req.dates)
    await store.write(ref.events)
    return remap_event(event)

import logging
from typing import List

from fastapi import APIRouter, Depends

from eventplanner.dependencies import CurrentEvent, Store, require_body
from eventplanner.domain import aggregate_attendees, build_attendee, find_attendee_index
from eventplanner.errors import BadRequestError, NotFoundError
from eventplanner.models.events import AttendanceRequest, AttendeeSummary, EventResponse
from eventplanner.remap import remap_event

logger = logging.getLogger("eventplanner.attendance")
router = APIRouter(tags=["attendance"])


@router.post(
    "/events/{event_id}/attend",
    response_model=EventResponse,
    dependencies=[Depends(require_body)],
)
async def add_attendee(
    event_id: str, req: AttendanceRequest, ref: CurrentEvent, store: Store
) -> EventResponse:
    logger.info("POST /events/%s/attend name=%s dates=%d", event_id, req.name, len(req.dates))
    event = ref.event
    if find_attendee_index(event, req.name) != -1:
        logger.warning("Attendee %s already on event %s", req.name, event_id)
        raise BadRequestError(detail=f"Attendee '{req.name}' already exists")
    attendee = build_attendee(event, req.name, req.dates)
    if len(attendee.dates) < len(req.dates):
        logger.info("Dropped %d selections outside event %s dates", len(req.dates) - len(attendee.dates), event_id)
    event.attendees.append(attendee)
    await store.write(ref.events)
    return remap_event(event)


@router.patch(
    "/events/{event_id}/attend",
    response_model=EventResponse,
    dependencies=[Depends(require_body)],
)
async def update_attendee(
    event_id: str, req: AttendanceRequest, ref: CurrentEvent, store: Store
) -> EventResponse:
    logger.info("PATCH /events/%s/attend name=%s dates=%d", event_id, req.name, len(req.dates))
    event = ref.event
    index = find_attendee_index(event, req.name)
    if index == -1:
        logger.warning("Attendee %s not on event %s", req.name, event_id)
        raise NotFoundError(detail=f"Attendee '{req.name}' does not exist.")
    event.attendees[index] = build_attendee(event, req.name, req.dates)
    await store.write(ref.events)
    return remap_event(event)


@router.delete("/events/{event_id}/attendees/{attendee_name}", response_model=EventResponse)
async def remove_attendee(
    event_id: str, attendee_name: str, ref: CurrentEvent, store: Store
) -> EventResponse:
    logger.info("DELETE /events/%s/attendees/%s", event_id, attendee_name)
    event = ref.event
    index = find_attendee_index(event, attendee_name)
    if index == -1:
        logger.warning("Attendee %s not on event %s", attendee_name, event_id)
        raise NotFoundError(detail=f"Attendee '{attendee_name}' does not exist.")
    del event.attendees[index]
    await store.write(ref.events)
    return remap_event(event)


@router.get("/attendees", response_model=List[AttendeeSummary])
async def list_attendees(store: Store) -> List[AttendeeSummary]:
    summaries = aggregate_attendees(await store.load())
    logger.info("GET /attendees count=%d", len(summaries))
    return summaries


@router.get("/attendees/{name}", response_model=AttendeeSummary)
async def get_attendee(name: str, store: Store) -> AttendeeSummary:
    logger.info("GET /attendees/%s", name)
    for summary in aggregate_attendees(await store.load()):
        if summary.name == name:
            return summary
    logger.warning("Attendee not found: %s", name)
    raise NotFoundError(detail=f"Attendee '{name}' does not exist.")

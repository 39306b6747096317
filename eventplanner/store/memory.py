from eventplanner.models.events import Event
from eventplanner.store.base import DocumentStore, decode_events, encode_events


class MemoryStore(DocumentStore):
    """Keeps the serialized document in process memory.

    Each ``load()`` decodes a fresh copy, so callers never share mutable
    records with the store or with each other.
    """

    name = "memory"

    def __init__(self, events: list[Event] | None = None) -> None:
        self._document = encode_events(events or [])

    async def load(self) -> list[Event]:
        return decode_events(self._document)

    async def write(self, events: list[Event]) -> None:
        self._document = encode_events(events)

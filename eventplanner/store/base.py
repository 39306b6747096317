"""Document store interface.

The whole collection of events is one document: handlers ``load()`` it,
mutate the list in memory and ``write()`` it back. Backends must be
swappable without touching handler code.
"""

from abc import ABC, abstractmethod

from pydantic import TypeAdapter

from eventplanner.models.events import Event

EVENTS_ADAPTER = TypeAdapter(list[Event])


class DocumentStore(ABC):
    """Load/write contract for the event document."""

    name: str = "abstract"

    @abstractmethod
    async def load(self) -> list[Event]:
        """Return the full collection, in stored order."""
        ...

    @abstractmethod
    async def write(self, events: list[Event]) -> None:
        """Persist ``events``, replacing whatever was stored before."""
        ...

    async def close(self) -> None:
        return None


def decode_events(raw: str | bytes) -> list[Event]:
    return EVENTS_ADAPTER.validate_json(raw)


def encode_events(events: list[Event]) -> bytes:
    return EVENTS_ADAPTER.dump_json(events, indent=2)

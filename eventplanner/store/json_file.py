import asyncio
import logging
import os
import tempfile
from pathlib import Path

from pydantic import ValidationError

from eventplanner.errors import StorageError
from eventplanner.models.events import Event
from eventplanner.store.base import DocumentStore, decode_events, encode_events

_logger = logging.getLogger("eventplanner.store")


class JsonFileStore(DocumentStore):
    """Event document kept as a JSON array in a single file.

    A missing file reads as an empty collection. Each write goes to its own
    temporary sibling, fsynced and then renamed over the target, so readers
    see either the old or the new document, never a truncated one, and
    overlapping writers never share a temp file. The last rename wins.
    """

    name = "file"

    def __init__(self, path: str | os.PathLike[str]) -> None:
        self.path = Path(path)

    def _read(self) -> list[Event]:
        if not self.path.exists():
            return []
        raw = self.path.read_bytes()
        if not raw.strip():
            return []
        return decode_events(raw)

    def _write(self, events: list[Event]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp = tempfile.mkstemp(
            dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(encode_events(events))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, self.path)
        finally:
            # only left behind when something above failed
            if os.path.exists(tmp):
                os.unlink(tmp)

    async def load(self) -> list[Event]:
        try:
            return await asyncio.to_thread(self._read)
        except (OSError, ValidationError) as e:
            _logger.exception("Failed to load event document from %s", self.path)
            raise StorageError(detail="Failed to load events") from e

    async def write(self, events: list[Event]) -> None:
        try:
            await asyncio.to_thread(self._write, events)
        except OSError as e:
            _logger.exception("Failed to write event document to %s", self.path)
            raise StorageError(detail="Failed to save events") from e
        _logger.debug("Wrote %d events to %s", len(events), self.path)

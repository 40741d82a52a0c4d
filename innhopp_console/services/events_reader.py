"""Load event dumps produced by the REST backend."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path

from ..core import Event
from ..core.exceptions import ProcessingError
from ..utils.io import read_text

logger = logging.getLogger(__name__)


class EventsReader:
    """Read a JSON list of events into :class:`Event` objects."""

    def __init__(self, *, encoding: str | None = None):
        self.encoding = encoding or "utf-8-sig"

    def load(self, path: Path | str) -> list[Event]:
        path = Path(path)
        if not path.exists():
            raise ProcessingError(f"Events file not found: {path}")

        try:
            payload = json.loads(read_text(path, self.encoding))
        except json.JSONDecodeError as exc:
            raise ProcessingError(
                "Events file is not valid JSON",
                details={"path": str(path), "line": exc.lineno, "column": exc.colno},
            ) from exc

        if isinstance(payload, Mapping):
            payload = payload.get("events", [])
        if not isinstance(payload, list):
            raise ProcessingError(
                "Events file must contain a list of events",
                details={"path": str(path), "type": type(payload).__name__},
            )

        events: list[Event] = []
        for index, item in enumerate(payload):
            if not isinstance(item, Mapping):
                logger.warning("Skipping entry %s in %s: not an object", index, path.name)
                continue
            events.append(Event.from_mapping(item))
        return events

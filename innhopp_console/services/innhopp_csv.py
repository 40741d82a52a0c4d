"""Export innhopps as ``date,time,name,coordinates`` CSV."""

from __future__ import annotations

import io
import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable

from ..core import Event
from ..utils.event_time import split_schedule

logger = logging.getLogger(__name__)

CSV_HEADER = "date,time,name,coordinates"

_NEEDS_QUOTING = re.compile(r'[",\n]')


@dataclass(frozen=True, slots=True)
class InnhoppCsvRow:
    event_id: int
    date: str
    time: str
    name: str
    coordinates: str

    def sort_key(self) -> tuple[str, str, str]:
        return (self.date, self.time, self.name.casefold())


def csv_escape(value: str) -> str:
    if _NEEDS_QUOTING.search(value):
        return '"{}"'.format(value.replace('"', '""'))
    return value


def build_rows(events: Iterable[Event], *, event_id: int | None = None) -> list[InnhoppCsvRow]:
    """Flatten the innhopps of ``events`` into sorted export rows.

    When ``event_id`` is given only that event's innhopps are kept.
    """

    rows: list[InnhoppCsvRow] = []
    for event in events:
        if event_id is not None and event.id != event_id:
            continue
        for innhopp in event.innhopps:
            date, time = split_schedule(innhopp.scheduled_at)
            rows.append(
                InnhoppCsvRow(
                    event_id=event.id,
                    date=date,
                    time=time,
                    name=(innhopp.name or "").strip(),
                    coordinates=(innhopp.coordinates or "").strip(),
                )
            )
    rows.sort(key=InnhoppCsvRow.sort_key)
    return rows


def render_csv(rows: Iterable[InnhoppCsvRow]) -> str:
    """Render rows as CSV text.

    Coordinates are written verbatim because DMS notation carries a ``"``
    seconds mark that must survive unquoted.
    """

    buffer = io.StringIO()
    buffer.write(CSV_HEADER)
    for row in rows:
        buffer.write("\n")
        buffer.write(
            ",".join(
                (csv_escape(row.date), csv_escape(row.time), csv_escape(row.name), row.coordinates)
            )
        )
    return buffer.getvalue()


@dataclass(slots=True)
class InnhoppCsvExporter:
    """Write the innhopp schedule of one or more events to disk."""

    encoding: str = "utf-8"

    def export(
        self,
        events: Iterable[Event],
        output_path: Path | str,
        *,
        event_id: int | None = None,
    ) -> list[InnhoppCsvRow]:
        output_path = Path(output_path)
        rows = build_rows(events, event_id=event_id)
        output_path.write_text(render_csv(rows), encoding=self.encoding)
        logger.info("Wrote %s innhopp row(s) to %s", len(rows), output_path.name)
        return rows

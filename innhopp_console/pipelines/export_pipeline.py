"""Innhopp export orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from ..config import APP_CONFIG, STORAGE_PATHS
from ..core import ExportSummary, ProcessingError, iter_innhopps
from ..services import EventsReader, InnhoppCsvExporter, is_innhopp_ready
from ..utils.io import ensure_directory, safe_filename

logger = logging.getLogger(__name__)


class ExportStage(str, Enum):
    """Steps of an export, each with the progress it marks on completion."""

    READING = "reading"
    WRITING = "writing"
    CHECKING = "checking"
    DONE = "done"

    @property
    def progress(self) -> int:
        return _STAGE_PROGRESS[self]


_STAGE_PROGRESS = {
    ExportStage.READING: 10,
    ExportStage.WRITING: 40,
    ExportStage.CHECKING: 80,
    ExportStage.DONE: 100,
}

StageCallback = Callable[[ExportStage], None]


def export_csv_path(output_root: Path | str, job_id: str) -> Path:
    """Location of the CSV written for ``job_id``."""

    return Path(output_root) / safe_filename(job_id) / f"{safe_filename(job_id)}_innhopps.csv"


@dataclass(slots=True)
class ExportPipeline:
    """Load an event dump and write its innhopp schedule as CSV."""

    reader: EventsReader
    exporter: InnhoppCsvExporter
    output_root: Path

    def run(
        self,
        *,
        events_path: Path | str,
        job_id: str,
        event_id: int | None = None,
        on_stage: Optional[StageCallback] = None,
    ) -> ExportSummary:
        logger.info("Starting export for job %s", job_id)
        created_at = datetime.now(timezone.utc)
        report = on_stage or (lambda stage: None)

        report(ExportStage.READING)
        events = self.reader.load(events_path)
        if event_id is not None:
            events = [event for event in events if event.id == event_id]
            if not events:
                raise ProcessingError(
                    "Event not found in events file",
                    details={"event_id": event_id, "path": str(events_path)},
                )

        report(ExportStage.WRITING)
        output_file = export_csv_path(self.output_root, job_id)
        ensure_directory(output_file.parent)
        rows = self.exporter.export(events, output_file)

        report(ExportStage.CHECKING)
        ready_count = sum(1 for innhopp in iter_innhopps(events) if is_innhopp_ready(innhopp))
        completed_at = datetime.now(timezone.utc)
        logger.info(
            "Job %s finished; %s row(s), %s ready, generated %s",
            job_id,
            len(rows),
            ready_count,
            output_file.name,
        )
        report(ExportStage.DONE)

        return ExportSummary(
            job_id=job_id,
            created_at=created_at,
            completed_at=completed_at,
            generated_files=[output_file.name],
            event_count=len(events),
            row_count=len(rows),
            ready_count=ready_count,
        )

    @classmethod
    def default(cls) -> "ExportPipeline":
        return cls(
            reader=EventsReader(encoding=APP_CONFIG.events_encoding),
            exporter=InnhoppCsvExporter(),
            output_root=STORAGE_PATHS.outputs,
        )

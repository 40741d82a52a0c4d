"""RQ entry point for innhopp CSV exports."""

from __future__ import annotations

import logging
from pathlib import Path

from rq import get_current_job
from rq.job import Job

from .core.exceptions import ProcessingError
from .pipelines import ExportPipeline, ExportStage

logger = logging.getLogger(__name__)


class JobProgress:
    """Mirror export stages into the meta of the running RQ job."""

    def __init__(self, job: Job | None):
        self.job = job

    def __call__(self, stage: ExportStage) -> None:
        self._save(stage=stage.value, progress=stage.progress)

    def failed(self, exc: ProcessingError) -> None:
        self._save(stage="failed", error=exc.as_dict())

    def _save(self, **meta: object) -> None:
        if self.job is None:
            return
        self.job.meta.update(meta)
        self.job.save_meta()


def process_export(*, job_id: str, events_path: str, event_id: int | None = None) -> dict:
    """Write the innhopp CSV for an uploaded events dump and return its summary."""

    progress = JobProgress(get_current_job())
    pipeline = ExportPipeline.default()

    try:
        summary = pipeline.run(
            events_path=Path(events_path),
            job_id=job_id,
            event_id=event_id,
            on_stage=progress,
        )
    except ProcessingError as exc:
        logger.warning("Export %s failed: %s", job_id, exc)
        progress.failed(exc)
        raise

    return summary.as_dict()

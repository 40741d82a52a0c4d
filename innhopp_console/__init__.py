"""Event-local time, coordinate and readiness tooling for innhopp event logistics."""

from .api.app_factory import create_app
from .pipelines.export_pipeline import ExportPipeline

__all__ = ["create_app", "ExportPipeline"]

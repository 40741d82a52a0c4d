"""Pipelines for export jobs."""

from .export_pipeline import ExportPipeline, ExportStage, export_csv_path

__all__ = ["ExportPipeline", "ExportStage", "export_csv_path"]

"""Build pipeline."""

from .aggregate import aggregate, merge_items
from .build import BuildPipeline, PipelineStage
from .normalize import normalize_entry, normalize_text, stable_id, to_iso_date
from .orchestrator import FetchOrchestrator, select_adapter
from .writer import write_snapshot

__all__ = [
    "BuildPipeline",
    "PipelineStage",
    "FetchOrchestrator",
    "select_adapter",
    "aggregate",
    "merge_items",
    "normalize_entry",
    "normalize_text",
    "stable_id",
    "to_iso_date",
    "write_snapshot",
]

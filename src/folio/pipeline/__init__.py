"""Inventory, per-image tasks and the build orchestrator."""

from folio.pipeline.inventory import CollectionSpec, Inventory, discover_collections
from folio.pipeline.manifest import write_manifest
from folio.pipeline.orchestrator import ImageOrchestrator
from folio.pipeline.tasks import ImageTask, TaskOutcome, TaskStatus, run_image_task

__all__ = [
    "CollectionSpec",
    "ImageOrchestrator",
    "ImageTask",
    "Inventory",
    "TaskOutcome",
    "TaskStatus",
    "discover_collections",
    "run_image_task",
    "write_manifest",
]

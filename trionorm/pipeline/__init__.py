"""Document and batch processing across all stages."""

from trionorm.pipeline.batch import BatchProcessor
from trionorm.pipeline.models import (
    BatchResult,
    BatchSummary,
    DocumentResult,
    EquipmentRecord,
    ProcessedPoint,
)
from trionorm.pipeline.options import ProcessingOptions
from trionorm.pipeline.processor import DocumentProcessor
from trionorm.pipeline.store import EquipmentStore, InMemoryEquipmentStore

__all__ = [
    "BatchProcessor",
    "BatchResult",
    "BatchSummary",
    "DocumentProcessor",
    "DocumentResult",
    "EquipmentRecord",
    "EquipmentStore",
    "InMemoryEquipmentStore",
    "ProcessedPoint",
    "ProcessingOptions",
]

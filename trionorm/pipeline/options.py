"""Per-batch processing options."""

from __future__ import annotations

from pydantic import BaseModel, Field

from trionorm.config import DEFAULT_CONCURRENCY, DEFAULT_MAX_POINTS_PER_EQUIPMENT


class ProcessingOptions(BaseModel):
    strict_mode: bool = False
    """Abort a document on its first structural parse error."""

    max_points_per_equipment: int = Field(default=DEFAULT_MAX_POINTS_PER_EQUIPMENT, ge=1)
    skip_empty_files: bool = True
    """Warn about documents that yield no points."""

    concurrency: int = Field(default=DEFAULT_CONCURRENCY, ge=1)
    """Documents processed side by side in one batch group."""

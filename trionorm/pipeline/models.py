"""Result models for document and batch processing."""

from __future__ import annotations

from collections import Counter

from pydantic import BaseModel, Field

from trionorm.classification.classifier import ClassificationResult
from trionorm.compliance.report import BatchComplianceSummary
from trionorm.normalization.models import NormalizedPoint


class EquipmentRecord(BaseModel):
    """The equipment a document describes, as handed to the store."""

    id: str
    name: str
    type: str
    display_type: str
    vendor: str = "Unknown"
    model: str = "Unknown"
    description: str = ""
    point_count: int = 0


class ProcessedPoint(BaseModel):
    """One point after normalization, tagging and compliance scoring."""

    point: NormalizedPoint
    markers: list[str] = Field(default_factory=list)
    compliance_score: float = 0.0
    compliance_level: str = "low"
    compliant: bool = False
    normalized: bool = True
    """False when normalization failed and the original name was kept."""


class DocumentResult(BaseModel):
    """Outcome of processing one trio document."""

    name: str
    success: bool = False
    equipment: EquipmentRecord | None = None
    classification: ClassificationResult | None = None
    total_sections: int = 0
    points: list[ProcessedPoint] = Field(default_factory=list)
    compliance: BatchComplianceSummary | None = None
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0

    @property
    def point_count(self) -> int:
        return len(self.points)

    @property
    def equipment_type(self) -> str | None:
        return self.classification.equipment_type if self.classification else None


class BatchSummary(BaseModel):
    """Aggregate counts over a batch of document results."""

    total_files: int = 0
    successful_files: int = 0
    failed_files: int = 0
    equipment_type_distribution: dict[str, int] = Field(default_factory=dict)
    total_points: int = 0
    average_points_per_equipment: float = 0.0
    common_errors: dict[str, int] = Field(default_factory=dict)
    """Error message -> number of documents reporting it, most common first."""

    @classmethod
    def from_results(cls, results: list[DocumentResult]) -> BatchSummary:
        successful = [r for r in results if r.success]
        types = Counter(r.equipment_type for r in successful if r.equipment_type)
        errors = Counter(error for r in results for error in r.errors)
        total_points = sum(r.point_count for r in successful)
        return cls(
            total_files=len(results),
            successful_files=len(successful),
            failed_files=len(results) - len(successful),
            equipment_type_distribution=dict(types),
            total_points=total_points,
            average_points_per_equipment=(
                round(total_points / len(successful), 2) if successful else 0.0
            ),
            common_errors=dict(errors.most_common()),
        )


class BatchResult(BaseModel):
    results: list[DocumentResult] = Field(default_factory=list)
    """Per-document results in input order."""

    summary: BatchSummary = Field(default_factory=BatchSummary)

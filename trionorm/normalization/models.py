"""Pydantic models for point-name normalization."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, Field


class PointFunction(str, Enum):
    """Coarse role of a point."""

    SENSOR = "sensor"
    SETPOINT = "setpoint"
    COMMAND = "command"
    STATUS = "status"
    UNKNOWN = "unknown"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class ConfidenceLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    UNKNOWN = "unknown"


class NormalizationContext(BaseModel):
    """Equipment-level signals that raise normalization confidence."""

    equipment_type: str | None = None
    equipment_name: str | None = None
    vendor_name: str | None = None
    units: str | None = None


class TokenAnalysis(BaseModel):
    """How one display-name token was interpreted."""

    token: str
    expansion: str | None = None
    confidence: float = 0.1
    source: str = "unmatched"
    """'acronym' when the dictionary matched, otherwise 'unmatched'."""

    point_function: PointFunction | None = None
    acronym: str | None = None

    @property
    def text(self) -> str:
        return self.expansion or self.token


class ExpandedAcronym(BaseModel):
    original: str
    expanded: str
    confidence: float


class NormalizedPoint(BaseModel):
    """A projected point with a human-readable name and confidence."""

    original_point_id: str
    original_name: str
    original_description: str = ""
    normalized_name: str
    expanded_description: str
    point_function: PointFunction = PointFunction.UNKNOWN
    haystack_tags: list[str] = Field(default_factory=list)
    """Marker names, filled in by the semantic tagger."""

    confidence_score: float = 0.0
    confidence_level: ConfidenceLevel = ConfidenceLevel.UNKNOWN
    normalization_method: str = "unmatched"
    expanded_acronyms: list[ExpandedAcronym] = Field(default_factory=list)
    applied_rules: list[str] = Field(default_factory=list)
    requires_manual_review: bool = False
    has_conflicts: bool = False

    # Copied from the projected point for tagging
    object_kind: str = ""
    unit: str | None = None
    is_command: bool = False
    is_writable: bool = False


class NormalizationResult(BaseModel):
    """Outcome of normalizing one point.

    ``success`` is False when analysis raised; ``point()`` then returns the
    ``fallback`` point, which keeps the original name unnormalized.
    """

    success: bool
    normalized_point: NormalizedPoint | None = None
    fallback: NormalizedPoint | None = None
    tokens: list[TokenAnalysis] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    processing_time_ms: float = 0.0

    def point(self) -> NormalizedPoint:
        """The usable point: the normalized one, or the fallback on failure."""
        point = self.normalized_point if self.success else self.fallback
        if point is None:
            raise ValueError("Normalization result carries no point")
        return point

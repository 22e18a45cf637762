"""ComplianceReport and batch summary models."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from trionorm.compliance.rules import ERROR, SUGGESTION, WARNING, ComplianceIssue


class ComplianceLevel(str, Enum):
    FULL = "full"
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


def compliance_level(score: float) -> ComplianceLevel:
    """Map a 0-100 score onto its compliance level."""
    if score >= 90:
        return ComplianceLevel.FULL
    if score >= 70:
        return ComplianceLevel.HIGH
    if score >= 50:
        return ComplianceLevel.MEDIUM
    return ComplianceLevel.LOW


class ComplianceReport:
    """Compliance outcome for one marker set."""

    def __init__(
        self,
        point_id: str = "",
        markers: list[str] | None = None,
        issues: list[ComplianceIssue] | None = None,
        score: float = 100,
        is_valid: bool = True,
        validated_at: datetime | None = None,
    ) -> None:
        self.point_id = point_id
        self.markers = markers or []
        self.issues = issues or []
        self.score = score
        self.is_valid = is_valid
        self.validated_at = validated_at or datetime.now(timezone.utc)

    @property
    def level(self) -> ComplianceLevel:
        return compliance_level(self.score)

    @property
    def completeness(self) -> float:
        return self.score / 100

    def _messages(self, severity: str) -> list[str]:
        return [i.message for i in self.issues if i.severity == severity]

    @property
    def errors(self) -> list[str]:
        return self._messages(ERROR)

    @property
    def warnings(self) -> list[str]:
        return self._messages(WARNING)

    @property
    def suggestions(self) -> list[str]:
        return self._messages(SUGGESTION)

    def to_markdown(self) -> str:
        """Render a short human-readable report."""
        lines: list[str] = []

        lines.append(f"# Compliance Report — {self.point_id or 'Unknown'}")
        lines.append("")
        lines.append(f"**Markers:** {' '.join(f'`{m}`' for m in self.markers) or '(none)'}")
        lines.append(f"**Score:** {self.score:g} ({self.level.value})")
        lines.append(f"**Valid:** {'yes' if self.is_valid else 'no'}")
        lines.append(f"**Validated:** {self.validated_at.strftime('%Y-%m-%d %H:%M UTC')}")
        lines.append("")

        lines.append(
            f"**Summary:** {len(self.errors)} errors, {len(self.warnings)} warnings, "
            f"{len(self.suggestions)} suggestions"
        )
        lines.append("")

        if self.issues:
            lines.append("## Issues")
            lines.append("")
            lines.append("| Severity | Rule | Message | Deduction |")
            lines.append("|----------|------|---------|-----------|")
            for issue in self.issues:
                msg = issue.message.replace("|", "\\|")
                lines.append(
                    f"| {issue.severity.upper()} | {issue.rule_name} | {msg} | -{issue.deduction} |"
                )
            lines.append("")
        else:
            lines.append("No issues found. Markers pass all compliance checks.")
            lines.append("")

        return "\n".join(lines)

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2, default=str)

    def to_dict(self) -> dict[str, Any]:
        return {
            "point_id": self.point_id,
            "markers": list(self.markers),
            "score": self.score,
            "level": self.level.value,
            "is_valid": self.is_valid,
            "completeness": self.completeness,
            "validated_at": self.validated_at.isoformat(),
            "issues": [i.to_dict() for i in self.issues],
        }


class IssueCount(BaseModel):
    message: str
    severity: str
    count: int


class BatchComplianceSummary(BaseModel):
    """Aggregate view over many compliance reports."""

    total_points: int = 0
    valid_points: int = 0
    average_score: float = 0.0
    level_distribution: dict[str, int] = Field(
        default_factory=lambda: {level.value: 0 for level in ComplianceLevel}
    )
    common_issues: list[IssueCount] = Field(default_factory=list)
    """Error and warning messages with occurrence counts, errors first."""

    suggestions: list[IssueCount] = Field(default_factory=list)
    recommendations: list[str] = Field(default_factory=list)

    @property
    def compliance_rate(self) -> float:
        return self.valid_points / self.total_points if self.total_points else 0.0

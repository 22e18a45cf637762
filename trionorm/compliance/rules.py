"""Compliance rules — each inspects a marker list and reports issues.

Every issue carries the score deduction it costs.  Issues that
``invalidate`` mark the whole marker set non-compliant.
"""

from __future__ import annotations

import abc
from typing import Any

from trionorm.compliance.vocabulary import (
    DEPRECATED_MARKERS,
    OFFICIAL_MARKERS,
    ROLE_MARKERS,
    VENDOR_NAMESPACE_SEPARATOR,
)

ERROR = "error"
WARNING = "warning"
SUGGESTION = "suggestion"

NON_STANDARD_DEDUCTION = 3
DEPRECATED_DEDUCTION = 2
MISSING_COMBINATION_DEDUCTIONS = {WARNING: 5, SUGGESTION: 2}
CONFLICT_DEDUCTIONS = {ERROR: 15, WARNING: 8}
MISSING_POINT_DEDUCTION = 20


class ComplianceIssue:
    """A single compliance finding."""

    def __init__(
        self,
        rule_name: str,
        severity: str,
        message: str,
        deduction: int = 0,
        invalidates: bool = False,
    ) -> None:
        self.rule_name = rule_name
        self.severity = severity  # "error", "warning", "suggestion"
        self.message = message
        self.deduction = deduction
        self.invalidates = invalidates

    def to_dict(self) -> dict[str, Any]:
        return {
            "rule_name": self.rule_name,
            "severity": self.severity,
            "message": self.message,
            "deduction": self.deduction,
            "invalidates": self.invalidates,
        }

    def __repr__(self) -> str:
        return f"ComplianceIssue({self.rule_name!r}, {self.severity!r}, {self.message!r})"


class ComplianceRule(abc.ABC):
    """Base class for all compliance rules."""

    @property
    @abc.abstractmethod
    def name(self) -> str:
        """Short rule identifier."""

    @property
    @abc.abstractmethod
    def description(self) -> str:
        """Human-readable description."""

    @abc.abstractmethod
    def check(self, markers: list[str]) -> list[ComplianceIssue]:
        """Run this rule against a marker list.

        Returns list of issues (empty if passing).
        """


class MarkerVocabularyRule(ComplianceRule):
    """Every marker should come from the official vocabulary."""

    def __init__(
        self,
        official: frozenset[str] = OFFICIAL_MARKERS,
        deprecated: frozenset[str] = DEPRECATED_MARKERS,
    ) -> None:
        self.official = official
        self.deprecated = deprecated

    @property
    def name(self) -> str:
        return "compliance.vocabulary"

    @property
    def description(self) -> str:
        return "Flag deprecated and non-standard markers."

    def check(self, markers: list[str]) -> list[ComplianceIssue]:
        issues: list[ComplianceIssue] = []
        for marker in markers:
            if marker in self.official:
                continue
            if marker in self.deprecated:
                issues.append(ComplianceIssue(
                    rule_name=self.name,
                    severity=WARNING,
                    message=f"Deprecated marker: {marker}",
                    deduction=DEPRECATED_DEDUCTION,
                ))
            elif VENDOR_NAMESPACE_SEPARATOR not in marker:
                issues.append(ComplianceIssue(
                    rule_name=self.name,
                    severity=WARNING,
                    message=f"Non-standard marker: {marker}",
                    deduction=NON_STANDARD_DEDUCTION,
                ))
        return issues


class RequiredCombinationRule(ComplianceRule):
    """When all ``required`` markers are present, one of ``should_have`` should be too."""

    def __init__(
        self,
        title: str,
        summary: str,
        required: tuple[str, ...],
        should_have: tuple[str, ...],
        severity: str = WARNING,
    ) -> None:
        if severity not in MISSING_COMBINATION_DEDUCTIONS:
            raise ValueError(f"Unsupported severity {severity!r} for {title}")
        self.title = title
        self.summary = summary
        self.required = required
        self.should_have = should_have
        self.severity = severity

    @property
    def name(self) -> str:
        return "compliance.required." + self.title.lower().replace(" ", "_")

    @property
    def description(self) -> str:
        return self.summary

    def check(self, markers: list[str]) -> list[ComplianceIssue]:
        present = set(markers)
        if not all(m in present for m in self.required):
            return []
        if any(m in present for m in self.should_have):
            return []
        return [ComplianceIssue(
            rule_name=self.name,
            severity=self.severity,
            message=(
                f"{self.title}: {self.summary}. "
                f"Consider adding one of: {', '.join(self.should_have)}"
            ),
            deduction=MISSING_COMBINATION_DEDUCTIONS[self.severity],
        )]


class ConflictingMarkersRule(ComplianceRule):
    """At most ``max_allowed`` of ``markers`` may appear together."""

    def __init__(
        self,
        title: str,
        summary: str,
        markers: tuple[str, ...],
        max_allowed: int = 1,
        severity: str = ERROR,
    ) -> None:
        if severity not in CONFLICT_DEDUCTIONS:
            raise ValueError(f"Unsupported severity {severity!r} for {title}")
        self.title = title
        self.summary = summary
        self.markers = markers
        self.max_allowed = max_allowed
        self.severity = severity

    @property
    def name(self) -> str:
        return "compliance.conflict." + self.title.lower().replace(" ", "_")

    @property
    def description(self) -> str:
        return self.summary

    def check(self, markers: list[str]) -> list[ComplianceIssue]:
        present = [m for m in self.markers if m in markers]
        if len(present) <= self.max_allowed:
            return []
        return [ComplianceIssue(
            rule_name=self.name,
            severity=self.severity,
            message=f"{self.title}: {self.summary}. Found: {', '.join(present)}",
            deduction=CONFLICT_DEDUCTIONS[self.severity],
            invalidates=self.severity == ERROR,
        )]


class BasePointMarkerRule(ComplianceRule):
    """Every point must carry the ``point`` marker."""

    @property
    def name(self) -> str:
        return "compliance.base_point"

    @property
    def description(self) -> str:
        return "Require the base point marker."

    def check(self, markers: list[str]) -> list[ComplianceIssue]:
        if "point" in markers:
            return []
        return [ComplianceIssue(
            rule_name=self.name,
            severity=ERROR,
            message='Missing required "point" marker',
            deduction=MISSING_POINT_DEDUCTION,
            invalidates=True,
        )]


def default_rules() -> list[ComplianceRule]:
    """Built-in rules in evaluation order."""
    return [
        MarkerVocabularyRule(),
        RequiredCombinationRule(
            "Point Role",
            "All points should have a role marker",
            required=("point",),
            should_have=ROLE_MARKERS,
            severity=WARNING,
        ),
        RequiredCombinationRule(
            "Equipment Context",
            "HVAC points should have equipment context",
            required=("point", "hvac"),
            should_have=("ahu", "vav", "rtu", "chiller", "boiler", "pump", "fan"),
            severity=SUGGESTION,
        ),
        RequiredCombinationRule(
            "Physical Quantity",
            "Sensor points should have physical quantity",
            required=("point", "sensor"),
            should_have=("temp", "pressure", "flow", "humidity", "power", "energy"),
            severity=SUGGESTION,
        ),
        ConflictingMarkersRule(
            "Multiple Roles",
            "Points should not have multiple role markers",
            markers=ROLE_MARKERS,
            severity=ERROR,
        ),
        ConflictingMarkersRule(
            "Temperature Units",
            "Points should not have multiple temperature unit markers",
            markers=("fahrenheit", "celsius", "kelvin"),
            severity=WARNING,
        ),
        ConflictingMarkersRule(
            "Equipment Types",
            "Points should not have multiple primary equipment types",
            markers=("ahu", "vav", "rtu", "chiller", "boiler"),
            severity=WARNING,
        ),
        BasePointMarkerRule(),
    ]

"""ComplianceValidator — score marker sets against the tagging vocabulary.

Usage::

    from trionorm.compliance import ComplianceValidator

    report = ComplianceValidator().validate(markers, point_id="AI39")
    report.score, report.level, report.is_valid
"""

from __future__ import annotations

import logging
from collections import Counter, defaultdict
from typing import Iterable

from trionorm.compliance.report import (
    BatchComplianceSummary,
    ComplianceLevel,
    ComplianceReport,
    IssueCount,
)
from trionorm.compliance.rules import (
    ERROR,
    SUGGESTION,
    WARNING,
    ComplianceIssue,
    ComplianceRule,
    default_rules,
)
from trionorm.config import MAX_COMPLIANCE_SCORE
from trionorm.tagging.models import MarkerSet

logger = logging.getLogger(__name__)

_RECOMMENDATION_SCORE = 80
_WARNING_SPREAD_RATIO = 0.3


def _marker_names(markers: MarkerSet | Iterable[str]) -> list[str]:
    if isinstance(markers, MarkerSet):
        return markers.names()
    return list(markers)


class ComplianceValidator:
    """Runs the registered rules and turns their deductions into a score.

    Loads the built-in rules on init.  Additional rules can be registered
    via :meth:`add_rule`.
    """

    def __init__(self, rules: list[ComplianceRule] | None = None) -> None:
        self.rules: list[ComplianceRule] = default_rules() if rules is None else list(rules)

    def add_rule(self, rule: ComplianceRule) -> None:
        """Register an additional compliance rule."""
        self.rules.append(rule)

    def validate(self, markers: MarkerSet | Iterable[str], point_id: str = "") -> ComplianceReport:
        """Validate one marker set.

        Parameters
        ----------
        markers:
            A :class:`MarkerSet` or plain marker names.
        point_id:
            Identifier echoed into the report.

        Returns
        -------
        ComplianceReport
            Score floored at 0; invalid when any issue invalidates.
        """
        names = _marker_names(markers)

        issues: list[ComplianceIssue] = []
        for rule in self.rules:
            issues.extend(rule.check(names))

        score = max(0, MAX_COMPLIANCE_SCORE - sum(i.deduction for i in issues))
        is_valid = not any(i.invalidates for i in issues)
        if issues:
            logger.debug("Compliance for %s: score %s, %d issues", point_id or names, score, len(issues))

        return ComplianceReport(
            point_id=point_id,
            markers=names,
            issues=issues,
            score=score,
            is_valid=is_valid,
        )

    def validate_batch(self, marker_sets: Iterable[MarkerSet | Iterable[str]]) -> list[ComplianceReport]:
        return [self.validate(markers) for markers in marker_sets]

    def summarize(self, reports: list[ComplianceReport]) -> BatchComplianceSummary:
        """Aggregate *reports* into counts, common issues and recommendations."""
        total = len(reports)
        if total == 0:
            return BatchComplianceSummary()

        average = sum(r.score for r in reports) / total
        levels = Counter(r.level.value for r in reports)

        counts: dict[str, Counter[str]] = defaultdict(Counter)
        for report in reports:
            for issue in report.issues:
                counts[issue.severity][issue.message] += 1

        def _counted(severity: str) -> list[IssueCount]:
            return [
                IssueCount(message=message, severity=severity, count=count)
                for message, count in counts[severity].items()
            ]

        recommendations: list[str] = []
        if average < _RECOMMENDATION_SCORE:
            recommendations.append("Consider reviewing tag consistency across all points")
        if counts[ERROR]:
            recommendations.append("Address critical errors to improve compliance")
        if len(counts[WARNING]) > total * _WARNING_SPREAD_RATIO:
            recommendations.append("Review warning patterns to improve tag quality")

        return BatchComplianceSummary(
            total_points=total,
            valid_points=sum(1 for r in reports if r.is_valid),
            average_score=round(average, 2),
            level_distribution={level.value: levels.get(level.value, 0) for level in ComplianceLevel},
            common_issues=_counted(ERROR) + _counted(WARNING),
            suggestions=_counted(SUGGESTION),
            recommendations=recommendations,
        )

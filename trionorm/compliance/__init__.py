"""Marker compliance — vocabulary, combination and conflict checks with scoring."""

from trionorm.compliance.report import (
    BatchComplianceSummary,
    ComplianceLevel,
    ComplianceReport,
    IssueCount,
    compliance_level,
)
from trionorm.compliance.rules import (
    BasePointMarkerRule,
    ComplianceIssue,
    ComplianceRule,
    ConflictingMarkersRule,
    MarkerVocabularyRule,
    RequiredCombinationRule,
    default_rules,
)
from trionorm.compliance.validator import ComplianceValidator
from trionorm.compliance.vocabulary import DEPRECATED_MARKERS, OFFICIAL_MARKERS

__all__ = [
    "BasePointMarkerRule",
    "BatchComplianceSummary",
    "ComplianceIssue",
    "ComplianceLevel",
    "ComplianceReport",
    "ComplianceRule",
    "ComplianceValidator",
    "ConflictingMarkersRule",
    "DEPRECATED_MARKERS",
    "IssueCount",
    "MarkerVocabularyRule",
    "OFFICIAL_MARKERS",
    "RequiredCombinationRule",
    "compliance_level",
    "default_rules",
]

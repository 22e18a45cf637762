"""trionorm — trio point-list parsing, equipment classification and point normalization."""

__version__ = "1.0.0"

from trionorm.api.facade import TrioNorm
from trionorm.classification import (
    ClassificationCache,
    ClassificationResult,
    EquipmentClassifier,
    EquipmentMetadata,
    MetadataLookup,
    StaticMetadataLookup,
    classify_equipment,
)
from trionorm.compliance import (
    BatchComplianceSummary,
    ComplianceReport,
    ComplianceRule,
    ComplianceValidator,
)
from trionorm.config_manager import ConfigManager
from trionorm.normalization import (
    NormalizationContext,
    NormalizationResult,
    NormalizedPoint,
    PointFunction,
    PointNormalizer,
)
from trionorm.parsing import (
    ParseResult,
    ProjectedPoint,
    TrioParseError,
    TrioParser,
    parse_scalar,
    parse_trio,
    project_points,
    project_record,
)
from trionorm.pipeline import (
    BatchProcessor,
    BatchResult,
    BatchSummary,
    DocumentProcessor,
    DocumentResult,
    EquipmentStore,
    InMemoryEquipmentStore,
    ProcessingOptions,
)
from trionorm.tagging import MarkerSet, SemanticTagger, to_trio, to_zinc

__all__ = [
    "__version__",
    # Facade
    "TrioNorm",
    # Parsing
    "ParseResult",
    "ProjectedPoint",
    "TrioParseError",
    "TrioParser",
    "parse_scalar",
    "parse_trio",
    "project_points",
    "project_record",
    # Classification
    "ClassificationCache",
    "ClassificationResult",
    "EquipmentClassifier",
    "EquipmentMetadata",
    "MetadataLookup",
    "StaticMetadataLookup",
    "classify_equipment",
    # Normalization
    "NormalizationContext",
    "NormalizationResult",
    "NormalizedPoint",
    "PointFunction",
    "PointNormalizer",
    # Tagging and compliance
    "BatchComplianceSummary",
    "ComplianceReport",
    "ComplianceRule",
    "ComplianceValidator",
    "MarkerSet",
    "SemanticTagger",
    "to_trio",
    "to_zinc",
    # Pipeline
    "BatchProcessor",
    "BatchResult",
    "BatchSummary",
    "ConfigManager",
    "DocumentProcessor",
    "DocumentResult",
    "EquipmentStore",
    "InMemoryEquipmentStore",
    "ProcessingOptions",
]

"""Equipment classification — vendor/model rules, prefix dictionary, name patterns."""

from trionorm.classification.cache import ClassificationCache
from trionorm.classification.classifier import (
    Alternative,
    ClassificationResult,
    EquipmentClassifier,
    classify_equipment,
    get_display_name,
    strip_extension,
)
from trionorm.classification.metadata import (
    EquipmentMetadata,
    MetadataLookup,
    NullMetadataLookup,
    StaticMetadataLookup,
)

__all__ = [
    "Alternative",
    "ClassificationCache",
    "ClassificationResult",
    "EquipmentClassifier",
    "EquipmentMetadata",
    "MetadataLookup",
    "NullMetadataLookup",
    "StaticMetadataLookup",
    "classify_equipment",
    "get_display_name",
    "strip_extension",
]

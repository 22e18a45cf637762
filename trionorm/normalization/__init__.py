"""Point-name normalization — tokenize, expand acronyms, score confidence."""

from trionorm.normalization.acronyms import DEFAULT_ACRONYMS, AcronymDictionary, AcronymEntry
from trionorm.normalization.models import (
    ConfidenceLevel,
    ExpandedAcronym,
    NormalizationContext,
    NormalizationResult,
    NormalizedPoint,
    PointFunction,
    TokenAnalysis,
)
from trionorm.normalization.normalizer import PointNormalizer, confidence_level
from trionorm.normalization.tokenizer import tokenize_point_name
from trionorm.normalization.vendors import infer_vendor_from_name

__all__ = [
    "AcronymDictionary",
    "AcronymEntry",
    "ConfidenceLevel",
    "DEFAULT_ACRONYMS",
    "ExpandedAcronym",
    "NormalizationContext",
    "NormalizationResult",
    "NormalizedPoint",
    "PointFunction",
    "PointNormalizer",
    "TokenAnalysis",
    "confidence_level",
    "infer_vendor_from_name",
    "tokenize_point_name",
]

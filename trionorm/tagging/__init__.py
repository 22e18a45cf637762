"""Semantic tagging — marker inference and export."""

from trionorm.tagging.export import to_trio, to_zinc
from trionorm.tagging.mappings import MARKER_PRIORITY, sort_markers
from trionorm.tagging.models import Marker, MarkerCategory, MarkerSet, MarkerSource, MarkerStage
from trionorm.tagging.tagger import SemanticTagger

__all__ = [
    "MARKER_PRIORITY",
    "Marker",
    "MarkerCategory",
    "MarkerSet",
    "MarkerSource",
    "MarkerStage",
    "SemanticTagger",
    "sort_markers",
    "to_trio",
    "to_zinc",
]

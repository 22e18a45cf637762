"""SemanticTagger — infer marker tags for a normalized point.

Stages, each contributing its first match:

1. base ``point`` marker;
2. role from the BACnet object kind, else from the point's command flags;
3. quantity from the exact unit, else from name keywords;
4. equipment context from name keywords;
5. location context from name keywords.

Usage::

    from trionorm.tagging import SemanticTagger

    markers = SemanticTagger().tag(normalized_point)
    markers.names()   # ['point', 'sensor', 'temp', 'zone']
"""

from __future__ import annotations

import logging

from trionorm.normalization.models import NormalizedPoint, PointFunction
from trionorm.tagging.mappings import (
    COMMAND_ROLE_CONFIDENCE,
    EQUIPMENT_KEYWORDS,
    LOCATION_KEYWORD_CONFIDENCE,
    LOCATION_KEYWORDS,
    OBJECT_KIND_ROLES,
    QUANTITY_KEYWORD_CONFIDENCE,
    QUANTITY_KEYWORDS,
    SENSOR_ROLE_CONFIDENCE,
    UNIT_QUANTITIES,
)
from trionorm.tagging.models import Marker, MarkerCategory, MarkerSet, MarkerSource, MarkerStage

logger = logging.getLogger(__name__)

_ENTITY_MARKERS = frozenset({"point", "equip"})


def _bundle(
    names: tuple[str, ...],
    stage: MarkerStage,
    confidence: float,
    category: MarkerCategory,
) -> list[Marker]:
    return [
        Marker(
            name=name,
            source=MarkerSource.INFERRED,
            stage=stage,
            confidence=confidence,
            category=MarkerCategory.ENTITY if name in _ENTITY_MARKERS else category,
        )
        for name in names
    ]


def _first_keyword(text: str, table: list[tuple[str, tuple[str, ...]]]) -> str | None:
    for marker, keywords in table:
        if any(keyword in text for keyword in keywords):
            return marker
    return None


class SemanticTagger:
    """Rule-table driven marker inference."""

    def tag(self, point: NormalizedPoint) -> MarkerSet:
        """Infer markers for *point* and record their names on it.

        The returned set always contains ``point``.  Its names are appended
        to ``point.haystack_tags`` (skipping names already present).
        """
        name = (point.normalized_name or point.original_name).lower()

        markers = _bundle(("point",), MarkerStage.BASE, 1.0, MarkerCategory.ENTITY)
        markers.extend(self._role_markers(point))
        markers.extend(self._quantity_markers(point, name))
        markers.extend(self._equipment_markers(name))
        markers.extend(self._location_markers(name))

        marker_set = MarkerSet(markers)
        for marker_name in marker_set.names():
            if marker_name not in point.haystack_tags:
                point.haystack_tags.append(marker_name)

        logger.debug("Tagged %s with %s", point.original_point_id, marker_set.names())
        return marker_set

    def _role_markers(self, point: NormalizedPoint) -> list[Marker]:
        mapping = OBJECT_KIND_ROLES.get(point.object_kind.upper())
        if mapping is not None:
            _, names, confidence = mapping
            return _bundle(names, MarkerStage.OBJECT_KIND, confidence, MarkerCategory.ROLE)

        if point.is_command or point.point_function is PointFunction.COMMAND:
            return _bundle(("cmd",), MarkerStage.POINT_FLAGS, COMMAND_ROLE_CONFIDENCE, MarkerCategory.ROLE)
        return _bundle(("sensor",), MarkerStage.POINT_FLAGS, SENSOR_ROLE_CONFIDENCE, MarkerCategory.ROLE)

    def _quantity_markers(self, point: NormalizedPoint, name: str) -> list[Marker]:
        if point.unit and point.unit in UNIT_QUANTITIES:
            _, names, confidence = UNIT_QUANTITIES[point.unit]
            return _bundle(names, MarkerStage.UNIT, confidence, MarkerCategory.QUANTITY)

        quantity = _first_keyword(name, QUANTITY_KEYWORDS)
        if quantity is None:
            return []
        return _bundle((quantity,), MarkerStage.NAME, QUANTITY_KEYWORD_CONFIDENCE, MarkerCategory.QUANTITY)

    def _equipment_markers(self, name: str) -> list[Marker]:
        for keyword, names, confidence in EQUIPMENT_KEYWORDS:
            if keyword in name:
                return _bundle(names, MarkerStage.NAME, confidence, MarkerCategory.EQUIPMENT)
        return []

    def _location_markers(self, name: str) -> list[Marker]:
        location = _first_keyword(name, LOCATION_KEYWORDS)
        if location is None:
            return []
        return _bundle((location,), MarkerStage.NAME, LOCATION_KEYWORD_CONFIDENCE, MarkerCategory.LOCATION)

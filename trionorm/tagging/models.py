"""Marker models produced by the semantic tagger."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Iterator

from pydantic import BaseModel, ConfigDict

from trionorm.tagging.mappings import sort_markers


class MarkerSource(str, Enum):
    """Where a marker came from."""

    MANUAL = "manual"
    INFERRED = "inferred"
    TEMPLATE = "template"


class MarkerStage(str, Enum):
    """Which tagging stage inferred a marker."""

    BASE = "base"
    OBJECT_KIND = "object_kind"
    POINT_FLAGS = "point_flags"
    UNIT = "unit"
    NAME = "name"


class MarkerCategory(str, Enum):
    ENTITY = "entity"
    ROLE = "role"
    QUANTITY = "quantity"
    EQUIPMENT = "equipment"
    LOCATION = "location"
    OTHER = "other"


class Marker(BaseModel):
    """One semantic marker tag."""

    model_config = ConfigDict(frozen=True)

    name: str
    source: MarkerSource = MarkerSource.MANUAL
    stage: MarkerStage | None = None
    """Set on inferred markers only."""

    confidence: float = 1.0
    category: MarkerCategory = MarkerCategory.OTHER


class MarkerSet:
    """Deduplicated markers in priority order.

    When the same name is offered twice the first marker is kept.
    """

    def __init__(self, markers: Iterable[Marker] = ()) -> None:
        by_name: dict[str, Marker] = {}
        for marker in markers:
            by_name.setdefault(marker.name, marker)
        self._markers = [by_name[name] for name in sort_markers(list(by_name))]

    def names(self) -> list[str]:
        return [m.name for m in self._markers]

    def get(self, name: str) -> Marker | None:
        return next((m for m in self._markers if m.name == name), None)

    def __contains__(self, name: object) -> bool:
        return any(m.name == name for m in self._markers)

    def __iter__(self) -> Iterator[Marker]:
        return iter(self._markers)

    def __len__(self) -> int:
        return len(self._markers)

    def __repr__(self) -> str:
        return f"MarkerSet({self.names()!r})"

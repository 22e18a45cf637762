"""Point projection — turn a parsed record into a canonical BACnet point.

Records lacking ``dis``, ``bacnetCur`` or ``kind`` are simply not points;
projection returns None for them and never reports an error.
"""

from __future__ import annotations

import math
import re
from enum import Enum

from pydantic import BaseModel

from trionorm.config import DISPLAY_TAG, KIND_TAG, REFERENCE_TAG
from trionorm.parsing.models import ParseResult, Record
from trionorm.parsing.values import NumberValue

_REFERENCE_RE = re.compile(r"^([A-Z]+)(\d+)$")


class DataType(str, Enum):
    """Canonical point data type."""

    NUMBER = "number"
    BOOLEAN = "boolean"
    STRING = "string"
    ENUMERATED = "enumerated"


_KIND_TO_DATA_TYPE: dict[str, DataType] = {
    "Number": DataType.NUMBER,
    "Bool": DataType.BOOLEAN,
    "String": DataType.STRING,
    "Enum": DataType.ENUMERATED,
}


class ProjectedPoint(BaseModel):
    """A record that qualifies as a BACnet point."""

    id: str
    """``<objectKind><objectInstance>``, e.g. 'AI39'."""

    display_name: str
    object_kind: str
    """Upper-case BACnet object code, e.g. 'AI', 'AO', 'BV'."""

    object_instance: int
    data_type: DataType = DataType.NUMBER
    description: str = ""
    unit: str | None = None
    is_writable: bool = False
    is_command: bool = False
    write_property: str | None = None
    write_priority: int | None = None
    reference: str = ""
    equipment_name: str | None = None


def _write_priority(record: Record) -> int | None:
    value = record.get("bacnetWriteLevel")
    if isinstance(value, NumberValue) and math.isfinite(value.value):
        return int(value.value)
    return None


def project_record(record: Record, equipment_name: str | None = None) -> ProjectedPoint | None:
    """Project *record* into a :class:`ProjectedPoint`.

    Returns None when a required tag is missing or the BACnet reference
    does not look like ``AI39``.
    """
    display_name = record.text(DISPLAY_TAG)
    reference = record.text(REFERENCE_TAG)
    kind = record.text(KIND_TAG)
    if display_name is None or reference is None or kind is None:
        return None

    match = _REFERENCE_RE.match(reference)
    if not match:
        return None
    object_kind, instance = match.group(1), int(match.group(2))

    return ProjectedPoint(
        id=f"{object_kind}{instance}",
        display_name=display_name,
        object_kind=object_kind,
        object_instance=instance,
        data_type=_KIND_TO_DATA_TYPE.get(kind, DataType.NUMBER),
        description=record.text("bacnetDesc") or "",
        unit=record.text("unit") or None,
        is_writable=record.has("writable"),
        is_command=record.has("cmd"),
        write_property=record.text("bacnetWrite") or None,
        write_priority=_write_priority(record),
        reference=reference,
        equipment_name=equipment_name,
    )


def project_points(result: ParseResult, equipment_name: str | None = None) -> list[ProjectedPoint]:
    """Project every section of *result*, skipping records that are not points."""
    points: list[ProjectedPoint] = []
    for section in result.sections:
        if section.record is None:
            continue
        point = project_record(section.record, equipment_name)
        if point is not None:
            points.append(point)
    return points

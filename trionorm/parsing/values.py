"""Scalar values — decode a single raw trio token into a tagged value.

Every value carries a fixed ``kind`` discriminant so that records survive a
``model_dump()`` / ``model_validate()`` round trip and consumers can dispatch
on it without guessing at Python types.
"""

from __future__ import annotations

import re
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

# Tested in order against the quote-stripped token
REFERENCE_PREFIXES: tuple[str, ...] = ("M:", "Bin:", "C:", "R:", "N:", "S:", "U:", "X:")

_QUOTES = ("\"", "'")

_NUMBER_RE = re.compile(r"^[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?$")
_NUMBER_WITH_UNIT_RE = re.compile(r"^(-?\d*\.?\d+)\s*(.+)$")


class StringValue(BaseModel):
    """Free text."""

    kind: Literal["string"] = "string"
    text: str = ""


class NumberValue(BaseModel):
    """Numeric value with an optional trailing unit (``72.5°F``)."""

    kind: Literal["number"] = "number"
    value: float = 0.0
    unit: str | None = None


class BooleanValue(BaseModel):
    """``true`` / ``false`` in any case."""

    kind: Literal["boolean"] = "boolean"
    value: bool = False


class ReferenceValue(BaseModel):
    """Reference to another entity, e.g. ``R:site``."""

    kind: Literal["ref"] = "ref"
    id: str = ""
    """Identifier with the reference prefix removed."""

    raw: str = ""
    """Original token text, prefix included."""


class MarkerValue(BaseModel):
    """Presence-only tag (a bare line in a section)."""

    kind: Literal["marker"] = "marker"


ScalarValue = Annotated[
    Union[StringValue, NumberValue, BooleanValue, ReferenceValue, MarkerValue],
    Field(discriminator="kind"),
]


def _strip_quotes(text: str) -> str:
    if len(text) >= 2 and text[0] in _QUOTES and text[0] == text[-1]:
        return text[1:-1]
    return text


def parse_scalar(text: str) -> ScalarValue:
    """Decode *text* into a :data:`ScalarValue`.

    Rules are tried in order and never raise; anything unrecognised ends
    up as a :class:`StringValue`.

    Parameters
    ----------
    text:
        A trimmed token, as found right of the first colon of a tag line.

    Returns
    -------
    ScalarValue
    """
    value = _strip_quotes(text)

    for prefix in REFERENCE_PREFIXES:
        if value.startswith(prefix):
            return ReferenceValue(id=value[len(prefix):], raw=value)

    if value and _NUMBER_RE.match(value.strip()):
        return NumberValue(value=float(value))

    lowered = value.lower()
    if lowered == "true":
        return BooleanValue(value=True)
    if lowered == "false":
        return BooleanValue(value=False)

    match = _NUMBER_WITH_UNIT_RE.match(value)
    if match:
        unit = match.group(2).replace("\"", "").strip()
        return NumberValue(value=float(match.group(1)), unit=unit or None)

    return StringValue(text=value)


def _format_number(value: float) -> str:
    if value.is_integer():
        return str(int(value))
    return repr(value)


def scalar_text(value: ScalarValue) -> str:
    """Render *value* back to its display text.

    Raises ``TypeError`` for anything that is not one of the five value
    kinds.
    """
    if isinstance(value, StringValue):
        return value.text
    if isinstance(value, NumberValue):
        number = _format_number(value.value)
        return f"{number}{value.unit}" if value.unit else number
    if isinstance(value, BooleanValue):
        return "true" if value.value else "false"
    if isinstance(value, ReferenceValue):
        return value.id
    if isinstance(value, MarkerValue):
        return ""
    raise TypeError(f"Unsupported scalar value: {value!r}")

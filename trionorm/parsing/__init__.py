"""Trio document parsing — scalar values, sections, records, and point projection."""

from trionorm.parsing.models import (
    DiagnosticSeverity,
    ParseDiagnostic,
    ParseResult,
    Record,
    Section,
)
from trionorm.parsing.parser import (
    TrioParseError,
    TrioParser,
    extract_document_metadata,
    parse_trio,
)
from trionorm.parsing.projection import (
    DataType,
    ProjectedPoint,
    project_points,
    project_record,
)
from trionorm.parsing.values import (
    BooleanValue,
    MarkerValue,
    NumberValue,
    ReferenceValue,
    ScalarValue,
    StringValue,
    parse_scalar,
    scalar_text,
)

__all__ = [
    "BooleanValue",
    "DataType",
    "DiagnosticSeverity",
    "MarkerValue",
    "NumberValue",
    "ParseDiagnostic",
    "ParseResult",
    "ProjectedPoint",
    "Record",
    "ReferenceValue",
    "ScalarValue",
    "Section",
    "StringValue",
    "TrioParseError",
    "TrioParser",
    "extract_document_metadata",
    "parse_scalar",
    "parse_trio",
    "project_points",
    "project_record",
    "scalar_text",
]

"""Parse data model — records, sections, diagnostics, and parse results."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from trionorm.parsing.values import MarkerValue, ScalarValue, scalar_text


class DiagnosticSeverity(str, Enum):
    """How serious a parse diagnostic is."""

    WARNING = "warning"
    ERROR = "error"


class ParseDiagnostic(BaseModel):
    """A structured warning or error collected while parsing."""

    model_config = ConfigDict(frozen=True)

    kind: str
    """Diagnostic code, e.g. 'PARSE_ERROR', 'EMPTY_SECTION'."""

    message: str
    line: int = 0
    """1-based line within the section, or 0 for document-level findings."""

    severity: DiagnosticSeverity = DiagnosticSeverity.WARNING


class Record(BaseModel):
    """Insertion-ordered tag -> value mapping for one section.

    Tag names are case-sensitive; a repeated tag overwrites the earlier
    value while keeping its original position.
    """

    tags: dict[str, ScalarValue] = Field(default_factory=dict)
    lines: list[str] = Field(default_factory=list)
    """Source lines the record was built from."""

    def get(self, tag: str) -> ScalarValue | None:
        return self.tags.get(tag)

    def has(self, tag: str) -> bool:
        return tag in self.tags

    def text(self, tag: str) -> str | None:
        """Display text of *tag*, or None when the tag is absent."""
        value = self.tags.get(tag)
        if value is None:
            return None
        return scalar_text(value)

    def is_marker(self, tag: str) -> bool:
        return isinstance(self.tags.get(tag), MarkerValue)

    def __len__(self) -> int:
        return len(self.tags)


class Section(BaseModel):
    """One ``---``-delimited block of a trio document."""

    index: int
    record: Record | None = None
    """None when no line in the section could be parsed into a tag."""

    raw: str = ""

    @property
    def is_empty(self) -> bool:
        return self.record is None


class ParseResult(BaseModel):
    """Outcome of parsing one document. Immutable once returned."""

    model_config = ConfigDict(frozen=True)

    document_id: str = ""
    sections: list[Section] = Field(default_factory=list)
    total_sections: int = 0
    total_points: int = 0
    """Number of sections that produced a record."""

    diagnostics: list[ParseDiagnostic] = Field(default_factory=list)
    is_valid: bool = True
    parsed_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def errors(self) -> list[ParseDiagnostic]:
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.ERROR]

    @property
    def warnings(self) -> list[ParseDiagnostic]:
        return [d for d in self.diagnostics if d.severity == DiagnosticSeverity.WARNING]

    def records(self) -> list[Record]:
        """All records, in section order."""
        return [s.record for s in self.sections if s.record is not None]

"""TrioParser — split a trio document into sections and records.

Usage::

    from trionorm.parsing import TrioParser

    result = TrioParser().parse(content, document_id="AHU_1.trio")
    for record in result.records():
        ...

Diagnostics are accumulated on the :class:`ParseResult`.  Nothing is raised
unless the parser was created with ``strict_mode=True``.
"""

from __future__ import annotations

import logging
import re
from typing import Any

from trionorm.config import COMMENT_PREFIX, SECTION_SEPARATOR, TAB_REPLACEMENT
from trionorm.parsing.models import (
    DiagnosticSeverity,
    ParseDiagnostic,
    ParseResult,
    Record,
    Section,
)
from trionorm.parsing.values import MarkerValue, parse_scalar

logger = logging.getLogger(__name__)

_SEPARATOR_RE = re.compile(rf"^[ ]*{re.escape(SECTION_SEPARATOR)}[ ]*$", re.MULTILINE)


class TrioParseError(Exception):
    """Raised in strict mode when a document or section cannot be parsed."""

    def __init__(self, message: str, diagnostic: ParseDiagnostic | None = None) -> None:
        super().__init__(message)
        self.diagnostic = diagnostic


def normalize_content(content: str) -> str:
    """Unify line endings, expand tabs, and trim the whole document."""
    return (
        content.replace("\r\n", "\n")
        .replace("\r", "\n")
        .replace("\t", TAB_REPLACEMENT)
        .strip()
    )


def split_sections(content: str) -> list[str]:
    """Return the non-empty, trimmed sections of normalized *content*."""
    chunks = (chunk.strip() for chunk in _SEPARATOR_RE.split(content))
    return [chunk for chunk in chunks if chunk]


class TrioParser:
    """Line-oriented parser for trio point-list exports.

    Parameters
    ----------
    strict_mode:
        When True, the first structural failure raises
        :class:`TrioParseError` instead of being recorded as a diagnostic.
    """

    def __init__(self, strict_mode: bool = False) -> None:
        self.strict_mode = strict_mode

    def parse(self, content: str, document_id: str = "") -> ParseResult:
        """Parse a whole document.

        Parameters
        ----------
        content:
            Raw document text.
        document_id:
            Identifier echoed into the result (usually the file name).

        Returns
        -------
        ParseResult
        """
        diagnostics: list[ParseDiagnostic] = []
        sections: list[Section] = []
        is_valid = True

        try:
            chunks = split_sections(normalize_content(content))
            if not chunks:
                raise TrioParseError(
                    "No valid sections found in trio file",
                    ParseDiagnostic(
                        kind="PARSE_ERROR",
                        message="No valid sections found in trio file",
                        severity=DiagnosticSeverity.ERROR,
                    ),
                )

            for index, chunk in enumerate(chunks):
                record = self._parse_section_safely(index, chunk, diagnostics)
                sections.append(Section(index=index, record=record, raw=chunk))
                if record is None:
                    diagnostics.append(ParseDiagnostic(
                        kind="EMPTY_SECTION",
                        message=f"Section {index} is empty",
                    ))
        except Exception as exc:
            if self.strict_mode:
                if isinstance(exc, TrioParseError):
                    raise
                raise TrioParseError(f"Failed to parse trio file: {exc}") from exc
            logger.debug("Hard parse failure in %s", document_id or "<document>", exc_info=True)
            diagnostics.append(ParseDiagnostic(
                kind="PARSE_ERROR",
                message=str(exc) if isinstance(exc, TrioParseError) else f"Failed to parse trio file: {exc}",
                severity=DiagnosticSeverity.ERROR,
            ))
            is_valid = False

        total_points = sum(1 for s in sections if s.record is not None)
        logger.debug(
            "Parsed %s: %d sections, %d points, %d diagnostics",
            document_id or "<document>", len(sections), total_points, len(diagnostics),
        )
        return ParseResult(
            document_id=document_id,
            sections=sections,
            total_sections=len(sections),
            total_points=total_points,
            diagnostics=diagnostics,
            is_valid=is_valid,
        )

    # -- Sections -------------------------------------------------------------

    def _parse_section_safely(
        self,
        index: int,
        chunk: str,
        diagnostics: list[ParseDiagnostic],
    ) -> Record | None:
        """Parse one section, isolating its failure from its siblings."""
        local: list[ParseDiagnostic] = []
        try:
            record = self._parse_section(chunk, local)
        except Exception as exc:
            diagnostic = ParseDiagnostic(
                kind="SECTION_PARSE_WARNING",
                message=f"Failed to parse section {index}: {exc}",
            )
            if self.strict_mode:
                raise TrioParseError(diagnostic.message, diagnostic) from exc
            logger.debug("Section %d failed to parse", index, exc_info=True)
            diagnostics.append(diagnostic)
            return None
        diagnostics.extend(local)
        return record

    def _parse_section(self, chunk: str, diagnostics: list[ParseDiagnostic]) -> Record | None:
        record = Record()
        pending_tag: str | None = None
        pending_lines: list[str] = []

        for number, raw_line in enumerate(chunk.split("\n"), start=1):
            line = raw_line.strip()
            if not line or line.startswith(COMMENT_PREFIX):
                continue
            record.lines.append(line)

            if ":" in line:
                if pending_tag is not None:
                    record.tags[pending_tag] = parse_scalar("\n".join(pending_lines))
                    pending_tag, pending_lines = None, []

                tag, _, value_text = line.partition(":")
                tag = tag.strip()
                value_text = value_text.strip()
                self._check_data_quality(tag, value_text, number, diagnostics)

                if value_text:
                    record.tags[tag] = parse_scalar(value_text)
                else:
                    pending_tag = tag
            elif pending_tag is not None:
                pending_lines.append(line)
            else:
                record.tags[line] = MarkerValue()

        if pending_tag is not None:
            record.tags[pending_tag] = parse_scalar("\n".join(pending_lines))

        return record if record.tags else None

    @staticmethod
    def _check_data_quality(
        tag: str,
        value_text: str,
        line: int,
        diagnostics: list[ParseDiagnostic],
    ) -> None:
        """Flag tags or values that the exporting controller marked invalid."""
        if "invalid" in tag.lower() or "INVALID" in value_text:
            diagnostics.append(ParseDiagnostic(
                kind="INVALID_REFERENCE",
                message=f"Invalid reference found: {tag}",
                line=line,
            ))


def parse_trio(content: str, document_id: str = "", strict_mode: bool = False) -> ParseResult:
    """Parse *content* with a one-off :class:`TrioParser`."""
    return TrioParser(strict_mode=strict_mode).parse(content, document_id=document_id)


def extract_document_metadata(result: ParseResult) -> dict[str, Any]:
    """Collect the distinct point kinds, units and vendors of a document."""
    point_types: list[str] = []
    units: list[str] = []
    vendors: list[str] = []

    for record in result.records():
        for tag, bucket in (("kind", point_types), ("unit", units), ("vendor", vendors)):
            text = record.text(tag)
            if text is not None and text not in bucket:
                bucket.append(text)

    return {
        "document_id": result.document_id,
        "total_points": result.total_points,
        "point_types": point_types,
        "units": units,
        "vendors": vendors,
    }

"""PointNormalizer — expand abbreviated BACnet point names.

Each display-name token is looked up in the acronym dictionary.  Matched
tokens take the entry's expansion and ``priority / 10`` as confidence;
unmatched tokens keep their text at a base confidence.  The point function
comes from the first token that carries one, the description is assembled
from the remaining expansions, and the averaged confidence is boosted by
whatever equipment context is available.

Usage::

    from trionorm.normalization import PointNormalizer, NormalizationContext

    result = PointNormalizer().normalize(point, NormalizationContext(units="°F"))
    result.point().normalized_name   # 'Room Temperature Sensor'
"""

from __future__ import annotations

import logging
import re
import time
from collections import Counter

from trionorm.config import (
    EQUIPMENT_CONTEXT_BOOST,
    MANUAL_REVIEW_THRESHOLD,
    SUGGESTION_THRESHOLD,
    UNITS_CONTEXT_BOOST,
    UNMATCHED_TOKEN_CONFIDENCE,
    VENDOR_CONTEXT_BOOST,
)
from trionorm.normalization.acronyms import AcronymDictionary
from trionorm.normalization.models import (
    ConfidenceLevel,
    ExpandedAcronym,
    NormalizationContext,
    NormalizationResult,
    NormalizedPoint,
    PointFunction,
    TokenAnalysis,
)
from trionorm.normalization.tokenizer import tokenize_point_name
from trionorm.normalization.vendors import infer_vendor_from_name
from trionorm.parsing.projection import ProjectedPoint

logger = logging.getLogger(__name__)

_FUNCTION_WORDS = frozenset(f.value for f in PointFunction if f is not PointFunction.UNKNOWN)
_NUMERIC_RE = re.compile(r"^\d+$")
_WORD_START_RE = re.compile(r"\b\w")
_WHITESPACE_RE = re.compile(r"\s+")

_APPLIED_RULES = ["token_analysis", "acronym_expansion", "context_analysis"]


def confidence_level(score: float) -> ConfidenceLevel:
    """Map a 0-1 confidence score onto its level."""
    if score >= 0.8:
        return ConfidenceLevel.HIGH
    if score >= 0.5:
        return ConfidenceLevel.MEDIUM
    if score >= 0.2:
        return ConfidenceLevel.LOW
    return ConfidenceLevel.UNKNOWN


def _title_case(text: str) -> str:
    # Upper-case word starts only; 'CO2' and 'VFD' keep their case
    return _WORD_START_RE.sub(lambda m: m.group().upper(), text)


class PointNormalizer:
    """Turns projected points into normalized points.

    Parameters
    ----------
    dictionary:
        Acronym dictionary to consult.  Defaults to the built-in table.
    """

    def __init__(self, dictionary: AcronymDictionary | None = None) -> None:
        self.dictionary = dictionary or AcronymDictionary()

    def normalize(
        self,
        point: ProjectedPoint,
        context: NormalizationContext | None = None,
    ) -> NormalizationResult:
        """Normalize one point.

        Never raises.  When analysis fails the result has ``success=False``
        and ``result.point()`` returns the original name unnormalized.
        """
        context = context or NormalizationContext()
        started = time.perf_counter()
        try:
            result = self._normalize(point, context)
        except Exception as exc:
            logger.debug("Normalization failed for %s", point.id, exc_info=True)
            result = NormalizationResult(
                success=False,
                fallback=self._fallback_point(point),
                errors=[f"Normalization failed: {exc}"],
            )
        result.processing_time_ms = (time.perf_counter() - started) * 1000
        return result

    # -- Analysis -------------------------------------------------------------

    def analyze_tokens(self, name: str) -> list[TokenAnalysis]:
        analyses: list[TokenAnalysis] = []
        for token in tokenize_point_name(name):
            entry = self.dictionary.lookup(token)
            if entry is None:
                analyses.append(TokenAnalysis(token=token, confidence=UNMATCHED_TOKEN_CONFIDENCE))
                continue
            analyses.append(TokenAnalysis(
                token=token,
                expansion=entry.expansion,
                confidence=entry.confidence,
                source="acronym",
                point_function=entry.point_function,
                acronym=entry.acronym,
            ))
        return analyses

    def _normalize(self, point: ProjectedPoint, context: NormalizationContext) -> NormalizationResult:
        tokens = self.analyze_tokens(point.display_name)

        point_function = next(
            (t.point_function for t in tokens if t.point_function is not None),
            PointFunction.SENSOR,
        )
        description = self._assemble_description(tokens, point_function)
        if not tokens:
            description = point.display_name

        score = self._score(tokens, point, context)
        level = confidence_level(score)

        method = "unmatched"
        if tokens:
            method = Counter(t.source for t in tokens).most_common(1)[0][0]

        normalized = NormalizedPoint(
            original_point_id=point.id,
            original_name=point.display_name,
            original_description=point.description,
            normalized_name=description,
            expanded_description=description,
            point_function=point_function,
            confidence_score=score,
            confidence_level=level,
            normalization_method=method,
            expanded_acronyms=[
                ExpandedAcronym(original=t.token, expanded=t.expansion, confidence=t.confidence)
                for t in tokens if t.expansion is not None
            ],
            applied_rules=list(_APPLIED_RULES),
            requires_manual_review=score < MANUAL_REVIEW_THRESHOLD,
            object_kind=point.object_kind,
            unit=point.unit,
            is_command=point.is_command,
            is_writable=point.is_writable,
        )
        logger.debug(
            "Normalized %r -> %r (%.2f, %s)",
            point.display_name, description, score, level.value,
        )
        return NormalizationResult(
            success=True,
            normalized_point=normalized,
            tokens=tokens,
            suggestions=self._suggestions(tokens, score),
        )

    @staticmethod
    def _assemble_description(tokens: list[TokenAnalysis], point_function: PointFunction) -> str:
        words = [
            t.text for t in tokens
            if t.text.lower() not in _FUNCTION_WORDS and not _NUMERIC_RE.match(t.text)
        ]
        words.append(point_function.label)
        return _WHITESPACE_RE.sub(" ", _title_case(" ".join(words))).strip()

    @staticmethod
    def _score(
        tokens: list[TokenAnalysis],
        point: ProjectedPoint,
        context: NormalizationContext,
    ) -> float:
        if tokens:
            score = sum(t.confidence for t in tokens) / len(tokens)
        else:
            score = UNMATCHED_TOKEN_CONFIDENCE

        if context.equipment_type:
            score += EQUIPMENT_CONTEXT_BOOST
        if context.units or point.unit:
            score += UNITS_CONTEXT_BOOST
        if context.vendor_name or infer_vendor_from_name(point.display_name):
            score += VENDOR_CONTEXT_BOOST
        return min(1.0, round(score, 4))

    @staticmethod
    def _suggestions(tokens: list[TokenAnalysis], score: float) -> list[str]:
        if score >= SUGGESTION_THRESHOLD:
            return []
        suggestions = ["Review the normalized name for accuracy"]
        unmatched = [t.token for t in tokens if t.source == "unmatched" and not t.token.isdigit()]
        if unmatched:
            suggestions.append(f"Consider adding acronyms for: {', '.join(unmatched)}")
        if score < MANUAL_REVIEW_THRESHOLD:
            suggestions.append("Manual review recommended due to low confidence")
        return suggestions

    @staticmethod
    def _fallback_point(point: ProjectedPoint) -> NormalizedPoint:
        return NormalizedPoint(
            original_point_id=point.id,
            original_name=point.display_name,
            original_description=point.description,
            normalized_name=point.display_name,
            expanded_description=point.description or point.display_name,
            point_function=PointFunction.UNKNOWN,
            confidence_score=UNMATCHED_TOKEN_CONFIDENCE,
            confidence_level=confidence_level(UNMATCHED_TOKEN_CONFIDENCE),
            normalization_method="fallback",
            requires_manual_review=True,
            object_kind=point.object_kind,
            unit=point.unit,
            is_command=point.is_command,
            is_writable=point.is_writable,
        )

"""Tests for point-name normalization.

Covers: tokenization, the acronym dictionary, vendor inference, confidence
scoring and levels, description assembly, suggestions, and the fallback
path when analysis fails.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trionorm.normalization import (
    AcronymDictionary,
    AcronymEntry,
    ConfidenceLevel,
    NormalizationContext,
    NormalizationResult,
    PointFunction,
    PointNormalizer,
    confidence_level,
    infer_vendor_from_name,
    tokenize_point_name,
)
from trionorm.parsing import ProjectedPoint


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _point(name: str, *, unit: str | None = None, kind: str = "AI", instance: int = 1) -> ProjectedPoint:
    return ProjectedPoint(
        id=f"{kind}{instance}",
        display_name=name,
        object_kind=kind,
        object_instance=instance,
        description=f"{name} description",
        unit=unit,
    )


class _BrokenDictionary(AcronymDictionary):
    def lookup(self, token: str):
        raise RuntimeError("dictionary offline")


# ---------------------------------------------------------------------------
# Tokenizer
# ---------------------------------------------------------------------------

class TestTokenizer:

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("ROOM TEMP 4", ["ROOM", "TEMP", "4"]),
            ("SAT_SENSOR", ["SAT", "SENSOR"]),
            ("zoneTemp_SP", ["zone", "Temp", "SP"]),
            ("AHU-1.SF.CMD", ["AHU", "1", "SF", "CMD"]),
            ("  DAMPER   POS  ", ["DAMPER", "POS"]),
            ("SATtemp", ["SATtemp"]),
            ("", []),
            ("__--..", []),
        ],
    )
    def test_tokenize(self, name: str, expected: list[str]) -> None:
        assert tokenize_point_name(name) == expected


# ---------------------------------------------------------------------------
# Acronym dictionary
# ---------------------------------------------------------------------------

class TestAcronymDictionary:

    def test_default_table_loads(self) -> None:
        dictionary = AcronymDictionary()
        assert len(dictionary) > 100

    def test_lookup_is_case_insensitive(self) -> None:
        entry = AcronymDictionary().lookup("sat")
        assert entry is not None
        assert entry.expansion == "Supply Air Temperature"
        assert entry.confidence == 1.0
        assert entry.point_function is PointFunction.SENSOR

    def test_contains(self) -> None:
        dictionary = AcronymDictionary()
        assert "Temp" in dictionary
        assert "SENSOR" not in dictionary
        assert 42 not in dictionary

    def test_duplicate_acronym_rejected(self) -> None:
        entries = [
            AcronymEntry(acronym="SAT", expansion="Supply Air Temperature", priority=10),
            AcronymEntry(acronym="sat", expansion="Saturday", priority=1),
        ]
        with pytest.raises(ValueError, match="Duplicate acronym"):
            AcronymDictionary(entries)

    def test_priority_bounds(self) -> None:
        with pytest.raises(ValidationError):
            AcronymEntry(acronym="X", expansion="Ex", priority=11)
        with pytest.raises(ValidationError):
            AcronymEntry(acronym="X", expansion="Ex", priority=0)

    def test_custom_dictionary(self) -> None:
        dictionary = AcronymDictionary([
            AcronymEntry(acronym="DAT", expansion="Discharge Air Temperature", priority=9),
        ])
        result = PointNormalizer(dictionary).normalize(_point("DAT"))
        assert result.point().normalized_name == "Discharge Air Temperature Sensor"


# ---------------------------------------------------------------------------
# Vendor inference
# ---------------------------------------------------------------------------

class TestVendorInference:

    @pytest.mark.parametrize(
        ("name", "vendor"),
        [
            ("ZNT-1", "Johnson Controls"),
            ("OATEMP", "Johnson Controls"),
            ("SAT_SENSOR", "Siemens"),
            ("ZoneTemp", "Trane"),
            ("RmTemp", "Honeywell"),
            ("ROOM TEMP 4", None),
            ("", None),
        ],
    )
    def test_infer(self, name: str, vendor: str | None) -> None:
        assert infer_vendor_from_name(name) == vendor


# ---------------------------------------------------------------------------
# Confidence levels
# ---------------------------------------------------------------------------

class TestConfidenceLevel:

    @pytest.mark.parametrize(
        ("score", "level"),
        [
            (1.0, ConfidenceLevel.HIGH),
            (0.8, ConfidenceLevel.HIGH),
            (0.79, ConfidenceLevel.MEDIUM),
            (0.5, ConfidenceLevel.MEDIUM),
            (0.2, ConfidenceLevel.LOW),
            (0.19, ConfidenceLevel.UNKNOWN),
            (0.0, ConfidenceLevel.UNKNOWN),
        ],
    )
    def test_thresholds(self, score: float, level: ConfidenceLevel) -> None:
        assert confidence_level(score) is level


# ---------------------------------------------------------------------------
# PointNormalizer
# ---------------------------------------------------------------------------

class TestPointNormalizer:

    def test_room_temperature(self) -> None:
        result = PointNormalizer().normalize(_point("ROOM TEMP 4", unit="°F"))
        assert result.success is True
        point = result.point()
        assert point.normalized_name == "Room Temperature Sensor"
        assert point.expanded_description == "Room Temperature Sensor"
        assert point.point_function is PointFunction.SENSOR
        assert point.confidence_score == pytest.approx(0.6667)
        assert point.confidence_level is ConfidenceLevel.MEDIUM
        assert point.normalization_method == "acronym"
        assert point.requires_manual_review is True
        assert point.original_name == "ROOM TEMP 4"
        assert point.original_point_id == "AI1"
        assert point.unit == "°F"

    def test_expanded_acronyms_recorded(self) -> None:
        point = PointNormalizer().normalize(_point("ROOM TEMP 4")).point()
        assert [(a.original, a.expanded) for a in point.expanded_acronyms] == [
            ("ROOM", "Room"), ("TEMP", "Temperature"),
        ]
        assert point.applied_rules == ["token_analysis", "acronym_expansion", "context_analysis"]

    def test_damper_position(self) -> None:
        point = PointNormalizer().normalize(_point("DAMPER POS 5", unit="%", kind="AO")).point()
        assert point.normalized_name == "Damper Position Sensor"
        assert point.object_kind == "AO"

    def test_function_word_not_repeated(self) -> None:
        result = PointNormalizer().normalize(_point("SAT_SENSOR"))
        point = result.point()
        assert point.normalized_name == "Supply Air Temperature Sensor"
        # 'SENSOR' is not an acronym; the vendor hint comes from 't_'
        assert point.confidence_score == pytest.approx(0.6)
        assert "Consider adding acronyms for: SENSOR" in result.suggestions

    def test_status_function(self) -> None:
        result = PointNormalizer().normalize(_point("FAN_STS", kind="BI"))
        point = result.point()
        assert point.normalized_name == "Fan Status"
        assert point.point_function is PointFunction.STATUS
        assert point.confidence_score == pytest.approx(0.85)
        assert point.confidence_level is ConfidenceLevel.HIGH
        assert point.requires_manual_review is False
        assert result.suggestions == []

    def test_setpoint_from_camel_case(self) -> None:
        point = PointNormalizer().normalize(_point("zoneTemp_SP", kind="AV")).point()
        assert point.normalized_name == "Zone Temperature Setpoint"
        assert point.point_function is PointFunction.SETPOINT

    def test_context_boosts(self) -> None:
        context = NormalizationContext(equipment_type="VAV", vendor_name="Distech", units="°F")
        point = PointNormalizer().normalize(_point("ROOM TEMP 4"), context).point()
        assert point.confidence_score == pytest.approx(0.8167)
        assert point.confidence_level is ConfidenceLevel.HIGH

    def test_score_capped_at_one(self) -> None:
        context = NormalizationContext(equipment_type="AHU", units="°F")
        point = PointNormalizer().normalize(_point("SAT"), context).point()
        assert point.confidence_score == 1.0

    def test_unmatched_tokens(self) -> None:
        result = PointNormalizer().normalize(_point("QWERTY ZXCV"))
        point = result.point()
        assert point.normalization_method == "unmatched"
        assert point.normalized_name == "QWERTY ZXCV Sensor"
        assert point.confidence_level is ConfidenceLevel.UNKNOWN
        assert result.suggestions == [
            "Review the normalized name for accuracy",
            "Consider adding acronyms for: QWERTY, ZXCV",
            "Manual review recommended due to low confidence",
        ]

    def test_digit_tokens_not_suggested(self) -> None:
        result = PointNormalizer().normalize(_point("ROOM TEMP 4"))
        assert not any(s.startswith("Consider adding") for s in result.suggestions)

    def test_no_tokens_keeps_display_name(self) -> None:
        result = PointNormalizer().normalize(_point("--"))
        point = result.point()
        assert point.normalized_name == "--"
        assert point.confidence_score == pytest.approx(0.1)
        assert result.tokens == []

    def test_analyze_tokens(self) -> None:
        analyses = PointNormalizer().analyze_tokens("OCC CMD")
        assert [a.source for a in analyses] == ["acronym", "acronym"]
        assert analyses[0].point_function is PointFunction.STATUS
        assert analyses[1].confidence == 0.9

    def test_processing_time_recorded(self) -> None:
        result = PointNormalizer().normalize(_point("ROOM TEMP 4"))
        assert result.processing_time_ms >= 0.0


class TestNormalizationFailure:

    def test_failure_returns_fallback(self) -> None:
        result = PointNormalizer(_BrokenDictionary()).normalize(_point("ROOM TEMP 4", unit="°F"))
        assert result.success is False
        assert result.normalized_point is None
        assert result.errors == ["Normalization failed: dictionary offline"]

        fallback = result.point()
        assert fallback.normalized_name == "ROOM TEMP 4"
        assert fallback.point_function is PointFunction.UNKNOWN
        assert fallback.normalization_method == "fallback"
        assert fallback.requires_manual_review is True
        assert fallback.confidence_score == pytest.approx(0.1)
        assert fallback.unit == "°F"

    def test_point_without_any_candidate_raises(self) -> None:
        with pytest.raises(ValueError):
            NormalizationResult(success=False).point()

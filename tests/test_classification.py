"""Tests for equipment classification.

Covers: the three classifier tiers (vendor/model, prefix dictionary, name
patterns), alternatives, extension stripping, the shared prefix cache,
metadata lookups, and rule-table validation.
"""

from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor

import pytest

from trionorm.classification import (
    ClassificationCache,
    EquipmentClassifier,
    EquipmentMetadata,
    NullMetadataLookup,
    StaticMetadataLookup,
    classify_equipment,
    get_display_name,
    strip_extension,
)
from trionorm.classification.patterns import validate_tables


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _lookup_with(name: str, vendor: str, model: str) -> StaticMetadataLookup:
    lookup = StaticMetadataLookup()
    lookup.register(EquipmentMetadata(name=name, vendor=vendor, model=model))
    return lookup


# ---------------------------------------------------------------------------
# Prefix tier
# ---------------------------------------------------------------------------

class TestPrefixTier:
    """Names with a known leading code."""

    def test_vvr_file_name(self) -> None:
        result = EquipmentClassifier().classify("VVR_2.1.trio")
        assert result.equipment_type == "VAV"
        assert result.equipment_name == "VVR_2.1"
        assert result.confidence == 0.9
        assert result.matched_pattern == "prefix:VVR"
        assert result.tier == "prefix"
        assert result.alternatives == []

    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("AHU-1", "AHU"),
            ("RTU_3", "RTU"),
            ("CH-2", "CHILLER"),
            ("CHW_1", "CHILLER"),
            ("HHW_Loop", "BOILER"),
            ("EF-12", "EXHAUST_FAN"),
            ("ECB_300", "CONTROLLER"),
            ("VV_1_R2", "VAV"),
        ],
    )
    def test_known_prefixes(self, name: str, expected: str) -> None:
        assert EquipmentClassifier().classify(name).equipment_type == expected

    def test_prefix_is_case_insensitive(self) -> None:
        result = EquipmentClassifier().classify("vvr_2.1")
        assert result.equipment_type == "VAV"
        assert result.matched_pattern == "prefix:VVR"

    def test_startswith_scan_without_separator(self) -> None:
        result = EquipmentClassifier().classify("WSHP1")
        assert result.equipment_type == "WSHP"
        assert result.matched_pattern == "prefix:WSHP"

    def test_longest_key_wins(self) -> None:
        # CHLR and CH both prefix the name; the longer key is tried first
        result = EquipmentClassifier().classify("CHLR2")
        assert result.matched_pattern == "prefix:CHLR"

    def test_extension_stripping(self) -> None:
        assert strip_extension("AHU_1.trio") == "AHU_1"
        assert strip_extension("AHU_1.CSV") == "AHU_1"
        assert strip_extension("AHU_1.json") == "AHU_1"
        assert strip_extension("AHU_1.xml") == "AHU_1.xml"


# ---------------------------------------------------------------------------
# Pattern tier
# ---------------------------------------------------------------------------

class TestPatternTier:

    def test_rooftop_with_alternative(self) -> None:
        result = EquipmentClassifier().classify("Rooftop Unit 3")
        assert result.equipment_type == "RTU"
        assert result.confidence == 0.85
        assert result.tier == "pattern"
        assert [(a.type, a.confidence) for a in result.alternatives] == [("UNIT", 0.3)]

    def test_boiler_outranks_controller(self) -> None:
        result = EquipmentClassifier().classify("Main Boiler System Controller")
        assert result.equipment_type == "BOILER"
        assert result.confidence == 0.95
        assert [a.type for a in result.alternatives] == ["CONTROLLER", "SYSTEM"]

    def test_alternatives_capped_at_three(self) -> None:
        result = EquipmentClassifier().classify("Rooftop Air Handling Unit Controller System")
        assert result.equipment_type == "AHU"
        assert result.confidence == 0.85
        assert [a.type for a in result.alternatives] == ["RTU", "CONTROLLER", "UNIT"]

    def test_alternatives_sorted_by_confidence(self) -> None:
        result = EquipmentClassifier().classify("Rooftop Air Handling Unit Controller System")
        confidences = [a.confidence for a in result.alternatives]
        assert confidences == sorted(confidences, reverse=True)

    def test_pattern_is_case_insensitive(self) -> None:
        assert EquipmentClassifier().classify("EXHAUST FAN 2").equipment_type == "EXHAUST_FAN"

    def test_display_name(self) -> None:
        result = EquipmentClassifier().classify("Rooftop Unit 3")
        assert result.display_name == "Rooftop Unit"


class TestUnknown:

    def test_no_match(self) -> None:
        result = classify_equipment("XYZ-123")
        assert result.equipment_type == "Unknown"
        assert result.confidence == 0.0
        assert result.tier == "none"
        assert result.matched_pattern is None
        assert result.is_unknown

    def test_empty_name(self) -> None:
        result = classify_equipment("")
        assert result.is_unknown
        assert result.equipment_name == ""

    def test_display_names(self) -> None:
        assert get_display_name("VAV") == "Variable Air Volume Box"
        assert get_display_name("Unknown") == "Unknown Equipment"
        assert get_display_name("NOT_A_TYPE") == "NOT_A_TYPE"


# ---------------------------------------------------------------------------
# Vendor/model tier
# ---------------------------------------------------------------------------

class TestVendorModelTier:

    def test_vendor_model_match(self) -> None:
        lookup = _lookup_with("Main Controller", "Distech Controls, Inc.", "ECB_300 v2")
        result = EquipmentClassifier(metadata_lookup=lookup).classify("Main Controller")
        assert result.equipment_type == "CONTROLLER"
        assert result.confidence == 0.95
        assert result.tier == "vendor_model"
        assert result.matched_pattern == "Vendor: Distech Controls, Inc., Model: ECB_300 v2"

    def test_vendor_model_beats_prefix(self) -> None:
        lookup = _lookup_with("AHU_1", "ABB", "ACH580-01")
        result = EquipmentClassifier(metadata_lookup=lookup).classify("AHU_1.trio")
        assert result.equipment_type == "VFD"
        assert result.tier == "vendor_model"

    def test_unknown_vendor_falls_through(self) -> None:
        lookup = _lookup_with("Main Controller", "Acme", "X1")
        result = EquipmentClassifier(metadata_lookup=lookup).classify("Main Controller")
        assert result.equipment_type == "CONTROLLER"
        assert result.tier == "pattern"
        assert result.confidence == 0.8

    def test_vendor_without_model_falls_through(self) -> None:
        lookup = StaticMetadataLookup()
        lookup.register(EquipmentMetadata(name="VVR_1.1", vendor="Distech Controls, Inc."))
        result = EquipmentClassifier(metadata_lookup=lookup).classify("VVR_1.1")
        assert result.tier == "prefix"


class TestMetadataLookup:

    def test_null_lookup(self) -> None:
        metadata = NullMetadataLookup().lookup("AHU_1")
        assert metadata.name == "AHU_1"
        assert metadata.has_vendor_model is False

    def test_static_lookup_unknown_name(self) -> None:
        metadata = StaticMetadataLookup().lookup("missing")
        assert metadata == EquipmentMetadata(name="missing")

    def test_from_records(self) -> None:
        lookup = StaticMetadataLookup.from_records([
            {"name": "AHU_1", "vendor": "ABB", "model": "ACH580"},
            {"equipment_name": "VVR_2.1", "vendor": "Distech Controls, Inc."},
            {"vendor": "orphan"},
        ])
        assert len(lookup) == 2
        assert lookup.lookup("AHU_1").has_vendor_model
        assert lookup.lookup("VVR_2.1").model is None


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------

class TestClassificationCache:

    def test_prefix_hits_are_cached(self) -> None:
        cache = ClassificationCache()
        classifier = EquipmentClassifier(cache=cache)
        first = classifier.classify("VVR_2.1")
        second = classifier.classify("VVR_2.1.trio")
        assert first == second
        assert len(cache) == 1
        assert "VVR_2.1" in cache

    def test_pattern_hits_are_not_cached(self) -> None:
        cache = ClassificationCache()
        EquipmentClassifier(cache=cache).classify("Rooftop Unit 3")
        EquipmentClassifier(cache=cache).classify("XYZ-123")
        assert len(cache) == 0

    def test_shared_between_classifiers(self) -> None:
        cache = ClassificationCache()
        EquipmentClassifier(cache=cache).classify("AHU-1")
        assert cache.get("AHU-1") == ("AHU", "AHU")

    def test_put_keeps_first_value(self) -> None:
        cache = ClassificationCache()
        assert cache.put("x", ("A", "AHU")) == ("A", "AHU")
        assert cache.put("x", ("B", "BOILER")) == ("A", "AHU")

    def test_concurrent_classification(self) -> None:
        cache = ClassificationCache()
        classifier = EquipmentClassifier(cache=cache)
        names = ["VVR_2.1", "AHU-1", "CH-2"] * 50
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(classifier.classify, names))

        assert len(cache) == 3
        assert cache.get("CH-2") == ("CH", "CHILLER")
        for name in set(names):
            hits = {(r.equipment_type, r.matched_pattern) for r, n in zip(results, names) if n == name}
            assert len(hits) == 1
        assert {r.tier for r in results} == {"prefix"}

    def test_clear(self) -> None:
        cache = ClassificationCache()
        cache.put("x", ("A", "AHU"))
        cache.clear()
        assert len(cache) == 0
        assert cache.get("x") is None


# ---------------------------------------------------------------------------
# Table validation
# ---------------------------------------------------------------------------

class TestTableValidation:

    def test_default_tables_are_valid(self) -> None:
        validate_tables()

    def test_bad_confidence(self) -> None:
        with pytest.raises(ValueError, match="outside"):
            validate_tables(patterns=[("boiler", "BOILER", 1.5)])

    def test_duplicate_prefix_any_case(self) -> None:
        with pytest.raises(ValueError, match="Duplicate prefix"):
            validate_tables(prefixes={"ahu": "AHU", "AHU": "AHU"})

    def test_duplicate_vendor_model(self) -> None:
        with pytest.raises(ValueError, match="Duplicate model"):
            validate_tables(vendor_rules={"ABB": [("ACH580", "VFD"), ("ACH580", "VFD")]})

    def test_invalid_regex(self) -> None:
        with pytest.raises(ValueError, match="Invalid name pattern"):
            validate_tables(patterns=[("(", "X", 0.5)])

    def test_classifier_rejects_bad_table(self) -> None:
        with pytest.raises(ValueError):
            EquipmentClassifier(patterns=[("(", "X", 0.5)])

    def test_custom_prefix_table(self) -> None:
        classifier = EquipmentClassifier(prefixes={"XYZ": "CUSTOM"})
        result = classifier.classify("XYZ-123")
        assert result.equipment_type == "CUSTOM"
        assert result.matched_pattern == "prefix:XYZ"

"""Tests for document and batch processing.

Covers: DocumentProcessor stage wiring, warnings and errors, strict mode,
processing options, metadata hand-off, the equipment store, BatchProcessor
ordering and failure isolation, and batch summaries.
"""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from trionorm.classification import ClassificationCache, EquipmentMetadata, StaticMetadataLookup
from trionorm.normalization import AcronymDictionary, PointNormalizer
from trionorm.pipeline import (
    BatchProcessor,
    BatchSummary,
    DocumentProcessor,
    DocumentResult,
    InMemoryEquipmentStore,
    ProcessingOptions,
)


SAMPLE_TRIO = """dis:ROOM TEMP 4
bacnetCur:AI39
bacnetDesc:Room temperature
kind:Number
point
unit:°F
---
dis:DAMPER POS 5
bacnetCur:AO0
bacnetDesc:Supply air VAV position
bacnetWrite:AO0
bacnetWriteLevel:16
cmd
kind:Number
point
unit:"%"
writable
---
dis:AIR FLOW
bacnetCur:AV220
bacnetDesc:Supply air VAV relative air volume flow
kind:Number
point
unit:"%"
"""

NO_POINTS_TRIO = """dis:MISSING BACNET
kind:Number
point"""


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

class _BrokenDictionary(AcronymDictionary):
    def lookup(self, token: str):
        raise RuntimeError("dictionary offline")


class _ExplodingProcessor(DocumentProcessor):
    """Raises for any document whose name starts with 'boom'."""

    def process(self, name: str, content: str) -> DocumentResult:
        if name.startswith("boom"):
            raise RuntimeError(f"cannot process {name}")
        return super().process(name, content)


def _documents(count: int) -> list[tuple[str, str]]:
    return [(f"AHU_{i}.trio", SAMPLE_TRIO) for i in range(count)]


# ---------------------------------------------------------------------------
# DocumentProcessor
# ---------------------------------------------------------------------------

class TestDocumentProcessor:

    def test_process_sample(self) -> None:
        result = DocumentProcessor().process("VVR_2.1.trio", SAMPLE_TRIO)
        assert result.success is True
        assert result.errors == []
        assert result.equipment_type == "VAV"
        assert result.total_sections == 3
        assert result.point_count == 3
        assert result.processing_time_ms >= 0.0

    def test_equipment_record(self) -> None:
        equipment = DocumentProcessor().process("VVR_2.1.trio", SAMPLE_TRIO).equipment
        assert equipment is not None
        assert equipment.id == "VVR_2.1.trio"
        assert equipment.name == "VVR_2.1"
        assert equipment.type == "VAV"
        assert equipment.display_type == "Variable Air Volume Box"
        assert equipment.vendor == "Unknown"
        assert equipment.description == "VAV parsed from VVR_2.1.trio"
        assert equipment.point_count == 3

    def test_points_flow_through_every_stage(self) -> None:
        first = DocumentProcessor().process("VVR_2.1.trio", SAMPLE_TRIO).points[0]
        assert first.point.normalized_name == "Room Temperature Sensor"
        assert first.markers == ["point", "sensor", "temp", "zone"]
        assert first.point.haystack_tags == first.markers
        assert first.compliance_score == 100
        assert first.compliance_level == "full"
        assert first.compliant is True
        assert first.normalized is True
        # equipment type and unit both raise the score
        assert first.point.confidence_score == pytest.approx(0.7667)

    def test_compliance_summary_attached(self) -> None:
        result = DocumentProcessor().process("VVR_2.1.trio", SAMPLE_TRIO)
        assert result.compliance is not None
        assert result.compliance.total_points == 3

    def test_low_confidence_classification_warns(self) -> None:
        result = DocumentProcessor().process("XYZ-123.trio", SAMPLE_TRIO)
        assert result.success is True
        assert result.equipment_type == "Unknown"
        assert "Low confidence equipment classification" in result.warnings
        assert result.equipment.description == "Unknown parsed from XYZ-123.trio"

    def test_unknown_type_gives_no_equipment_boost(self) -> None:
        known = DocumentProcessor().process("VVR_2.1.trio", SAMPLE_TRIO).points[0]
        unknown = DocumentProcessor().process("XYZ-123.trio", SAMPLE_TRIO).points[0]
        assert known.point.confidence_score - unknown.point.confidence_score == pytest.approx(0.1)

    def test_empty_content_fails(self) -> None:
        result = DocumentProcessor().process("AHU_1.trio", "")
        assert result.success is False
        assert result.errors == ["No valid sections found in trio file"]

    def test_strict_mode_records_error(self) -> None:
        processor = DocumentProcessor(ProcessingOptions(strict_mode=True))
        result = processor.process("AHU_1.trio", "")
        assert result.success is False
        assert result.errors == ["No valid sections found in trio file"]
        assert result.points == []

    def test_no_points_warns(self) -> None:
        result = DocumentProcessor().process("AHU_1.trio", NO_POINTS_TRIO)
        assert result.success is True
        assert result.point_count == 0
        assert "File contains no valid points" in result.warnings
        assert result.compliance.total_points == 0

    def test_no_points_warning_can_be_disabled(self) -> None:
        processor = DocumentProcessor(ProcessingOptions(skip_empty_files=False))
        result = processor.process("AHU_1.trio", NO_POINTS_TRIO)
        assert "File contains no valid points" not in result.warnings

    def test_overflowing_write_level_keeps_document(self) -> None:
        content = SAMPLE_TRIO.replace("bacnetWriteLevel:16", "bacnetWriteLevel:1e999")
        result = DocumentProcessor().process("VVR_2.1.trio", content)
        assert result.success is True
        assert result.point_count == 3
        assert result.points[1].point.original_point_id == "AO0"

    def test_point_limit_warns_without_truncating(self) -> None:
        processor = DocumentProcessor(ProcessingOptions(max_points_per_equipment=2))
        result = processor.process("AHU_1.trio", SAMPLE_TRIO)
        assert "Point count (3) exceeds maximum (2)" in result.warnings
        assert result.point_count == 3

    def test_normalization_failure_keeps_point(self) -> None:
        processor = DocumentProcessor(normalizer=PointNormalizer(_BrokenDictionary()))
        result = processor.process("AHU_1.trio", SAMPLE_TRIO)
        assert result.success is True
        assert result.point_count == 3
        assert result.points[0].normalized is False
        assert result.points[0].point.normalized_name == "ROOM TEMP 4"
        assert (
            "Normalization failed for ROOM TEMP 4: Normalization failed: dictionary offline"
            in result.warnings
        )

    def test_metadata_supplies_vendor_and_model(self) -> None:
        lookup = StaticMetadataLookup()
        lookup.register(EquipmentMetadata(
            name="VVR_2.1",
            vendor="Distech Controls, Inc.",
            model="ECB_300",
            description="Level 2 VAV box",
        ))
        result = DocumentProcessor(metadata_lookup=lookup).process("VVR_2.1.trio", SAMPLE_TRIO)
        assert result.equipment_type == "CONTROLLER"
        assert result.classification.tier == "vendor_model"
        assert result.equipment.vendor == "Distech Controls, Inc."
        assert result.equipment.model == "ECB_300"
        assert result.equipment.description == "Level 2 VAV box"

    def test_shared_cache(self) -> None:
        cache = ClassificationCache()
        DocumentProcessor(cache=cache).process("VVR_2.1.trio", SAMPLE_TRIO)
        assert "VVR_2.1" in cache


class TestEquipmentStore:

    def test_successful_results_stored(self) -> None:
        store = InMemoryEquipmentStore()
        processor = DocumentProcessor(store=store)
        processor.process("VVR_2.1.trio", SAMPLE_TRIO)
        processor.process("broken.trio", "")
        assert len(store) == 1
        assert store.get("VVR_2.1.trio").point_count == 3
        assert store.get("broken.trio") is None

    def test_resave_replaces(self) -> None:
        store = InMemoryEquipmentStore()
        processor = DocumentProcessor(store=store)
        processor.process("VVR_2.1.trio", SAMPLE_TRIO)
        processor.process("VVR_2.1.trio", SAMPLE_TRIO)
        assert len(store.all()) == 1
        store.clear()
        assert len(store) == 0


class TestProcessingOptions:

    def test_defaults(self) -> None:
        options = ProcessingOptions()
        assert options.strict_mode is False
        assert options.max_points_per_equipment == 1000
        assert options.skip_empty_files is True
        assert options.concurrency == 5

    def test_concurrency_must_be_positive(self) -> None:
        with pytest.raises(ValidationError):
            ProcessingOptions(concurrency=0)


# ---------------------------------------------------------------------------
# BatchProcessor
# ---------------------------------------------------------------------------

class TestBatchProcessor:

    def test_results_keep_input_order(self) -> None:
        processor = DocumentProcessor(ProcessingOptions(concurrency=2))
        documents = _documents(7)
        batch = BatchProcessor(processor).process(documents)
        assert [r.name for r in batch.results] == [name for name, _ in documents]

    def test_summary(self) -> None:
        documents = _documents(3) + [("VVR_2.1.trio", SAMPLE_TRIO), ("empty.trio", "")]
        batch = BatchProcessor().process(documents)
        summary = batch.summary
        assert summary.total_files == 5
        assert summary.successful_files == 4
        assert summary.failed_files == 1
        assert summary.equipment_type_distribution == {"AHU": 3, "VAV": 1}
        assert summary.total_points == 12
        assert summary.average_points_per_equipment == 3.0
        assert summary.common_errors == {"No valid sections found in trio file": 1}

    def test_failure_isolation(self) -> None:
        processor = _ExplodingProcessor(ProcessingOptions(concurrency=3))
        documents = [("AHU_1.trio", SAMPLE_TRIO), ("boom.trio", SAMPLE_TRIO), ("AHU_2.trio", SAMPLE_TRIO)]
        batch = BatchProcessor(processor).process(documents)

        assert [r.success for r in batch.results] == [True, False, True]
        failed = batch.results[1]
        assert failed.name == "boom.trio"
        assert failed.errors == ["Processing failed: cannot process boom.trio"]
        assert batch.summary.failed_files == 1

    def test_concurrency_from_options(self) -> None:
        processor = DocumentProcessor(ProcessingOptions(concurrency=4))
        assert BatchProcessor(processor).concurrency == 4

    def test_empty_batch(self) -> None:
        batch = BatchProcessor().process([])
        assert batch.results == []
        assert batch.summary == BatchSummary()

    def test_strict_batch(self) -> None:
        processor = DocumentProcessor(ProcessingOptions(strict_mode=True, concurrency=1))
        batch = BatchProcessor(processor).process([("a.trio", ""), ("AHU_1.trio", SAMPLE_TRIO)])
        assert [r.success for r in batch.results] == [False, True]


class TestBatchSummary:

    def test_common_errors_most_frequent_first(self) -> None:
        results = [
            DocumentResult(name="a", errors=["x"]),
            DocumentResult(name="b", errors=["y"]),
            DocumentResult(name="c", errors=["y"]),
        ]
        summary = BatchSummary.from_results(results)
        assert list(summary.common_errors) == ["y", "x"]
        assert summary.average_points_per_equipment == 0.0
        assert summary.equipment_type_distribution == {}

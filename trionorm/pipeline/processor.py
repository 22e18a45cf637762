"""DocumentProcessor — run one trio document through every stage.

classify the name -> parse -> project points -> normalize -> tag ->
validate compliance -> hand off to the equipment store.

Usage::

    from trionorm.pipeline import DocumentProcessor

    result = DocumentProcessor().process("VVR_2.1.trio", content)
    result.success, result.equipment_type, result.point_count
"""

from __future__ import annotations

import logging
import time

from trionorm.classification.cache import ClassificationCache
from trionorm.classification.classifier import EquipmentClassifier, get_display_name
from trionorm.classification.metadata import MetadataLookup, NullMetadataLookup
from trionorm.compliance.report import ComplianceReport
from trionorm.compliance.validator import ComplianceValidator
from trionorm.config import LOW_CLASSIFICATION_CONFIDENCE, UNKNOWN_EQUIPMENT
from trionorm.normalization.models import NormalizationContext
from trionorm.normalization.normalizer import PointNormalizer
from trionorm.parsing.parser import TrioParseError, TrioParser
from trionorm.parsing.projection import ProjectedPoint, project_points
from trionorm.pipeline.models import DocumentResult, EquipmentRecord, ProcessedPoint
from trionorm.pipeline.options import ProcessingOptions
from trionorm.pipeline.store import EquipmentStore
from trionorm.tagging.tagger import SemanticTagger

logger = logging.getLogger(__name__)


class DocumentProcessor:
    """Processes single documents with shared, reusable stage objects.

    Parameters
    ----------
    options:
        Processing options.  Defaults to :class:`ProcessingOptions()`.
    metadata_lookup:
        Vendor/model source, shared by classification and normalization.
    cache:
        Classifier memo; pass one instance to share it across processors.
    store:
        Receives every successful :class:`DocumentResult`.
    """

    def __init__(
        self,
        options: ProcessingOptions | None = None,
        *,
        metadata_lookup: MetadataLookup | None = None,
        cache: ClassificationCache | None = None,
        store: EquipmentStore | None = None,
        normalizer: PointNormalizer | None = None,
    ) -> None:
        self.options = options or ProcessingOptions()
        self.metadata_lookup = metadata_lookup or NullMetadataLookup()
        self.classifier = EquipmentClassifier(metadata_lookup=self.metadata_lookup, cache=cache)
        self.parser = TrioParser(strict_mode=self.options.strict_mode)
        self.normalizer = normalizer or PointNormalizer()
        self.tagger = SemanticTagger()
        self.validator = ComplianceValidator()
        self.store = store

    def process(self, name: str, content: str) -> DocumentResult:
        """Process one document.

        Parameters
        ----------
        name:
            File or equipment name, used for classification.
        content:
            Raw trio text.

        Returns
        -------
        DocumentResult
            ``success`` is True when no errors were recorded.  Structural
            failures end up in ``errors``; nothing is raised for them.
        """
        started = time.perf_counter()
        result = DocumentResult(name=name)

        classification = self.classifier.classify(name)
        result.classification = classification
        if classification.confidence < LOW_CLASSIFICATION_CONFIDENCE:
            result.warnings.append("Low confidence equipment classification")

        try:
            parsed = self.parser.parse(content, document_id=name)
        except TrioParseError as exc:
            logger.debug("Strict parse of %s failed", name, exc_info=True)
            result.errors.append(str(exc))
            return self._finish(result, started)

        result.total_sections = parsed.total_sections
        result.errors.extend(d.message for d in parsed.errors)
        result.warnings.extend(d.message for d in parsed.warnings)

        projected = project_points(parsed, equipment_name=classification.equipment_name)
        limit = self.options.max_points_per_equipment
        if len(projected) > limit:
            result.warnings.append(f"Point count ({len(projected)}) exceeds maximum ({limit})")
        if self.options.skip_empty_files and not projected:
            result.warnings.append("File contains no valid points")

        metadata = self.metadata_lookup.lookup(classification.equipment_name)
        reports: list[ComplianceReport] = []
        for point in projected:
            context = NormalizationContext(
                equipment_type=None if classification.is_unknown else classification.equipment_type,
                equipment_name=classification.equipment_name,
                vendor_name=metadata.vendor,
                units=point.unit,
            )
            processed, report = self._process_point(point, context, result)
            result.points.append(processed)
            reports.append(report)
        result.compliance = self.validator.summarize(reports)

        result.equipment = EquipmentRecord(
            id=name,
            name=classification.equipment_name,
            type=classification.equipment_type,
            display_type=get_display_name(classification.equipment_type),
            vendor=metadata.vendor or "Unknown",
            model=metadata.model or "Unknown",
            description=(
                metadata.description
                or f"{classification.equipment_type} parsed from {name}"
            ),
            point_count=len(result.points),
        )
        return self._finish(result, started)

    def _process_point(
        self,
        point: ProjectedPoint,
        context: NormalizationContext,
        result: DocumentResult,
    ) -> tuple[ProcessedPoint, ComplianceReport]:
        normalization = self.normalizer.normalize(point, context)
        if not normalization.success:
            result.warnings.append(
                f"Normalization failed for {point.display_name}: {'; '.join(normalization.errors)}"
            )
        normalized = normalization.point()

        markers = self.tagger.tag(normalized)
        report = self.validator.validate(markers, point_id=normalized.original_point_id)
        return ProcessedPoint(
            point=normalized,
            markers=markers.names(),
            compliance_score=report.score,
            compliance_level=report.level.value,
            compliant=report.is_valid,
            normalized=normalization.success,
        ), report

    def _finish(self, result: DocumentResult, started: float) -> DocumentResult:
        result.success = not result.errors
        result.processing_time_ms = (time.perf_counter() - started) * 1000

        if result.success:
            logger.info(
                "Processed %s as %s with %d points",
                result.name, result.equipment_type or UNKNOWN_EQUIPMENT, result.point_count,
            )
            if self.store is not None:
                self.store.save(result)
        else:
            logger.info("Processing %s failed: %s", result.name, "; ".join(result.errors))
        return result

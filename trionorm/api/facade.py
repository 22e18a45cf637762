"""TrioNorm — the single unified entry point for all trionorm operations.

Usage::

    from trionorm import TrioNorm

    tn = TrioNorm()
    tn.parse(content)
    tn.classify("VVR_2.1.trio")
    tn.normalize(point, equipment_type="VAV")
    tn.tag(normalized_point)
    tn.validate(markers)
    tn.process_document("VVR_2.1.trio", content)
    tn.process_batch([(name, content), ...])
    tn.export(normalized_point, format="zinc")
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from trionorm.classification.cache import ClassificationCache
from trionorm.classification.classifier import ClassificationResult
from trionorm.classification.metadata import MetadataLookup
from trionorm.compliance.report import BatchComplianceSummary, ComplianceReport
from trionorm.compliance.rules import ComplianceRule
from trionorm.config_manager import ConfigManager
from trionorm.normalization.models import NormalizationContext, NormalizationResult, NormalizedPoint
from trionorm.parsing.models import ParseResult
from trionorm.parsing.parser import TrioParser
from trionorm.parsing.projection import ProjectedPoint, project_points
from trionorm.pipeline.batch import BatchProcessor
from trionorm.pipeline.models import BatchResult, DocumentResult
from trionorm.pipeline.options import ProcessingOptions
from trionorm.pipeline.processor import DocumentProcessor
from trionorm.pipeline.store import EquipmentStore
from trionorm.tagging.export import to_trio, to_zinc
from trionorm.tagging.models import MarkerSet

logger = logging.getLogger(__name__)

_EXPORTERS = {"trio": to_trio, "zinc": to_zinc}


class TrioNorm:
    """The public interface for trionorm.

    Every stage object is built once and reused, so the classifier cache
    is shared by single-document calls and batches alike.

    Parameters
    ----------
    project_root:
        Optional directory holding ``.trionorm/config.json`` and ``.env``.
        When given, configuration is loaded from it and the ``trionorm``
        log level is applied.
    options:
        Processing options.  Overrides whatever the configuration says.
    metadata_lookup:
        Vendor/model metadata source for classification and normalization.
    store:
        Receives every successfully processed document.
    """

    def __init__(
        self,
        project_root: str | Path | None = None,
        *,
        options: ProcessingOptions | None = None,
        metadata_lookup: MetadataLookup | None = None,
        store: EquipmentStore | None = None,
    ) -> None:
        self._config_manager = ConfigManager()
        self.config: dict[str, str] = {}
        if project_root is not None:
            self.config = self._config_manager.load_config(project_root)
            self._config_manager.apply_log_level(self.config)
            if options is None:
                options = self._config_manager.processing_options(self.config)

        self.options = options or ProcessingOptions()
        self.cache = ClassificationCache()
        self.processor = DocumentProcessor(
            self.options,
            metadata_lookup=metadata_lookup,
            cache=self.cache,
            store=store,
        )
        self._batch = BatchProcessor(self.processor)

    # -- Stages ---------------------------------------------------------------

    def parse(self, content: str, document_id: str = "", *, strict_mode: bool | None = None) -> ParseResult:
        """Parse trio text.  *strict_mode* defaults to the configured option."""
        if strict_mode is None or strict_mode == self.options.strict_mode:
            return self.processor.parser.parse(content, document_id)
        return TrioParser(strict_mode=strict_mode).parse(content, document_id)

    def project(self, result: ParseResult, equipment_name: str | None = None) -> list[ProjectedPoint]:
        """Project every point-shaped record of a parse result."""
        return project_points(result, equipment_name)

    def classify(self, name: str) -> ClassificationResult:
        return self.processor.classifier.classify(name)

    def normalize(
        self,
        point: ProjectedPoint,
        *,
        equipment_type: str | None = None,
        equipment_name: str | None = None,
        vendor_name: str | None = None,
        units: str | None = None,
    ) -> NormalizationResult:
        context = NormalizationContext(
            equipment_type=equipment_type,
            equipment_name=equipment_name,
            vendor_name=vendor_name,
            units=units,
        )
        return self.processor.normalizer.normalize(point, context)

    def tag(self, point: NormalizedPoint) -> MarkerSet:
        return self.processor.tagger.tag(point)

    def validate(self, markers: MarkerSet | Iterable[str], point_id: str = "") -> ComplianceReport:
        return self.processor.validator.validate(markers, point_id=point_id)

    def compliance_summary(self, reports: list[ComplianceReport]) -> BatchComplianceSummary:
        return self.processor.validator.summarize(reports)

    def add_compliance_rule(self, rule: ComplianceRule) -> None:
        """Register an extra compliance rule for all later validations."""
        self.processor.validator.add_rule(rule)

    # -- Pipeline -------------------------------------------------------------

    def process_document(self, name: str, content: str) -> DocumentResult:
        """Run one document through every stage."""
        return self.processor.process(name, content)

    def process_batch(self, documents: Iterable[tuple[str, str]]) -> BatchResult:
        """Run many documents, ``concurrency`` at a time."""
        return self._batch.process(documents)

    # -- Export ---------------------------------------------------------------

    def export(self, point: NormalizedPoint, format: str = "trio") -> str:
        """Render a tagged point as ``trio`` or ``zinc`` text.

        Raises
        ------
        ValueError
            For an unknown format.
        """
        try:
            exporter = _EXPORTERS[format]
        except KeyError:
            raise ValueError(
                f"Unknown export format {format!r}; expected one of {sorted(_EXPORTERS)}"
            ) from None
        return exporter(point)

"""EquipmentClassifier — best-effort equipment type from a name or file name.

Three tiers are tried in order and the first one that answers wins:

1. vendor/model substring rules, when the metadata lookup knows the
   equipment's vendor and model;
2. the prefix dictionary (exact prefix, then longest-key-first
   ``startswith`` scan), memoized in a :class:`ClassificationCache`;
3. the ranked name-pattern library, which collects every match and keeps
   the runners-up as alternatives.

Usage::

    from trionorm.classification import EquipmentClassifier

    result = EquipmentClassifier().classify("VVR_2.1.trio")
    result.equipment_type   # 'VAV'
"""

from __future__ import annotations

import logging
import re

from pydantic import BaseModel, Field

from trionorm.classification.cache import ClassificationCache
from trionorm.classification.metadata import MetadataLookup, NullMetadataLookup
from trionorm.classification.patterns import (
    DISPLAY_NAMES,
    NAME_PATTERNS,
    PREFIX_TYPES,
    VENDOR_MODEL_RULES,
    compile_patterns,
    validate_tables,
)
from trionorm.config import (
    CLASSIFIABLE_EXTENSIONS,
    MAX_ALTERNATIVES,
    PREFIX_CONFIDENCE,
    UNKNOWN_EQUIPMENT,
    VENDOR_MODEL_CONFIDENCE,
)

logger = logging.getLogger(__name__)

_EXTENSION_RE = re.compile(rf"\.({'|'.join(CLASSIFIABLE_EXTENSIONS)})$", re.I)
_PREFIX_RE = re.compile(r"^([A-Za-z]+)[-_]")


class Alternative(BaseModel):
    """A lower-ranked candidate type."""

    type: str
    confidence: float


class ClassificationResult(BaseModel):
    """Outcome of classifying one equipment name. Always produced."""

    equipment_type: str = UNKNOWN_EQUIPMENT
    equipment_name: str = ""
    confidence: float = 0.0
    """0.0 to 1.0; 0.0 together with 'Unknown' means nothing matched."""

    matched_pattern: str | None = None
    alternatives: list[Alternative] = Field(default_factory=list)
    """At most three runners-up, highest confidence first."""

    tier: str = "none"
    """Which tier answered: 'vendor_model', 'prefix', 'pattern' or 'none'."""

    @property
    def display_name(self) -> str:
        return get_display_name(self.equipment_type)

    @property
    def is_unknown(self) -> bool:
        return self.equipment_type == UNKNOWN_EQUIPMENT


def strip_extension(name: str) -> str:
    """Remove a trailing ``.trio`` / ``.csv`` / ``.json`` / ``.txt``."""
    return _EXTENSION_RE.sub("", name)


def get_display_name(equipment_type: str) -> str:
    """Human-readable name for a type token, or the token itself."""
    return DISPLAY_NAMES.get(equipment_type, equipment_type)


class EquipmentClassifier:
    """Multi-tier equipment classifier.

    Parameters
    ----------
    metadata_lookup:
        Source of vendor/model metadata for Tier 1.  Defaults to a lookup
        that knows nothing.
    cache:
        Memo for Tier 2 hits.  Pass the same instance to several
        classifiers to share it; defaults to a private cache.
    vendor_rules, prefixes, patterns:
        Replacement rule tables.  They are validated before use.
    """

    def __init__(
        self,
        metadata_lookup: MetadataLookup | None = None,
        cache: ClassificationCache | None = None,
        vendor_rules: dict[str, list[tuple[str, str]]] | None = None,
        prefixes: dict[str, str] | None = None,
        patterns: list[tuple[str, str, float]] | None = None,
    ) -> None:
        if vendor_rules is not None or prefixes is not None or patterns is not None:
            validate_tables(vendor_rules, prefixes, patterns)
        self.metadata_lookup = metadata_lookup or NullMetadataLookup()
        self.cache = cache if cache is not None else ClassificationCache()
        self._vendor_rules = VENDOR_MODEL_RULES if vendor_rules is None else vendor_rules
        self._prefixes = {
            k.upper(): v for k, v in (PREFIX_TYPES if prefixes is None else prefixes).items()
        }
        self._prefix_keys = sorted(self._prefixes, key=len, reverse=True)
        self._patterns = compile_patterns(NAME_PATTERNS if patterns is None else patterns)

    def classify(self, name: str) -> ClassificationResult:
        """Classify an equipment name or file name.

        Parameters
        ----------
        name:
            Equipment name, optionally with a trio/csv/json/txt extension.

        Returns
        -------
        ClassificationResult
            ``equipment_type='Unknown'`` with ``confidence=0.0`` when no
            tier matches.
        """
        base_name = strip_extension(name.strip())

        result = (
            self._classify_by_vendor_model(base_name)
            or self._classify_by_prefix(base_name)
            or self._classify_by_pattern(base_name)
        )
        if result is None:
            logger.debug("No classification match for %s", base_name)
            return ClassificationResult(equipment_name=base_name)
        return result

    # -- Tier 1 ---------------------------------------------------------------

    def _classify_by_vendor_model(self, base_name: str) -> ClassificationResult | None:
        metadata = self.metadata_lookup.lookup(base_name)
        if not metadata.has_vendor_model:
            return None

        for model_fragment, equipment_type in self._vendor_rules.get(metadata.vendor or "", []):
            if model_fragment in (metadata.model or ""):
                logger.debug(
                    "Matched %s by vendor/model %s/%s -> %s",
                    base_name, metadata.vendor, metadata.model, equipment_type,
                )
                return ClassificationResult(
                    equipment_type=equipment_type,
                    equipment_name=base_name,
                    confidence=VENDOR_MODEL_CONFIDENCE,
                    matched_pattern=f"Vendor: {metadata.vendor}, Model: {metadata.model}",
                    tier="vendor_model",
                )
        return None

    # -- Tier 2 ---------------------------------------------------------------

    def _lookup_prefix(self, base_name: str) -> tuple[str, str] | None:
        """Return ``(dictionary key, type)`` for *base_name*, if any."""
        upper = base_name.upper()
        match = _PREFIX_RE.match(base_name)
        prefix = match.group(1).upper() if match else upper

        if prefix in self._prefixes:
            return prefix, self._prefixes[prefix]
        for key in self._prefix_keys:
            if upper.startswith(key):
                return key, self._prefixes[key]
        return None

    def _classify_by_prefix(self, base_name: str) -> ClassificationResult | None:
        hit = self.cache.get(base_name)
        if hit is None:
            hit = self._lookup_prefix(base_name)
            if hit is None:
                return None
            hit = self.cache.put(base_name, hit)
            logger.debug("Matched %s by prefix %s -> %s", base_name, hit[0], hit[1])
        key, equipment_type = hit

        return ClassificationResult(
            equipment_type=equipment_type,
            equipment_name=base_name,
            confidence=PREFIX_CONFIDENCE,
            matched_pattern=f"prefix:{key}",
            tier="prefix",
        )

    # -- Tier 3 ---------------------------------------------------------------

    def _classify_by_pattern(self, base_name: str) -> ClassificationResult | None:
        matches = [
            (pattern.pattern, equipment_type, confidence)
            for pattern, equipment_type, confidence in self._patterns
            if pattern.search(base_name)
        ]
        if not matches:
            return None

        # Stable sort keeps table order among equal confidences
        matches.sort(key=lambda m: m[2], reverse=True)
        best_pattern, best_type, best_confidence = matches[0]
        alternatives = [
            Alternative(type=t, confidence=c) for _, t, c in matches[1:1 + MAX_ALTERNATIVES]
        ]
        logger.debug(
            "Matched %s by pattern %s -> %s (%.2f)",
            base_name, best_pattern, best_type, best_confidence,
        )
        return ClassificationResult(
            equipment_type=best_type,
            equipment_name=base_name,
            confidence=best_confidence,
            matched_pattern=best_pattern,
            alternatives=alternatives,
            tier="pattern",
        )


def classify_equipment(name: str) -> ClassificationResult:
    """Classify *name* with a fresh default classifier."""
    return EquipmentClassifier().classify(name)

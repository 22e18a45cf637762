"""Equipment metadata lookup — vendor/model facts supplied by a connector export."""

from __future__ import annotations

import abc
import logging
from typing import Any, Iterable

from pydantic import BaseModel

logger = logging.getLogger(__name__)


class EquipmentMetadata(BaseModel):
    """What the connector knows about one piece of equipment."""

    name: str
    vendor: str | None = None
    model: str | None = None
    description: str | None = None

    @property
    def has_vendor_model(self) -> bool:
        return bool(self.vendor and self.model)


class MetadataLookup(abc.ABC):
    """Source of vendor/model metadata for equipment names.

    Implementations must return an empty :class:`EquipmentMetadata`
    (name only) for unknown equipment rather than raise.
    """

    @abc.abstractmethod
    def lookup(self, name: str) -> EquipmentMetadata:
        """Return metadata for *name*."""


class NullMetadataLookup(MetadataLookup):
    """Lookup that knows nothing."""

    def lookup(self, name: str) -> EquipmentMetadata:
        return EquipmentMetadata(name=name)


class StaticMetadataLookup(MetadataLookup):
    """In-memory registry of equipment metadata keyed by equipment name."""

    def __init__(self) -> None:
        self._entries: dict[str, EquipmentMetadata] = {}

    def register(self, metadata: EquipmentMetadata) -> None:
        """Add or replace the entry for ``metadata.name``."""
        self._entries[metadata.name] = metadata
        logger.debug("Registered metadata for %s", metadata.name)

    def lookup(self, name: str) -> EquipmentMetadata:
        return self._entries.get(name) or EquipmentMetadata(name=name)

    def __len__(self) -> int:
        return len(self._entries)

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> StaticMetadataLookup:
        """Build a lookup from connector rows.

        Each row needs a ``name`` (or ``equipment_name``) key; ``vendor``,
        ``model`` and ``description`` are optional.  Rows without a name are
        skipped.
        """
        lookup = cls()
        for row in records:
            name = row.get("name") or row.get("equipment_name")
            if not name:
                logger.debug("Skipping metadata row without a name: %r", row)
                continue
            lookup.register(EquipmentMetadata(
                name=str(name),
                vendor=row.get("vendor") or None,
                model=row.get("model") or None,
                description=row.get("description") or None,
            ))
        return lookup

"""Equipment stores — where successfully processed documents are handed off."""

from __future__ import annotations

import abc
import logging
import threading

from trionorm.pipeline.models import DocumentResult

logger = logging.getLogger(__name__)


class EquipmentStore(abc.ABC):
    """Persistence collaborator for processed equipment and its points."""

    @abc.abstractmethod
    def save(self, result: DocumentResult) -> None:
        """Store the equipment and points of one successful document."""


class InMemoryEquipmentStore(EquipmentStore):
    """Thread-safe dict-backed store keyed by document name.

    Saving the same document again replaces the earlier result.
    """

    def __init__(self) -> None:
        self._results: dict[str, DocumentResult] = {}
        self._lock = threading.Lock()

    def save(self, result: DocumentResult) -> None:
        with self._lock:
            self._results[result.name] = result
        logger.debug("Stored %s with %d points", result.name, result.point_count)

    def get(self, name: str) -> DocumentResult | None:
        with self._lock:
            return self._results.get(name)

    def all(self) -> list[DocumentResult]:
        with self._lock:
            return list(self._results.values())

    def clear(self) -> None:
        with self._lock:
            self._results.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._results)

"""BatchProcessor — fan documents out over a thread pool, group by group.

Documents share no state apart from the classifier cache, so each group of
``concurrency`` documents runs side by side; the next group starts only
after the previous one finished.  Results keep input order.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable

from trionorm.pipeline.models import BatchResult, BatchSummary, DocumentResult
from trionorm.pipeline.processor import DocumentProcessor

logger = logging.getLogger(__name__)


class BatchProcessor:
    """Process many ``(name, content)`` documents.

    Parameters
    ----------
    processor:
        Document processor to run for each document.  Its options decide the
        concurrency width.
    """

    def __init__(self, processor: DocumentProcessor | None = None) -> None:
        self.processor = processor or DocumentProcessor()

    @property
    def concurrency(self) -> int:
        return self.processor.options.concurrency

    def process(self, documents: Iterable[tuple[str, str]]) -> BatchResult:
        """Process *documents* and summarize the outcome.

        A document that raises is recorded as a failed result; its siblings
        are unaffected.
        """
        pending = list(documents)
        results: list[DocumentResult] = []
        width = self.concurrency

        with ThreadPoolExecutor(max_workers=width) as pool:
            for start in range(0, len(pending), width):
                group = pending[start:start + width]
                futures = [pool.submit(self._process_one, name, content) for name, content in group]
                results.extend(future.result() for future in futures)

        summary = BatchSummary.from_results(results)
        logger.info(
            "Batch finished: %d/%d documents succeeded, %d points",
            summary.successful_files, summary.total_files, summary.total_points,
        )
        return BatchResult(results=results, summary=summary)

    def _process_one(self, name: str, content: str) -> DocumentResult:
        try:
            return self.processor.process(name, content)
        except Exception as exc:
            logger.warning("Processing %s raised", name, exc_info=True)
            return DocumentResult(name=name, success=False, errors=[f"Processing failed: {exc}"])

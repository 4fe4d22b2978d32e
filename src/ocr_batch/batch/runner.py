from __future__ import annotations

import math
from typing import Optional, Tuple

from ..errors import PreconditionError, ServiceUnavailableError
from ..ocr.base import Recognizer
from ..schema import BatchSummary, ItemReport, ResultEntry
from ..utils.logging import get_logger
from .aggregator import ResultAggregator
from .events import BatchObserver, LoggingObserver
from .queue import ItemQueue, ItemStatus, WorkItem

logger = get_logger("batch.runner")


class CancellationToken:
    """
    Cooperative cancellation flag.

    The runner checks it only between items; a recognition call that is
    already in flight always runs to completion.
    """

    def __init__(self) -> None:
        self._requested = False

    @property
    def requested(self) -> bool:
        return self._requested

    def request(self) -> None:
        self._requested = True

    def reset(self) -> None:
        self._requested = False


def overall_percent(processed: int, total: int) -> int:
    if total <= 0:
        return 0
    return min(100, (processed * 100 + total - 1) // total)


def item_percent(fraction: float) -> int:
    return max(0, min(100, math.floor(fraction * 100)))


class BatchRunner:
    """Runs recognition over an ``ItemQueue`` one item at a time."""

    def __init__(
        self,
        queue: ItemQueue,
        recognizer: Recognizer,
        aggregator: Optional[ResultAggregator] = None,
        observer: Optional[BatchObserver] = None,
    ) -> None:
        self.queue = queue
        self.recognizer = recognizer
        self.aggregator = aggregator or ResultAggregator()
        self.observer = observer or LoggingObserver()
        self.token = CancellationToken()
        self._running = False
        self._language = ""
        self._overall = 0
        self._cancelled = False

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def cancel_requested(self) -> bool:
        return self.token.requested

    @property
    def overall_progress(self) -> int:
        return self._overall

    @property
    def results(self) -> Tuple[ResultEntry, ...]:
        return self.aggregator.snapshot()

    @property
    def can_compose(self) -> bool:
        return not self._running and len(self.aggregator) > 0

    async def start(self, language: str) -> int:
        """
        Recognize every queued item in submission order.

        Returns the number of result entries recorded. Raises
        ``PreconditionError`` for an empty queue or a run already in progress,
        and ``ServiceUnavailableError`` when the engine cannot be reached;
        neither touches the batch state.
        """
        if self._running:
            raise PreconditionError("A batch is already running")
        if len(self.queue) == 0:
            raise PreconditionError("No images queued")
        if not self.recognizer.is_available():
            raise ServiceUnavailableError(
                f"Recognition engine '{self.recognizer.name}' is not available"
            )

        self.token.reset()
        self.aggregator.reset()
        self._language = language
        self._running = True
        self.queue.locked = True
        self._overall = 0
        self._cancelled = False
        items = self.queue.items
        total = len(items)
        logger.info("Starting batch of %d image(s), language=%s", total, language)
        try:
            for item in items:
                self._requeue(item)
            for processed, item in enumerate(items, start=1):
                if self.token.requested:
                    self._cancelled = True
                    logger.info("Batch cancelled after %d of %d item(s)", processed - 1, total)
                    break
                await self._process(item, language)
                self._set_overall(overall_percent(processed, total))
        finally:
            self._running = False
            self.queue.locked = False

        count = len(self.aggregator)
        self.observer.on_batch_finished(count)
        return count

    def cancel(self) -> None:
        if self._running and not self.token.requested:
            logger.info("Cancellation requested; stopping after the current item")
        self.token.request()

    def reset(self) -> None:
        """Drop the queue and results between runs."""
        if self._running:
            raise PreconditionError("Cannot reset while a batch is running")
        self.queue.clear()
        self.aggregator.reset()
        self._overall = 0

    def summary(self) -> BatchSummary:
        return BatchSummary(
            language=self._language,
            cancelled=self._cancelled,
            overall_progress=self._overall,
            items=[
                ItemReport(
                    identity=item.identity,
                    name=item.display_name,
                    status=item.status.value,
                    error=item.error,
                )
                for item in self.queue
            ],
            entries=list(self.aggregator.snapshot()),
        )

    async def _process(self, item: WorkItem, language: str) -> None:
        item.error = None
        self._set_status(item, ItemStatus.RECOGNIZING, 0)

        def on_progress(fraction: float) -> None:
            self._set_status(item, ItemStatus.RECOGNIZING, item_percent(fraction))

        try:
            result = await self.recognizer.recognize(item.source, language, on_progress)
        except Exception as exc:
            logger.warning("Recognition failed for %s: %s", item.display_name, exc)
            item.error = str(exc)
            self._set_status(item, ItemStatus.ERROR, item.progress)
            self.aggregator.append(ResultEntry(name=item.display_name, text=""))
            return

        text = (result.text or "").strip()
        if text:
            self._set_status(item, ItemStatus.DONE, 100)
        else:
            logger.info("No text detected in %s", item.display_name)
            self._set_status(item, ItemStatus.NO_TEXT, 100)
        self.aggregator.append(ResultEntry(name=item.display_name, text=text))

    def _requeue(self, item: WorkItem) -> None:
        if item.status is ItemStatus.QUEUED and item.progress == 0 and item.error is None:
            return
        item.error = None
        self._set_status(item, ItemStatus.QUEUED, 0)

    def _set_status(self, item: WorkItem, status: ItemStatus, progress: int) -> None:
        item.status = status
        item.progress = progress
        self.observer.on_item_status_changed(item.identity, status, progress)

    def _set_overall(self, percent: int) -> None:
        self._overall = percent
        self.observer.on_overall_progress(percent)

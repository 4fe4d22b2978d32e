from __future__ import annotations

from typing import Protocol

from ..utils.logging import get_logger
from .queue import ItemStatus

logger = get_logger("batch.events")


class BatchObserver(Protocol):
    def on_item_status_changed(self, identity: str, status: ItemStatus, progress: int) -> None:
        ...

    def on_overall_progress(self, percent: int) -> None:
        ...

    def on_batch_finished(self, result_count: int) -> None:
        ...


class LoggingObserver:
    """Default observer: reports batch events through the package logger."""

    def on_item_status_changed(self, identity: str, status: ItemStatus, progress: int) -> None:
        if status is ItemStatus.RECOGNIZING:
            logger.debug("Item %s recognizing %d%%", identity, progress)
        else:
            logger.debug("Item %s -> %s", identity, status.value)

    def on_overall_progress(self, percent: int) -> None:
        logger.info("Batch progress %d%%", percent)

    def on_batch_finished(self, result_count: int) -> None:
        logger.info("Batch finished with %d result(s)", result_count)

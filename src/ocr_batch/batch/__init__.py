"""Batch queue, runner and result aggregation."""

from .aggregator import ResultAggregator
from .events import BatchObserver, LoggingObserver
from .queue import ItemQueue, ItemStatus, WorkItem
from .runner import BatchRunner, CancellationToken

__all__ = [
    "BatchObserver",
    "BatchRunner",
    "CancellationToken",
    "ItemQueue",
    "ItemStatus",
    "LoggingObserver",
    "ResultAggregator",
    "WorkItem",
]

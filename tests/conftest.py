from __future__ import annotations

import asyncio
from typing import Callable, List, Optional, Sequence, Tuple, Union

import pytest

from ocr_batch.batch.queue import ItemStatus
from ocr_batch.ocr.base import RecognitionResult

Outcome = Union[str, BaseException]


class FakeRecognizer:
    """Scripted recognizer: returns (or raises) one outcome per call."""

    name = "fake"

    def __init__(
        self,
        outcomes: Sequence[Outcome],
        available: bool = True,
        progress: Sequence[float] = (0.5, 1.0),
        on_call: Optional[Callable[[int], object]] = None,
    ) -> None:
        self.outcomes = list(outcomes)
        self.available = available
        self.progress = list(progress)
        self.on_call = on_call
        self.calls: List[Tuple[object, str]] = []

    def is_available(self) -> bool:
        return self.available

    async def recognize(self, source, language, on_progress=None) -> RecognitionResult:
        index = len(self.calls)
        self.calls.append((source, language))
        if self.on_call is not None:
            outcome = self.on_call(index)
            if asyncio.iscoroutine(outcome):
                await outcome
        for fraction in self.progress:
            await asyncio.sleep(0)
            if on_progress is not None:
                on_progress(fraction)
        result = self.outcomes[index]
        if isinstance(result, BaseException):
            raise result
        return RecognitionResult(text=result)


class RecordingObserver:
    def __init__(self) -> None:
        self.statuses: List[Tuple[str, ItemStatus, int]] = []
        self.progress: List[int] = []
        self.finished: List[int] = []

    def on_item_status_changed(self, identity: str, status: ItemStatus, progress: int) -> None:
        self.statuses.append((identity, status, progress))

    def on_overall_progress(self, percent: int) -> None:
        self.progress.append(percent)

    def on_batch_finished(self, result_count: int) -> None:
        self.finished.append(result_count)

    def for_item(self, identity: str) -> List[Tuple[ItemStatus, int]]:
        return [(status, pct) for ident, status, pct in self.statuses if ident == identity]


@pytest.fixture
def make_recognizer():
    return FakeRecognizer


@pytest.fixture
def observer() -> RecordingObserver:
    return RecordingObserver()

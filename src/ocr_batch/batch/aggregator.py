from __future__ import annotations

from typing import List, Tuple

from ..schema import ResultEntry


class ResultAggregator:
    """Per-item results in processing order. Source of truth for document output."""

    def __init__(self) -> None:
        self._entries: List[ResultEntry] = []

    def __len__(self) -> int:
        return len(self._entries)

    def reset(self) -> None:
        self._entries = []

    def append(self, entry: ResultEntry) -> None:
        self._entries.append(entry)

    def snapshot(self) -> Tuple[ResultEntry, ...]:
        return tuple(self._entries)

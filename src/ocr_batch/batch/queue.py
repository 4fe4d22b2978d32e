from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

from PIL import Image

from ..preprocessing.image_ops import ImageSource, open_image
from ..utils.logging import get_logger

logger = get_logger("batch.queue")

THUMBNAIL_SIZE = (128, 128)


class ItemStatus(str, Enum):
    QUEUED = "queued"
    RECOGNIZING = "recognizing"
    DONE = "done"
    NO_TEXT = "no_text"
    ERROR = "error"


def _new_identity() -> str:
    return uuid.uuid4().hex


@dataclass(eq=False)
class WorkItem:
    source: ImageSource
    display_name: str
    identity: str = field(default_factory=_new_identity)
    status: ItemStatus = ItemStatus.QUEUED
    progress: int = 0
    error: Optional[str] = None
    _thumbnail: Optional[Image.Image] = field(default=None, init=False, repr=False)

    @property
    def label(self) -> str:
        if self.status is ItemStatus.RECOGNIZING:
            return f"Recognizing {self.progress}%"
        return {
            ItemStatus.QUEUED: "Queued",
            ItemStatus.DONE: "Done",
            ItemStatus.NO_TEXT: "No text",
            ItemStatus.ERROR: "Error",
        }[self.status]

    def thumbnail(self) -> Image.Image:
        """Lazily build a small preview image. Released by ``release``."""
        if self._thumbnail is None:
            preview = open_image(self.source).copy()
            preview.thumbnail(THUMBNAIL_SIZE)
            self._thumbnail = preview
        return self._thumbnail

    def release(self) -> None:
        if self._thumbnail is not None:
            self._thumbnail.close()
            self._thumbnail = None


def _display_name(source: ImageSource, position: int) -> str:
    if isinstance(source, (str, Path)):
        return Path(source).name
    filename = getattr(source, "filename", None)
    if filename:
        return Path(filename).name
    return f"image-{position}"


class ItemQueue:
    """Ordered collection of pending work items, owned by the caller between runs."""

    def __init__(self) -> None:
        self._items: List[WorkItem] = []
        self.locked = False

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[WorkItem]:
        return iter(self._items)

    @property
    def items(self) -> Tuple[WorkItem, ...]:
        return tuple(self._items)

    def get(self, identity: str) -> Optional[WorkItem]:
        for item in self._items:
            if item.identity == identity:
                return item
        return None

    def add_items(
        self,
        sources: Iterable[ImageSource],
        names: Optional[Sequence[str]] = None,
    ) -> List[WorkItem]:
        added: List[WorkItem] = []
        for idx, source in enumerate(sources):
            if names is not None and idx < len(names) and names[idx]:
                name = names[idx]
            else:
                name = _display_name(source, len(self._items) + 1)
            item = WorkItem(source=source, display_name=name)
            self._items.append(item)
            added.append(item)
        logger.debug("Queued %d item(s); queue size %d", len(added), len(self._items))
        return added

    def clear(self) -> None:
        if self.locked:
            logger.debug("Ignoring clear request while a batch is running")
            return
        for item in self._items:
            item.release()
        self._items = []

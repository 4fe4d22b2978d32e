from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional, Protocol

from ..preprocessing.image_ops import ImageSource

ProgressCallback = Callable[[float], None]


@dataclass
class RecognitionResult:
    text: str


class Recognizer(Protocol):
    name: str

    def is_available(self) -> bool:
        """Return True when the engine can be called right now."""
        ...

    async def recognize(
        self,
        source: ImageSource,
        language: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RecognitionResult:
        """Recognize text in one image, reporting fractional progress in [0, 1]."""
        ...

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Sequence

from .batch.aggregator import ResultAggregator
from .batch.events import BatchObserver
from .batch.queue import ItemQueue, WorkItem
from .batch.runner import BatchRunner
from .config import BatchConfig, load_config
from .document.composer import DocumentComposer
from .document.text_export import write_text_document
from .errors import PreconditionError
from .ocr.base import Recognizer
from .ocr.tesseract_client import TesseractRecognizer
from .preprocessing.image_ops import ImageSource
from .utils.files import iter_image_paths
from .utils.logging import get_logger

logger = get_logger("pipeline")


class BatchOCRPipeline:
    """
    Entry point for front ends: submit files, start, cancel, clear, export.

    Mutating calls are only valid between runs; callers should consult
    ``is_running`` before offering them.
    """

    def __init__(
        self,
        config: Optional[BatchConfig] = None,
        recognizer: Optional[Recognizer] = None,
        observer: Optional[BatchObserver] = None,
    ) -> None:
        self.config = config or load_config()
        self.queue = ItemQueue()
        self.aggregator = ResultAggregator()
        self.recognizer = recognizer or self._build_recognizer()
        self.runner = BatchRunner(self.queue, self.recognizer, self.aggregator, observer)
        self.composer = DocumentComposer(self.config.document)

    @property
    def is_running(self) -> bool:
        return self.runner.is_running

    @property
    def can_compose(self) -> bool:
        return self.runner.can_compose

    def submit(
        self, sources: Iterable[ImageSource], names: Optional[Sequence[str]] = None
    ) -> List[WorkItem]:
        return self.queue.add_items(sources, names)

    def submit_paths(self, paths: Iterable[Path]) -> List[WorkItem]:
        images: List[Path] = []
        for path in paths:
            images.extend(iter_image_paths(Path(path)))
        if not images:
            logger.warning("No images found in the given inputs")
        return self.queue.add_items(images)

    async def start(self, language: Optional[str] = None) -> int:
        return await self.runner.start(language or self.config.ocr.lang)

    def cancel(self) -> None:
        self.runner.cancel()

    def clear(self) -> None:
        if self.is_running:
            logger.debug("Clear ignored while running")
            return
        self.runner.reset()

    def compose_pdf(self) -> bytes:
        self._require_results()
        return self.composer.compose(self.runner.results)

    def save_pdf(self, directory: Optional[Path] = None, filename: Optional[str] = None) -> Path:
        self._require_results()
        target = directory or self.config.output_dir
        path = self.composer.save(self.runner.results, target, filename)
        logger.info("Saved PDF to %s", path)
        return path

    def save_text(self, directory: Optional[Path] = None, filename: Optional[str] = None) -> Path:
        self._require_results()
        target = (directory or self.config.output_dir) / (
            filename or self.config.document.text_filename
        )
        path = write_text_document(self.runner.results, target)
        logger.info("Saved text to %s", path)
        return path

    def _require_results(self) -> None:
        if not self.can_compose:
            raise PreconditionError("No results available; run a batch first")

    def _build_recognizer(self) -> Recognizer:
        engine = (self.config.ocr.engine or "tesseract").lower()
        if engine != "tesseract":
            logger.warning("Unknown OCR engine '%s'. Falling back to Tesseract.", engine)
        return TesseractRecognizer(
            oem=self.config.ocr.oem,
            psm=self.config.ocr.psm,
            preprocess=self.config.ocr.preprocess,
            tesseract_cmd=self.config.ocr.tesseract_cmd,
        )

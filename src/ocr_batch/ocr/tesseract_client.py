from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Iterable, Optional, Union

from PIL import Image

import pytesseract

from ..preprocessing.image_ops import ImageSource, open_image, preprocess_for_ocr
from ..utils.logging import get_logger
from .base import ProgressCallback, RecognitionResult, Recognizer

logger = get_logger("ocr.tesseract")

# Map short language codes to Tesseract traineddata names
_TESS_LANG_MAP = {
    "en": "eng",
    "vi": "vie",
    "fr": "fra",
    "de": "deu",
    "es": "spa",
}


def tesseract_lang(language: Union[str, Iterable[str], None]) -> str:
    if not language:
        return "eng"
    if isinstance(language, str):
        codes = language.split("+")
    else:
        codes = list(language)
    mapped = [_TESS_LANG_MAP.get(code.strip().lower(), code.strip()) for code in codes if code.strip()]
    return "+".join(mapped) or "eng"


@dataclass
class TesseractRecognizer(Recognizer):
    """Recognition adapter powered by pytesseract."""

    name: str = "tesseract"
    oem: int = 3
    psm: int = 3
    preprocess: bool = False
    tesseract_cmd: Optional[str] = None

    def __post_init__(self) -> None:
        if self.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.tesseract_cmd

    @property
    def config_string(self) -> str:
        return f"--oem {self.oem} --psm {self.psm}"

    def is_available(self) -> bool:
        try:
            version = pytesseract.get_tesseract_version()
        except (pytesseract.TesseractNotFoundError, OSError) as exc:
            logger.warning("Tesseract is not available: %s", exc)
            return False
        logger.debug("Using Tesseract %s", version)
        return True

    async def recognize(
        self,
        source: ImageSource,
        language: str,
        on_progress: Optional[ProgressCallback] = None,
    ) -> RecognitionResult:
        lang = tesseract_lang(language)
        _report(on_progress, 0.0)
        image = await asyncio.to_thread(self._prepare, source)
        _report(on_progress, 0.5)
        text = await asyncio.to_thread(
            pytesseract.image_to_string, image, lang=lang, config=self.config_string
        )
        _report(on_progress, 1.0)
        return RecognitionResult(text=text or "")

    def _prepare(self, source: ImageSource) -> Image.Image:
        image = open_image(source)
        if not self.preprocess:
            return image
        result = preprocess_for_ocr(image)
        if result.note:
            logger.debug("Preprocessing: %s", result.note)
        return result.image


def _report(callback: Optional[ProgressCallback], fraction: float) -> None:
    if callback is not None:
        callback(fraction)

"""Recognition engine abstractions."""

from .base import ProgressCallback, RecognitionResult, Recognizer
from .tesseract_client import TesseractRecognizer, tesseract_lang

__all__ = [
    "ProgressCallback",
    "RecognitionResult",
    "Recognizer",
    "TesseractRecognizer",
    "tesseract_lang",
]

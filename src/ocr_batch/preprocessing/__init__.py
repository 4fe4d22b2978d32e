"""Image decoding and preprocessing utilities."""

from .image_ops import ImageSource, PreprocessResult, open_image, preprocess_for_ocr

__all__ = ["ImageSource", "PreprocessResult", "open_image", "preprocess_for_ocr"]

"""Utility helpers for logging and file IO."""

from .files import IMAGE_SUFFIXES, is_image_path, iter_image_paths
from .logging import configure_logging, get_logger

__all__ = [
    "IMAGE_SUFFIXES",
    "is_image_path",
    "iter_image_paths",
    "configure_logging",
    "get_logger",
]

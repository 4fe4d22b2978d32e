from __future__ import annotations

from pathlib import Path
from typing import Iterable

IMAGE_SUFFIXES = {".png", ".jpg", ".jpeg", ".tif", ".tiff", ".bmp", ".webp", ".gif"}


def is_image_path(path: Path) -> bool:
    return path.suffix.lower() in IMAGE_SUFFIXES


def iter_image_paths(path: Path) -> Iterable[Path]:
    """
    Yield all images from a given path. Accepts directories or single image files.

    Directory contents are yielded in sorted order so the batch keeps a stable
    submission order between runs.
    """
    path = path.expanduser()
    if path.is_dir():
        for file_path in sorted(path.iterdir()):
            if file_path.is_file() and is_image_path(file_path):
                yield file_path
    elif path.exists():
        if not is_image_path(path):
            raise ValueError(f"Not an image file: {path}")
        yield path
    else:
        raise FileNotFoundError(f"Input not found: {path}")

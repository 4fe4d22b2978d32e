from __future__ import annotations

import io
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import cv2
import numpy as np
from PIL import Image

ImageSource = Union[str, Path, bytes, Image.Image]


@dataclass
class PreprocessResult:
    image: Image.Image
    rotation: float = 0.0
    note: Optional[str] = None


def open_image(source: ImageSource) -> Image.Image:
    """Decode any supported image source into an RGB PIL image."""
    if isinstance(source, Image.Image):
        image = source
    elif isinstance(source, (bytes, bytearray)):
        image = Image.open(io.BytesIO(source))
    else:
        path = Path(source).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Unable to read image: {path}")
        with Image.open(path) as handle:
            image = handle.copy()
    if image.mode != "RGB":
        image = image.convert("RGB")
    return image


def to_gray(image: np.ndarray) -> np.ndarray:
    if len(image.shape) == 2:
        return image
    return cv2.cvtColor(image, cv2.COLOR_RGB2GRAY)


def deskew(image: np.ndarray) -> tuple[np.ndarray, float]:
    gray = to_gray(image)
    gray = cv2.bitwise_not(gray)
    thresh = cv2.threshold(gray, 0, 255, cv2.THRESH_BINARY | cv2.THRESH_OTSU)[1]
    coords = np.column_stack(np.where(thresh > 0))
    if coords.size == 0:
        return image, 0.0
    angle = cv2.minAreaRect(coords)[-1]
    # OpenCV < 4.5 reports [-90, 0), newer releases (0, 90]
    if angle < -45:
        angle += 90
    elif angle > 45:
        angle -= 90
    angle = -angle
    (h, w) = image.shape[:2]
    center = (w / 2.0, h / 2.0)
    matrix = cv2.getRotationMatrix2D(center, angle, 1.0)
    abs_cos = abs(matrix[0, 0])
    abs_sin = abs(matrix[0, 1])
    new_w = int(h * abs_sin + w * abs_cos)
    new_h = int(h * abs_cos + w * abs_sin)
    matrix[0, 2] += new_w / 2.0 - center[0]
    matrix[1, 2] += new_h / 2.0 - center[1]
    rotated = cv2.warpAffine(
        image,
        matrix,
        (new_w, new_h),
        flags=cv2.INTER_CUBIC,
        borderMode=cv2.BORDER_REPLICATE,
    )
    return rotated, angle


def denoise(image: np.ndarray, strength: int = 10) -> np.ndarray:
    gray = to_gray(image)
    return cv2.fastNlMeansDenoising(gray, h=strength)


def enhance_contrast(image: np.ndarray) -> np.ndarray:
    gray = to_gray(image)
    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    return clahe.apply(gray)


def preprocess_for_ocr(image: Image.Image) -> PreprocessResult:
    """Deskew, denoise and boost contrast before handing the image to Tesseract."""
    original = np.array(image.convert("RGB"))
    deskewed, angle = deskew(original)
    denoised = denoise(deskewed)
    enhanced = enhance_contrast(denoised)
    pil_image = Image.fromarray(enhanced)
    if pil_image.mode != "RGB":
        pil_image = pil_image.convert("RGB")
    note = f"deskewed by {angle:.2f} degrees" if angle else None
    return PreprocessResult(image=pil_image, rotation=angle, note=note)

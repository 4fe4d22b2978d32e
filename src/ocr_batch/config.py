from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = Path("configs/config.yaml")


@dataclass
class OCRConfig:
    """Recognition engine configuration options."""

    lang: str = "eng"
    engine: str = "tesseract"
    oem: int = 3
    psm: int = 3
    preprocess: bool = False
    tesseract_cmd: Optional[str] = None


@dataclass
class DocumentConfig:
    """Page geometry and typography for the batch PDF."""

    page_size: str = "A4"
    margin: float = 36.0
    line_height: float = 14.0
    title_font_size: float = 11.0
    body_font_size: float = 10.0
    footer_font_size: float = 9.0
    footer_offset: float = 18.0
    font_name: str = "Helvetica"
    font_path: Optional[str] = None
    footer_text: str = "Generated by Image->Text OCR"
    filename: str = "ocr_batch.pdf"
    text_filename: str = "ocr_batch.txt"


@dataclass
class BatchConfig:
    """Top-level configuration shared across batch modules."""

    output_dir: Path = Path("outputs")

    ocr: OCRConfig = field(default_factory=OCRConfig)
    document: DocumentConfig = field(default_factory=DocumentConfig)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "output_dir": str(self.output_dir),
            "ocr": dict(self.ocr.__dict__),
            "document": dict(self.document.__dict__),
        }


def load_yaml_config(path: Path) -> Dict[str, Any]:
    with path.open("r", encoding="utf-8") as handle:
        return yaml.safe_load(handle) or {}


def load_config(path: Optional[Path] = None) -> BatchConfig:
    """
    Load batch configuration from YAML, falling back to defaults.
    """

    config_path = path or DEFAULT_CONFIG_PATH
    if config_path.exists():
        data = load_yaml_config(config_path)
    else:
        data = {}

    ocr_data: Dict[str, Any] = data.get("ocr") or {}
    doc_data: Dict[str, Any] = data.get("document") or {}
    defaults = BatchConfig()

    config = BatchConfig(
        output_dir=Path(data.get("output_dir", defaults.output_dir)),
        ocr=OCRConfig(
            lang=ocr_data.get("lang", defaults.ocr.lang),
            engine=ocr_data.get("engine", defaults.ocr.engine),
            oem=int(ocr_data.get("oem", defaults.ocr.oem)),
            psm=int(ocr_data.get("psm", defaults.ocr.psm)),
            preprocess=bool(ocr_data.get("preprocess", defaults.ocr.preprocess)),
            tesseract_cmd=ocr_data.get("tesseract_cmd", defaults.ocr.tesseract_cmd),
        ),
        document=DocumentConfig(
            page_size=doc_data.get("page_size", defaults.document.page_size),
            margin=float(doc_data.get("margin", defaults.document.margin)),
            line_height=float(doc_data.get("line_height", defaults.document.line_height)),
            title_font_size=float(
                doc_data.get("title_font_size", defaults.document.title_font_size)
            ),
            body_font_size=float(
                doc_data.get("body_font_size", defaults.document.body_font_size)
            ),
            footer_font_size=float(
                doc_data.get("footer_font_size", defaults.document.footer_font_size)
            ),
            footer_offset=float(
                doc_data.get("footer_offset", defaults.document.footer_offset)
            ),
            font_name=doc_data.get("font_name", defaults.document.font_name),
            font_path=doc_data.get("font_path", defaults.document.font_path),
            footer_text=doc_data.get("footer_text", defaults.document.footer_text),
            filename=doc_data.get("filename", defaults.document.filename),
            text_filename=doc_data.get("text_filename", defaults.document.text_filename),
        ),
    )
    return config


def dump_config(config: BatchConfig, path: Optional[Path] = None) -> None:
    """Persist the configuration to YAML."""
    config_path = path or DEFAULT_CONFIG_PATH
    config_path.parent.mkdir(parents=True, exist_ok=True)
    with config_path.open("w", encoding="utf-8") as handle:
        yaml.safe_dump(config.to_dict(), handle, sort_keys=False)

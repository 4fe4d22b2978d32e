from __future__ import annotations

import io
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from reportlab.lib import pagesizes
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFError, TTFont
from reportlab.pdfgen import canvas

from ..config import DocumentConfig
from ..errors import PreconditionError, ServiceUnavailableError
from ..schema import ResultEntry
from ..utils.logging import get_logger

logger = get_logger("document.composer")

EMPTY_PLACEHOLDER = "(No text recognized)"
TEXT_GRAY = 20 / 255.0
FOOTER_GRAY = 120 / 255.0


@dataclass
class PlacedLine:
    text: str
    x: float
    y: float
    font_size: float


@dataclass
class PageLayout:
    number: int
    entry_index: int
    continued: bool = False
    lines: List[PlacedLine] = field(default_factory=list)


def resolve_page_size(name: str) -> Tuple[float, float]:
    size = getattr(pagesizes, name.upper(), None)
    if size is None:
        raise ValueError(f"Unknown page size: {name}")
    return size


class DocumentComposer:
    """
    Lays out batch results as a paginated PDF.

    Each entry opens a new page with a ``File: <name>`` title followed by the
    wrapped body text. Line wrapping is measured with reportlab font metrics
    so the usable width (page width minus both margins) is never exceeded.
    A body taller than the page continues on the following page. Every page
    carries the attribution footer on the left and its page number on the
    right.
    """

    def __init__(self, config: Optional[DocumentConfig] = None) -> None:
        self.config = config or DocumentConfig()
        self.page_width, self.page_height = resolve_page_size(self.config.page_size)

    @property
    def usable_width(self) -> float:
        return self.page_width - 2 * self.config.margin

    def plan(self, entries: Sequence[ResultEntry]) -> List[PageLayout]:
        if not entries:
            raise PreconditionError("Nothing to compose: no recognition results")
        self._ensure_font()
        cfg = self.config
        top = self.page_height - cfg.margin
        pages: List[PageLayout] = []

        for idx, entry in enumerate(entries):
            page = PageLayout(number=len(pages) + 1, entry_index=idx)
            pages.append(page)
            y = top

            title_lines = self._wrap(f"File: {entry.name}", cfg.title_font_size)
            for offset, line in enumerate(title_lines):
                page.lines.append(
                    PlacedLine(line, cfg.margin, y - offset * cfg.line_height, cfg.title_font_size)
                )
            y -= cfg.line_height * (len(title_lines) + 1)

            for line in self._wrap(entry.text or EMPTY_PLACEHOLDER, cfg.body_font_size):
                if y < cfg.margin:
                    page = PageLayout(number=len(pages) + 1, entry_index=idx, continued=True)
                    pages.append(page)
                    y = top
                page.lines.append(PlacedLine(line, cfg.margin, y, cfg.body_font_size))
                y -= cfg.line_height

        return pages

    def compose(self, entries: Sequence[ResultEntry]) -> bytes:
        pages = self.plan(entries)
        buffer = io.BytesIO()
        pdf = canvas.Canvas(buffer, pagesize=(self.page_width, self.page_height))
        pdf.setTitle("OCR batch")
        for page in pages:
            pdf.setFillGray(TEXT_GRAY)
            for line in page.lines:
                pdf.setFont(self.config.font_name, line.font_size)
                pdf.drawString(line.x, line.y, line.text)
            self._draw_footer(pdf, page.number)
            pdf.showPage()
        pdf.save()
        logger.info("Composed %d page(s) from %d result(s)", len(pages), len(entries))
        return buffer.getvalue()

    def save(
        self,
        entries: Sequence[ResultEntry],
        directory: Path,
        filename: Optional[str] = None,
    ) -> Path:
        data = self.compose(entries)
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / (filename or self.config.filename)
        path.write_bytes(data)
        return path

    def _draw_footer(self, pdf: canvas.Canvas, number: int) -> None:
        cfg = self.config
        pdf.setFont(cfg.font_name, cfg.footer_font_size)
        pdf.setFillGray(FOOTER_GRAY)
        pdf.drawString(cfg.margin, cfg.footer_offset, cfg.footer_text)
        pdf.drawRightString(self.page_width - cfg.margin, cfg.footer_offset, str(number))
        pdf.setFillGray(TEXT_GRAY)
        pdf.setFont(cfg.font_name, cfg.title_font_size)

    def _wrap(self, text: str, font_size: float) -> List[str]:
        return simpleSplit(text, self.config.font_name, font_size, self.usable_width) or [""]

    def _ensure_font(self) -> None:
        name = self.config.font_name
        try:
            pdfmetrics.getFont(name)
            return
        except KeyError as exc:
            if not self.config.font_path:
                raise ServiceUnavailableError(f"PDF font '{name}' is not registered") from exc
        font_path = Path(self.config.font_path).expanduser()
        try:
            pdfmetrics.registerFont(TTFont(name, str(font_path)))
        except (OSError, TTFError) as exc:
            raise ServiceUnavailableError(f"Cannot load PDF font {font_path}: {exc}") from exc
        logger.debug("Registered TrueType font %s from %s", name, font_path)

from pathlib import Path

import pytest
import reportlab
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas

from ocr_batch.config import DocumentConfig
from ocr_batch.document.composer import EMPTY_PLACEHOLDER, DocumentComposer
from ocr_batch.document.text_export import format_entries, write_text_document
from ocr_batch.errors import PreconditionError, ServiceUnavailableError
from ocr_batch.schema import ResultEntry


@pytest.fixture
def entries():
    return [
        ResultEntry(name="first.png", text="Hello world"),
        ResultEntry(name="second.png", text=""),
    ]


def test_two_entries_make_two_pages(entries):
    composer = DocumentComposer()
    pages = composer.plan(entries)

    assert [page.number for page in pages] == [1, 2]
    assert [page.entry_index for page in pages] == [0, 1]
    assert pages[0].lines[0].text == "File: first.png"
    assert pages[1].lines[0].text == "File: second.png"
    assert pages[1].lines[-1].text == EMPTY_PLACEHOLDER


def test_title_and_body_fonts_and_positions(entries):
    config = DocumentConfig()
    composer = DocumentComposer(config)
    page = composer.plan(entries[:1])[0]
    title, body = page.lines

    assert title.font_size == config.title_font_size
    assert body.font_size == config.body_font_size
    assert title.x == body.x == config.margin
    assert title.y == composer.page_height - config.margin
    assert body.y == title.y - 2 * config.line_height


def test_lines_are_wrapped_to_usable_width():
    config = DocumentConfig()
    composer = DocumentComposer(config)
    body = "lorem ipsum dolor sit amet " * 60

    pages = composer.plan([ResultEntry(name="long.png", text=body)])

    body_lines = [line for line in pages[0].lines[1:]]
    assert len(body_lines) > 1
    for line in body_lines:
        assert stringWidth(line.text, config.font_name, line.font_size) <= composer.usable_width


def test_long_body_continues_on_following_pages():
    composer = DocumentComposer()
    body = "\n".join(f"line {i}" for i in range(200))

    pages = composer.plan([ResultEntry(name="a.png", text=body), ResultEntry(name="b.png", text="x")])

    assert len(pages) > 3
    assert all(page.entry_index == 0 for page in pages[:-1])
    assert all(page.continued for page in pages[1:-1])
    assert pages[-1].entry_index == 1 and not pages[-1].continued
    assert [page.number for page in pages] == list(range(1, len(pages) + 1))
    for page in pages:
        assert all(line.y >= composer.config.margin for line in page.lines)


def test_compose_writes_pdf_with_footer_page_numbers(entries, monkeypatch):
    numbers = []
    original = Canvas.drawRightString

    def record(self, x, y, text, *args, **kwargs):
        numbers.append((text, x, y))
        return original(self, x, y, text, *args, **kwargs)

    monkeypatch.setattr(Canvas, "drawRightString", record)
    composer = DocumentComposer()

    data = composer.compose(entries)

    assert data.startswith(b"%PDF")
    assert b"/Count 2" in data
    assert [text for text, _, _ in numbers] == ["1", "2"]
    config = composer.config
    assert all(x == composer.page_width - config.margin for _, x, _ in numbers)
    assert all(y == config.footer_offset for _, _, y in numbers)


def test_compose_requires_entries():
    with pytest.raises(PreconditionError):
        DocumentComposer().compose([])


def test_unknown_font_is_reported_as_unavailable(entries):
    composer = DocumentComposer(DocumentConfig(font_name="NoSuchFont-Regular"))
    with pytest.raises(ServiceUnavailableError):
        composer.compose(entries)


def test_unknown_page_size_is_rejected():
    with pytest.raises(ValueError):
        DocumentComposer(DocumentConfig(page_size="tabloid-ish"))


def test_save_uses_default_filename(entries, tmp_path: Path):
    path = DocumentComposer().save(entries, tmp_path / "out")
    assert path == tmp_path / "out" / "ocr_batch.pdf"
    assert path.read_bytes().startswith(b"%PDF")


def test_text_export(entries, tmp_path: Path):
    text = format_entries(entries)
    assert text == f"File: first.png\n\nHello world\n\nFile: second.png\n\n{EMPTY_PLACEHOLDER}\n"

    path = write_text_document(entries, tmp_path / "ocr_batch.txt")
    assert path.read_text(encoding="utf-8") == text

    with pytest.raises(PreconditionError):
        write_text_document([], tmp_path / "empty.txt")


def test_truetype_font_is_registered_from_config(entries):
    vera = Path(reportlab.__file__).parent / "fonts" / "Vera.ttf"
    config = DocumentConfig(font_name="VeraFromConfig", font_path=str(vera))

    data = DocumentComposer(config).compose(entries)

    assert data.startswith(b"%PDF")
    assert isinstance(pdfmetrics.getFont("VeraFromConfig"), TTFont)


def test_missing_truetype_file_is_reported_as_unavailable(entries, tmp_path: Path):
    config = DocumentConfig(font_name="MissingTTF", font_path=str(tmp_path / "nope.ttf"))
    with pytest.raises(ServiceUnavailableError):
        DocumentComposer(config).compose(entries)

"""Document output for batch results."""

from .composer import DocumentComposer, PageLayout, PlacedLine
from .text_export import format_entries, write_text_document

__all__ = [
    "DocumentComposer",
    "PageLayout",
    "PlacedLine",
    "format_entries",
    "write_text_document",
]

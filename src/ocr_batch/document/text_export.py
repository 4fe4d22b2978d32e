from __future__ import annotations

from pathlib import Path
from typing import Sequence

from ..errors import PreconditionError
from ..schema import ResultEntry
from .composer import EMPTY_PLACEHOLDER


def format_entries(entries: Sequence[ResultEntry]) -> str:
    blocks = [f"File: {entry.name}\n\n{entry.text or EMPTY_PLACEHOLDER}" for entry in entries]
    return "\n\n".join(blocks) + "\n"


def write_text_document(entries: Sequence[ResultEntry], path: Path) -> Path:
    """Write the batch results as plain UTF-8 text, one block per image."""
    if not entries:
        raise PreconditionError("Nothing to export: no recognition results")
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(format_entries(entries), encoding="utf-8")
    return path

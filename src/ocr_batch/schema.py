from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


class ResultEntry(BaseModel):
    """Recognized text for one submitted image. Empty text means nothing usable."""

    model_config = ConfigDict(frozen=True)

    name: str
    text: str = ""


class ItemReport(BaseModel):
    identity: str
    name: str
    status: str
    error: Optional[str] = None


class BatchSummary(BaseModel):
    language: str
    cancelled: bool = False
    overall_progress: int = Field(0, ge=0, le=100)
    items: List[ItemReport] = Field(default_factory=list)
    entries: List[ResultEntry] = Field(default_factory=list)

    def ordered(self) -> dict:
        """Return JSON-compatible ordered dict."""
        return self.model_dump(mode="json", exclude_none=True)

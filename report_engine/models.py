"""Pydantic data models used across the report engine."""
from __future__ import annotations

from typing import List, Literal

from pydantic import BaseModel, Field


class TrendItem(BaseModel):
    """One ranked Weibo hot-search topic."""

    title: str = Field(..., min_length=1, description="Hot-search keyword, e.g. '人工智能发展趋势'")
    heat: int = Field(0, ge=0, description="Popularity metric reported by the source (0 if unknown)")
    rank: int = Field(..., ge=1, description="1-based position on the hot-search list")

    model_config = {
        "frozen": True,
    }


class FetchResult(BaseModel):
    """Outcome of a single trend fetch: the parsed items or the reason there are none."""

    items: List[TrendItem] = Field(default_factory=list)
    error: str | None = Field(None, description="Human-readable failure detail, None on success")
    source: Literal["tianapi", "weibo"] | None = Field(None, description="Detected response shape")

    @property
    def ok(self) -> bool:
        return self.error is None and bool(self.items)

    @classmethod
    def failure(cls, error: str) -> "FetchResult":
        return cls(items=[], error=error)


ExtractionStrategy = Literal["fenced", "unterminated_fence", "raw_document"]


class ExtractionResult(BaseModel):
    """HTML pulled out of a model response, or nothing."""

    html: str | None = None
    strategy: ExtractionStrategy | None = None

    model_config = {
        "frozen": True,
    }

    @property
    def found(self) -> bool:
        return bool(self.html)

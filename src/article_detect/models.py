"""Pydantic models for the crawl and batch pipelines."""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class StopReason(str, Enum):
    EMPTY_PAGE = "empty page"
    NO_NEW_IDS = "no new identifiers"
    PAGE_LIMIT = "page limit reached"


class CrawlEntry(BaseModel):
    """One discovered article identifier."""

    id: str = Field(description="Six-symbol base-62 article identifier")
    base10: int = Field(description="Numeric value of the identifier")


class CrawlResult(BaseModel):
    """Identifiers discovered by a listing crawl, in discovery order."""

    entries: list[CrawlEntry] = Field(default_factory=list)
    pages_crawled: int = Field(default=0)
    stop_reason: StopReason = Field(default=StopReason.PAGE_LIMIT)

    @property
    def ids(self) -> list[str]:
        return [e.id for e in self.entries]


class AnalysisStatus(str, Enum):
    SUCCESS = "success"
    NO_SCORE = "no_score"
    ERROR = "error"


class AnalysisResult(BaseModel):
    """Normalized detector response."""

    status: AnalysisStatus
    score: float | None = None
    ai_generated: bool | None = None
    error: str | None = None
    payload: dict[str, Any] = Field(
        default_factory=dict,
        description="Raw JSON object returned by the analysis endpoint",
    )


class AnalysisRecord(BaseModel):
    """One accepted article as written to the result file."""

    url: str
    score: float
    ai_generated: bool


class ItemStatus(str, Enum):
    ACCEPTED = "accepted"
    SKIPPED = "skipped"


class SkipReason(str, Enum):
    NO_CONTENT = "no content"
    EXTRACTION_FAILED = "extraction failed"
    CONTENT_TOO_SHORT = "content too short"
    ANALYSIS_UNAVAILABLE = "analysis unavailable"
    ANALYSIS_ERROR = "analysis error"
    ANALYSIS_INCOMPLETE = "analysis incomplete"


class ItemOutcome(BaseModel):
    """Tagged result of running one candidate URL through the batch pipeline."""

    index: int = Field(description="1-based position in the candidate list")
    url: str
    status: ItemStatus
    skip_reason: SkipReason | None = None
    record: AnalysisRecord | None = None

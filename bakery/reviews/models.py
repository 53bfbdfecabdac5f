from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Review(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1)
    review_text: str = Field(..., min_length=1, alias="reviewText")
    rating: int | None = Field(default=None, ge=0, le=5)


class ReviewsPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reviews: list[Review] = Field(default_factory=list)
    updated_at: str | None = Field(default=None, alias="updatedAt")
    error: str | None = None


class CacheStatus(str, Enum):
    hit = "HIT"
    miss = "MISS"
    stale = "STALE"
    error = "ERROR"


@dataclass(frozen=True)
class Table:
    """Header labels plus raw cell values, exactly as the upstream export had them."""

    columns: list[str] = field(default_factory=list)
    rows: list[list[Any]] = field(default_factory=list)


@dataclass(frozen=True)
class CachedPayload:
    payload: ReviewsPayload
    fetched_at: float  # monotonic seconds


@dataclass(frozen=True)
class ReviewsResult:
    payload: ReviewsPayload
    status: CacheStatus

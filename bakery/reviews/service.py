from __future__ import annotations

import asyncio
import logging
import time
from datetime import datetime, timezone
from typing import Callable

from .cache import ReviewCache
from .config import DEFAULT_REVIEWS_CONFIG, ReviewsConfig
from .mapping import map_rows
from .models import CacheStatus, ReviewsPayload, ReviewsResult
from .upstream import SheetSource

logger = logging.getLogger(__name__)


def _utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


class ReviewService:
    """
    Serves the current review list, refreshing from the spreadsheet when the
    cached copy is older than the TTL.

    ``get_reviews`` never raises for upstream problems. On a failed refresh
    it falls back to the last good payload (whatever its age) and, with
    nothing cached, to an empty list carrying the error message.
    """

    def __init__(
        self,
        config: ReviewsConfig = DEFAULT_REVIEWS_CONFIG,
        source: SheetSource | None = None,
        cache: ReviewCache | None = None,
        clock: Callable[[], float] = time.monotonic,
        timestamp: Callable[[], str] = _utc_timestamp,
    ) -> None:
        self.config = config
        self.source = source if source is not None else SheetSource(config)
        self.cache = cache if cache is not None else ReviewCache(config.ttl_seconds)
        self._clock = clock
        self._timestamp = timestamp
        # Concurrent misses wait here and reuse the winner's result.
        self._refresh_lock = asyncio.Lock()

    def _result(self, payload: ReviewsPayload, status: CacheStatus) -> ReviewsResult:
        self.cache.record(status)
        return ReviewsResult(payload=payload, status=status)

    async def get_reviews(self, force: bool = False, now: float | None = None) -> ReviewsResult:
        if now is None:
            now = self._clock()

        if not force:
            cached = self.cache.fresh(now)
            if cached is not None:
                return self._result(cached.payload, CacheStatus.hit)

        async with self._refresh_lock:
            if not force:
                cached = self.cache.fresh(now)
                if cached is not None:
                    return self._result(cached.payload, CacheStatus.hit)
            return await self._refresh(now)

    async def _refresh(self, now: float) -> ReviewsResult:
        previous = self.cache.entry
        try:
            table = await self.source.fetch_table()
            reviews = map_rows(
                table,
                max_reviews=self.config.max_reviews,
                max_length=self.config.max_review_length,
            )
        except Exception as exc:
            if previous is not None:
                logger.warning("Review refresh failed, serving cached reviews", exc_info=True)
                return self._result(previous.payload, CacheStatus.stale)
            logger.warning("Review refresh failed with nothing cached", exc_info=True)
            message = str(exc) or exc.__class__.__name__
            return self._result(
                ReviewsPayload(reviews=[], error=f"Failed to load reviews: {message}"),
                CacheStatus.error,
            )

        payload = ReviewsPayload(reviews=reviews, updated_at=self._timestamp())
        self.cache.store(payload, now)
        logger.info("Fetched %d reviews from spreadsheet", len(reviews))
        return self._result(payload, CacheStatus.miss)

from __future__ import annotations

from .models import CachedPayload, CacheStatus, ReviewsPayload

DEFAULT_TTL = 300.0  # 5 minutes


class ReviewCache:
    """
    Single-slot cache for the last good review list.

    The slot is only ever replaced wholesale by ``store``; readers get the
    same ``CachedPayload`` object until the next successful refresh.
    """

    def __init__(self, ttl_seconds: float = DEFAULT_TTL) -> None:
        self.ttl_seconds = ttl_seconds
        self._entry: CachedPayload | None = None
        self._counts: dict[CacheStatus, int] = {status: 0 for status in CacheStatus}

    @property
    def entry(self) -> CachedPayload | None:
        return self._entry

    def fresh(self, now: float) -> CachedPayload | None:
        entry = self._entry
        if entry is not None and now - entry.fetched_at < self.ttl_seconds:
            return entry
        return None

    def store(self, payload: ReviewsPayload, now: float) -> CachedPayload:
        self._entry = CachedPayload(payload=payload, fetched_at=now)
        return self._entry

    def record(self, status: CacheStatus) -> None:
        self._counts[status] += 1

    def stats(self) -> dict:
        hits = self._counts[CacheStatus.hit]
        total = sum(self._counts.values())
        return {
            "size": 0 if self._entry is None else len(self._entry.payload.reviews),
            "hits": hits,
            "misses": self._counts[CacheStatus.miss],
            "stale": self._counts[CacheStatus.stale],
            "errors": self._counts[CacheStatus.error],
            "hit_rate": round(hits / total * 100, 1) if total > 0 else 0.0,
        }

    def clear(self) -> None:
        self._entry = None
        self._counts = {status: 0 for status in CacheStatus}

from __future__ import annotations

from fastapi import Depends, FastAPI, HTTPException, Request, Response

from .gallery.catalog import ALL_CATEGORY, CATEGORIES, gallery_images
from .gallery.models import GalleryResponse
from .reviews.config import DEFAULT_REVIEWS_CONFIG
from .reviews.models import CacheStatus, ReviewsPayload
from .reviews.service import ReviewService

app = FastAPI(title="Shira's Cakes API", version="1.0.0")

# One service (and so one review cache) per process.
app.state.review_service = ReviewService(DEFAULT_REVIEWS_CONFIG)


def get_review_service(request: Request) -> ReviewService:
    return request.app.state.review_service


def cache_control_header(ttl_seconds: float, status: CacheStatus = CacheStatus.miss) -> str:
    # Cold-start errors are never cached downstream.
    if status is CacheStatus.error:
        return "no-store"
    ttl = int(ttl_seconds)
    return f"public, s-maxage={ttl}, stale-while-revalidate={ttl * 2}"


# ── Public endpoints ─────────────────────────────────────────────────────


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/api/reviews", response_model=ReviewsPayload, response_model_exclude_none=True)
async def reviews(
    response: Response,
    refresh: str | None = None,
    service: ReviewService = Depends(get_review_service),
) -> ReviewsPayload:
    # Always 200: the page shows an empty state instead of failing.
    result = await service.get_reviews(force=refresh == "1")
    response.headers["X-Cache"] = result.status.value
    response.headers["Cache-Control"] = cache_control_header(service.config.ttl_seconds, result.status)
    return result.payload


@app.get("/api/reviews/stats")
def reviews_stats(service: ReviewService = Depends(get_review_service)) -> dict:
    return service.cache.stats()


@app.get("/api/gallery", response_model=GalleryResponse)
def gallery(category: str = ALL_CATEGORY) -> GalleryResponse:
    try:
        images = gallery_images(category)
    except ValueError:
        raise HTTPException(status_code=404, detail=f"Unknown gallery category: {category}")
    return GalleryResponse(category=category, categories=CATEGORIES, images=images)

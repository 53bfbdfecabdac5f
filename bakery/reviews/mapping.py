from __future__ import annotations

import math
import re
from dataclasses import dataclass
from typing import Any, Sequence

from .models import Review, Table
from .sanitize import MAX_REVIEW_LENGTH, looks_like_code, sanitize

MAX_REVIEWS = 24

NAME_SYNONYMS: tuple[str, ...] = ("name", "customer", "author")
REVIEW_SYNONYMS: tuple[str, ...] = ("review", "testimonial", "feedback", "comment", "message")
RATING_SYNONYMS: tuple[str, ...] = ("rating", "stars", "score")

# Leading number, the way a form answer like "5 stars" or "4/5" is usually typed
_LEADING_NUMBER_RE = re.compile(r"^\s*([+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)")


@dataclass(frozen=True)
class ColumnMap:
    name: int
    review: int
    rating: int | None


def _find_column(labels: list[str], synonyms: Sequence[str], taken: set[int]) -> int | None:
    for index, label in enumerate(labels):
        if index in taken:
            continue
        if any(word in label for word in synonyms):
            return index
    return None


def infer_columns(columns: Sequence[Any]) -> ColumnMap:
    """
    Work out which columns hold the name, the review text and the rating.

    Headers are matched by substring, name first, then review text, then
    rating; a column claimed by an earlier category is not reused. Name and
    review fall back to columns 0 and 1; rating has no positional fallback.
    """
    labels = [str(label or "").strip().lower() for label in columns]
    taken: set[int] = set()

    name = _find_column(labels, NAME_SYNONYMS, taken)
    if name is not None:
        taken.add(name)
    review = _find_column(labels, REVIEW_SYNONYMS, taken)
    if review is not None:
        taken.add(review)
    rating = _find_column(labels, RATING_SYNONYMS, taken)

    return ColumnMap(
        name=0 if name is None else name,
        review=1 if review is None else review,
        rating=rating,
    )


def coerce_rating(value: Any) -> int | None:
    """Round and clamp a raw rating cell into 0..5, or None when it is not a number."""
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, int):
        # JSON ints can be too large for float()
        return max(0, min(5, value))
    if isinstance(value, float):
        number = value
    else:
        match = _LEADING_NUMBER_RE.match(str(value))
        if not match:
            return None
        try:
            number = float(match.group(1))
        except ValueError:
            return None

    if not math.isfinite(number):
        return None

    # Half-up rounding: a 4.5 average shows as five stars
    return max(0, min(5, math.floor(number + 0.5)))


def _cell(row: Sequence[Any], index: int | None) -> Any:
    if index is None or index >= len(row):
        return None
    return row[index]


def _cell_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def map_row(
    row: Sequence[Any],
    columns: ColumnMap,
    max_length: int = MAX_REVIEW_LENGTH,
) -> Review | None:
    name = sanitize(_cell_text(_cell(row, columns.name)))
    text = sanitize(_cell_text(_cell(row, columns.review)))

    if not name or not text or looks_like_code(text, max_length=max_length):
        return None

    return Review(
        name=name,
        review_text=text,
        rating=coerce_rating(_cell(row, columns.rating)),
    )


def map_rows(
    table: Table,
    max_reviews: int = MAX_REVIEWS,
    max_length: int = MAX_REVIEW_LENGTH,
) -> list[Review]:
    """Turn table rows into reviews, keeping upstream order and stopping at *max_reviews*."""
    columns = infer_columns(table.columns)
    reviews: list[Review] = []
    for row in table.rows:
        if len(reviews) >= max_reviews:
            break
        review = map_row(row or [], columns, max_length=max_length)
        if review is not None:
            reviews.append(review)
    return reviews

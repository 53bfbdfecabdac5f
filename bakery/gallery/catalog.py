from __future__ import annotations

from .models import GalleryImage

ALL_CATEGORY = "all"
DEFAULT_CATEGORY = "birthday"

# Photo numbers actually on disk: 8.jpg and 49-59 were never uploaded.
BIRTHDAY_IMAGES: list[int] = [n for n in range(1, 40) if n != 8]
SPECIAL_DESIGN_IMAGES: list[int] = list(range(40, 49))
COOKIES_IMAGES: list[int] = list(range(60, 74))
ALL_IMAGES: list[int] = BIRTHDAY_IMAGES + SPECIAL_DESIGN_IMAGES + COOKIES_IMAGES

CATEGORIES: list[str] = ["birthday", "special-design", "cookies"]


def image_category(num: int) -> str:
    if 1 <= num <= 39:
        return "birthday"
    if 40 <= num <= 48:
        return "special-design"
    if 60 <= num <= 73:
        return "cookies"
    return DEFAULT_CATEGORY


def image_src(num: int) -> str:
    return f"/images/{num}.jpg"


def gallery_images(category: str = ALL_CATEGORY) -> list[GalleryImage]:
    """Return the photos in *category* (or every photo for ``"all"``), in display order."""
    if category != ALL_CATEGORY and category not in CATEGORIES:
        raise ValueError(f"Unknown gallery category: {category}")

    return [
        GalleryImage(id=num, category=image_category(num), src=image_src(num))
        for num in ALL_IMAGES
        if category == ALL_CATEGORY or image_category(num) == category
    ]

from __future__ import annotations

from pydantic import BaseModel


class GalleryImage(BaseModel):
    id: int
    category: str
    src: str


class GalleryResponse(BaseModel):
    category: str
    categories: list[str]
    images: list[GalleryImage]

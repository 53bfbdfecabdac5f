from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .cache import DEFAULT_TTL
from .mapping import MAX_REVIEWS
from .sanitize import MAX_REVIEW_LENGTH

# Load .env from project root
load_dotenv(Path(__file__).resolve().parent.parent.parent / ".env")

_SHEETS_BASE = "https://docs.google.com/spreadsheets/d"
_VALUES_API_BASE = "https://sheets.googleapis.com/v4/spreadsheets"


@dataclass(frozen=True)
class ReviewsConfig:
    sheet_id: str = os.getenv("REVIEWS_SHEET_ID", "12LAXz4XRCDLk7NbEMmWPxZtpoDa9wfDqm34FpwKkDYk")
    sheet_gid: str = os.getenv("REVIEWS_SHEET_GID", "0")
    sheet_range: str = os.getenv("REVIEWS_SHEET_RANGE", "A:E")
    api_key: str = os.getenv("GOOGLE_SHEETS_API_KEY", "")
    source: str = os.getenv("REVIEWS_SOURCE", "export")  # "export" or "api"
    ttl_seconds: float = DEFAULT_TTL
    timeout: float = 10.0
    max_reviews: int = MAX_REVIEWS
    min_payload_bytes: int = 64
    max_review_length: int = MAX_REVIEW_LENGTH

    @property
    def gviz_json_url(self) -> str:
        return f"{_SHEETS_BASE}/{self.sheet_id}/gviz/tq?tqx=out:json&headers=1&gid={self.sheet_gid}"

    @property
    def csv_export_url(self) -> str:
        return f"{_SHEETS_BASE}/{self.sheet_id}/export?format=csv&gid={self.sheet_gid}"

    @property
    def values_api_url(self) -> str:
        return f"{_VALUES_API_BASE}/{self.sheet_id}/values/{self.sheet_range}"


DEFAULT_REVIEWS_CONFIG = ReviewsConfig()

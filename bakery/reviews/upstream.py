from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

import httpx

from .config import DEFAULT_REVIEWS_CONFIG, ReviewsConfig
from .errors import TableParseError, UpstreamFetchError
from .models import Table
from .parsing import parse_csv, parse_gviz, parse_values

logger = logging.getLogger(__name__)

SOURCES = ("export", "api")

# Our own TTL decides freshness, so every upstream read is a live one.
_NO_CACHE_HEADERS = {"Cache-Control": "no-cache", "Pragma": "no-cache"}

# Shown when the values API is selected but no key is configured.
FALLBACK_REVIEWS: list[tuple[str, str, int]] = [
    (
        "Shiran Tesler-Greenberg",
        "We needed a cake last minute and Shira delivered! The cake was beautiful, "
        "just like the inspo picture we sent her, and really delicious! "
        "The birthday girl was very happy 💟",
        5,
    ),
    (
        "Hadar Spiro",
        "Thank you Shira Tzur for another amazing, creative workshop! 🎂",
        5,
    ),
]


@dataclass(frozen=True)
class ExportFormat:
    name: str
    url: Callable[[ReviewsConfig], str]
    parse: Callable[[str], Table]
    check_size: bool = False


# Tried in order; the first one that parses wins.
EXPORT_FORMATS: tuple[ExportFormat, ...] = (
    ExportFormat("gviz-json", lambda cfg: cfg.gviz_json_url, parse_gviz, check_size=True),
    ExportFormat("csv", lambda cfg: cfg.csv_export_url, parse_csv),
)


def fallback_table() -> Table:
    return Table(
        columns=["Name", "Review", "Rating"],
        rows=[[name, text, rating] for name, text, rating in FALLBACK_REVIEWS],
    )


class SheetSource:
    """Reads the feedback spreadsheet and returns it as a ``Table``."""

    def __init__(
        self,
        config: ReviewsConfig = DEFAULT_REVIEWS_CONFIG,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if config.source not in SOURCES:
            raise ValueError(f"Unknown review source {config.source!r}, expected one of {SOURCES}")
        self.config = config
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.timeout,
            follow_redirects=True,
            headers=_NO_CACHE_HEADERS,
            transport=self._transport,
        )

    async def fetch_table(self) -> Table:
        if self.config.source == "api":
            return await self._fetch_values_api()
        return await self._fetch_export()

    async def _get(self, client: httpx.AsyncClient, url: str, **kwargs) -> httpx.Response:
        try:
            response = await client.get(url, **kwargs)
            response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise UpstreamFetchError(f"Timed out after {self.config.timeout:g}s fetching reviews") from exc
        except httpx.HTTPStatusError as exc:
            raise UpstreamFetchError(
                f"Spreadsheet host returned {exc.response.status_code} {exc.response.reason_phrase}".strip()
            ) from exc
        except httpx.HTTPError as exc:
            raise UpstreamFetchError(f"Could not reach spreadsheet host: {exc}") from exc
        return response

    async def _fetch_export(self) -> Table:
        last_error: TableParseError | None = None
        async with self._client() as client:
            for fmt in EXPORT_FORMATS:
                response = await self._get(client, fmt.url(self.config))
                try:
                    if fmt.check_size and len(response.content) < self.config.min_payload_bytes:
                        raise TableParseError(f"{fmt.name} export too short ({len(response.content)} bytes)")
                    return fmt.parse(response.text)
                except TableParseError as exc:
                    logger.info("%s export unusable (%s), trying next format", fmt.name, exc)
                    last_error = exc

        raise last_error or TableParseError("No export formats configured")

    async def _fetch_values_api(self) -> Table:
        if not self.config.api_key:
            logger.info("Google Sheets API key not configured, using fallback reviews")
            return fallback_table()

        async with self._client() as client:
            response = await self._get(
                client,
                self.config.values_api_url,
                params={"key": self.config.api_key},
            )
        try:
            document = response.json()
        except ValueError as exc:
            raise TableParseError(f"Values API returned invalid JSON: {exc}") from exc
        return parse_values(document)

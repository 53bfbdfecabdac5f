from __future__ import annotations


class ReviewSourceError(Exception):
    """Base class for anything that stops a fresh review list from being built."""


class UpstreamFetchError(ReviewSourceError):
    """Network error, timeout or non-success status from the spreadsheet host."""


class TableParseError(ReviewSourceError):
    """The upstream payload could not be read as a table."""

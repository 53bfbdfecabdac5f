"""
Parsers for the spreadsheet export formats.

Each parser is a pure function from the raw response to a ``Table`` and
raises ``TableParseError`` when the payload is not in its format.
"""

from __future__ import annotations

import csv
import io
import json
import re
from typing import Any

from .errors import TableParseError
from .models import Table

# google.visualization.Query.setResponse({...});  (optionally behind a /*O_o*/ guard)
# Only the prefix is matched; the body is sliced up to the last ")".
_JSONP_PREFIX_RE = re.compile(r"\s*(?:/\*.*?\*/\s*)?[A-Za-z_$][\w$.]*\s*\(", re.DOTALL)


def _unwrap_jsonp(text: str) -> str:
    match = _JSONP_PREFIX_RE.match(text)
    end = text.rfind(")")
    if not match or end < match.end():
        raise TableParseError("JSON wrapper not found in export response")

    tail = text[end + 1:].strip()
    body = text[match.end():end].strip()
    if tail not in ("", ";") or not body.startswith("{"):
        raise TableParseError("JSON wrapper not found in export response")
    return body


def parse_gviz(text: str) -> Table:
    body = _unwrap_jsonp(text or "")

    try:
        document = json.loads(body)
    except (ValueError, RecursionError) as exc:
        # ValueError covers JSONDecodeError and the int-digits limit
        raise TableParseError(f"Invalid JSON in export response: {exc}") from exc

    if not isinstance(document, dict):
        raise TableParseError("Export response is not a JSON object")
    if document.get("status") == "error":
        reasons = [
            str(err.get("detailed_message") or err.get("reason") or "")
            for err in document.get("errors") or []
            if isinstance(err, dict)
        ]
        raise TableParseError("Export reported an error: " + ("; ".join(r for r in reasons if r) or "unknown"))

    table = document.get("table")
    if not isinstance(table, dict):
        raise TableParseError("Export response has no table")

    columns = [
        str(col.get("label") or "") if isinstance(col, dict) else ""
        for col in table.get("cols") or []
    ]
    rows: list[list[Any]] = []
    for row in table.get("rows") or []:
        cells = row.get("c") if isinstance(row, dict) else None
        rows.append([cell.get("v") if isinstance(cell, dict) else None for cell in cells or []])

    return Table(columns=columns, rows=rows)


def parse_csv(text: str) -> Table:
    """
    Parse a comma-separated export.

    The first non-blank record is the header. A document without at least
    one data record yields an empty table rather than an error.
    """
    if text.lstrip().startswith("<"):
        # A private or missing sheet answers with an HTML sign-in page.
        raise TableParseError("CSV export returned an HTML page")

    try:
        records = [
            record
            for record in csv.reader(io.StringIO(text))
            if any(cell.strip() for cell in record)
        ]
    except csv.Error as exc:
        raise TableParseError(f"Malformed CSV export: {exc}") from exc

    if len(records) < 2:
        return Table(columns=records[0] if records else [], rows=[])
    return Table(columns=records[0], rows=records[1:])


def parse_values(document: Any) -> Table:
    """Parse a Sheets values API response: ``{"values": [[header...], [row...], ...]}``."""
    if not isinstance(document, dict):
        raise TableParseError("Values API response is not a JSON object")

    values = document.get("values") or []
    if not isinstance(values, list) or not all(isinstance(row, list) for row in values):
        raise TableParseError("Values API response has no row list")
    if not values:
        return Table()

    return Table(columns=[str(label) for label in values[0]], rows=values[1:])

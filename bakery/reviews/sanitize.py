"""Text clean-up for spreadsheet cells before they are shown on the site.

``sanitize`` is a denylist strip, not an HTML sanitizer: it drops anything
shaped like a tag or a comment and normalises whitespace. Comment stripping
also eats legitimate ``//`` and ``/* */`` sequences in prose (URLs, emoticons);
that behaviour is kept on purpose until the site owner decides otherwise.

``looks_like_code`` is a display-quality filter for cells that contain pasted
script rather than a review. The site always renders reviews as plain text,
so neither function is a security boundary.
"""

from __future__ import annotations

import re

MAX_REVIEW_LENGTH = 800

_TAG_RE = re.compile(r"<[^>]*>")
_BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
_LINE_COMMENT_RE = re.compile(r"//[^\n]*")
_WHITESPACE_RE = re.compile(r"\s+")

_CODE_PATTERNS: list[re.Pattern[str]] = [
    re.compile(r"\bfunction\s*[\w$]*\s*\("),
    re.compile(r"\b(?:document|window)\.[A-Za-z_$]"),
    re.compile(r"(?:\([^()]*\)|\b[A-Za-z_$][\w$]*)\s*=>"),
    re.compile(r"[#@]\s*sourceMappingURL\s*="),
    re.compile(r"\bvar\s+[A-Za-z_$][\w$]*\s*[=;,]"),
]


def sanitize(text: str | None) -> str:
    if not text:
        return ""

    text = _TAG_RE.sub("", text)
    text = _BLOCK_COMMENT_RE.sub("", text)
    text = _LINE_COMMENT_RE.sub("", text)
    return _WHITESPACE_RE.sub(" ", text).strip()


def looks_like_code(text: str, max_length: int = MAX_REVIEW_LENGTH) -> bool:
    """Return True when *text* is too long or reads like JavaScript."""
    if len(text) > max_length:
        return True
    return any(pattern.search(text) for pattern in _CODE_PATTERNS)

"""
Text-related helpers.
"""

from __future__ import annotations

import hashlib
import re
import unicodedata

_SLUG_PATTERN = re.compile(r"[^a-z0-9]+")
_EXTERNAL_PREFIXES = ("http://", "https://", "//", "mailto:", "tel:", "javascript:", "#", "/")


def slugify(value: str) -> str:
    """
    Generate a filesystem-friendly slug.

    Uses hyphens as separators to reduce collisions.
    """
    raw = (value or "").strip().lower()
    folded = "".join(char for char in unicodedata.normalize("NFKD", raw) if not unicodedata.combining(char))
    slug = _SLUG_PATTERN.sub("-", folded).strip("-")
    if slug:
        return slug
    digest = hashlib.sha1(raw.encode("utf-8")).hexdigest()[:8]
    return f"item-{digest}"


def is_local_href(href: str) -> bool:
    """Return True for relative links that point at a page inside the site."""
    value = (href or "").strip()
    if not value:
        return False
    return not value.lower().startswith(_EXTERNAL_PREFIXES)

"""
Helpers for producing stable, unique identifiers for menu entries.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from .text import slugify


def generate_unique_slugs(labels: Sequence[str], explicit: Optional[Sequence[Optional[str]]] = None) -> List[str]:
    """
    Generate unique slugs for menu entries, in the same order as the inputs.

    Explicit ids win over labels. Repeated slugs get numeric suffixes
    ("news", "news-2", "news-3").
    """
    if explicit is not None and len(explicit) != len(labels):
        raise ValueError("labels and explicit ids must have the same length.")

    result: List[str] = []
    used: set[str] = set()
    for index, label in enumerate(labels):
        preferred = explicit[index] if explicit is not None else None
        base = slugify(preferred or label)
        candidate = base
        occurrence = 1
        while candidate in used:
            occurrence += 1
            candidate = f"{base}-{occurrence}"
        used.add(candidate)
        result.append(candidate)
    return result

"""
Shared utility helpers for filesystem writes and string handling.
"""

from .filesystem import write_text_file
from .text import slugify, is_local_href
from .naming import generate_unique_slugs

__all__ = [
    "write_text_file",
    "slugify",
    "is_local_href",
    "generate_unique_slugs",
]

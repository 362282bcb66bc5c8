"""
HTML rendering for the navigation bar and site pages.
"""

from .html import SitePage, build_page
from .nav import item_slugs, render_navbar, resolve_href

__all__ = ["SitePage", "build_page", "item_slugs", "render_navbar", "resolve_href"]

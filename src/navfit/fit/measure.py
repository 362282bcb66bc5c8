"""
Measurement phase: geometry queries against a layout engine.

A pass reads every width it needs before any mutation happens, so the engine
is asked to reflow once up front and the resulting numbers are used as-is.
"""

from __future__ import annotations

import logging
import unicodedata
from typing import List, Optional, Protocol, Tuple

from bs4 import Tag

from ..config import LayoutConfig
from ..util import generate_unique_slugs
from .dom import NavFitError, NavHandles, is_hidden, set_display
from .model import LayoutContext, NavItem

logger = logging.getLogger(__name__)

DEFAULT_BRAND_MARGIN = 120.0

# Advance widths as a fraction of the font size.
_ADVANCE_RATIOS = {
    "lower": 0.52,
    "upper": 0.66,
    "digit": 0.56,
    "space": 0.28,
    "narrow": 0.28,
    "other": 0.58,
}
_NARROW_CHARS = set("iljtf.,:;'|!()[]")


class ZeroWidthMeasurementError(NavFitError):
    """Raised when every nav item measures zero pixels wide."""


class LayoutEngine(Protocol):
    """Geometry provider for the document being fitted."""

    viewport_width: float

    def measure(self, element: Tag) -> float:
        ...

    def is_rendered(self, element: Tag) -> bool:
        ...

    def reflow(self) -> None:
        ...

    def resize(self, viewport_width: float) -> None:
        ...


def text_width(text: str, font_size: float) -> float:
    """Estimate the advance width of ``text`` in pixels."""
    total = 0.0
    for char in text:
        if unicodedata.east_asian_width(char) in ("W", "F"):
            total += 1.0
        elif char.isspace():
            total += _ADVANCE_RATIOS["space"]
        elif char in _NARROW_CHARS:
            total += _ADVANCE_RATIOS["narrow"]
        elif char.isdigit():
            total += _ADVANCE_RATIOS["digit"]
        elif char.isupper():
            total += _ADVANCE_RATIOS["upper"]
        elif char.islower():
            total += _ADVANCE_RATIOS["lower"]
        elif unicodedata.combining(char):
            continue
        else:
            total += _ADVANCE_RATIOS["other"]
    return round(total * font_size, 2)


class StaticLayout:
    """
    Text-metrics layout engine for a fixed viewport width.

    Widths are intrinsic (no wrapping). Hidden elements, or elements inside a
    hidden ancestor, measure zero like they would in a browser.
    """

    def __init__(self, settings: LayoutConfig, viewport_width: float, *, brand_logo_width: float = 0.0) -> None:
        self.settings = settings
        self.viewport_width = float(viewport_width)
        self.brand_logo_width = brand_logo_width
        self.reflows = 0

    def resize(self, viewport_width: float) -> None:
        self.viewport_width = float(viewport_width)

    def reflow(self) -> None:
        self.reflows += 1

    @property
    def collapsed(self) -> bool:
        return self.viewport_width <= self.settings.collapse_breakpoint

    def is_rendered(self, element: Tag) -> bool:
        node: Optional[Tag] = element
        while isinstance(node, Tag):
            if is_hidden(node):
                return False
            if "navbar-toggler" in (node.get("class") or []) and not self.collapsed:
                return False
            node = node.parent
        return True

    def measure(self, element: Tag) -> float:
        if not self.is_rendered(element):
            return 0.0
        classes = element.get("class") or []
        if "container-fluid" in classes or "container" in classes:
            return max(self.viewport_width - self.settings.container_padding, 0.0)
        if "navbar-brand" in classes:
            return self._brand_width(element)
        return self._inline_width(element)

    def _brand_width(self, element: Tag) -> float:
        font_size = self.settings.font_size * self.settings.brand_font_scale
        width = text_width(element.get_text(" ", strip=True), font_size)
        for image in element.find_all("img"):
            width += _numeric_attr(image, "width", self.brand_logo_width)
        return width

    def _inline_width(self, element: Tag) -> float:
        link = element if element.name == "a" else element.find("a")
        source = link if link is not None else element
        width = text_width(source.get_text(" ", strip=True), self.settings.font_size)
        width += self.settings.icon_width * len(source.find_all("i"))
        for image in source.find_all("img"):
            width += _numeric_attr(image, "width", 0.0)
        if "dropdown-toggle" in (source.get("class") or []):
            width += self.settings.caret_width
        if self.settings.item_padding and "nav-item" in (element.get("class") or []):
            width += self.settings.item_padding
        return round(width, 2)


def _numeric_attr(element: Tag, name: str, default: float) -> float:
    raw = element.get(name)
    if raw is None:
        return default
    try:
        return float(str(raw).strip().removesuffix("px"))
    except ValueError:
        return default


def measure_pass(
    handles: NavHandles,
    layout: LayoutEngine,
    *,
    brand_margin: float = DEFAULT_BRAND_MARGIN,
) -> Tuple[List[NavItem], LayoutContext]:
    """
    Read natural item widths and the space available for them.

    Items must already be in their natural (all visible) state.

    Raises:
        ZeroWidthMeasurementError: If every item measures zero.
    """
    container_width = layout.measure(handles.container)
    brand_width = layout.measure(handles.brand)
    available = container_width - brand_width - brand_margin

    items = read_nav_items(handles, layout)
    if items and all(item.rendered_width <= 0 for item in items):
        raise ZeroWidthMeasurementError(f"All {len(items)} nav items measured 0px")

    set_display(handles.more, "block")
    layout.reflow()
    more_width = layout.measure(handles.more)
    set_display(handles.more, "none")

    logger.debug(
        "Measured container=%.1f brand=%.1f available=%.1f more=%.1f",
        container_width,
        brand_width,
        available,
        more_width,
    )
    context = LayoutContext(available_width=available, more_button_width=more_width)
    return items, context


def read_nav_items(handles: NavHandles, layout: LayoutEngine) -> List[NavItem]:
    """Build NavItems from the item elements, measuring each one."""
    labels: List[str] = []
    hrefs: List[str] = []
    for element in handles.items:
        link = element.find("a")
        labels.append(link.get_text(" ", strip=True) if link is not None else element.get_text(" ", strip=True))
        hrefs.append(str(link.get("href", "#")) if link is not None else "#")
    ids = generate_unique_slugs(labels, [element.get("id") for element in handles.items])
    return [
        NavItem(id=item_id, label=label, href=href, rendered_width=layout.measure(element))
        for item_id, label, href, element in zip(ids, labels, hrefs, handles.items)
    ]

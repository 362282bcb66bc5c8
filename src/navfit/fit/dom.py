"""
DOM boundary: locating the navbar anchors and mutating them after a fit.

The document is a BeautifulSoup tree; visibility is expressed through the
inline ``display`` style kept in step with the ``hidden`` attribute, the same
way a browser script would toggle it.
"""

from __future__ import annotations

import copy
import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from bs4 import BeautifulSoup, Tag

from .model import FitResult

logger = logging.getLogger(__name__)

_DISPLAY_PATTERN = re.compile(r"(?:^|;)\s*display\s*:\s*([^;]+)", re.IGNORECASE)
_NAV_ONLY_CLASSES = frozenset({"nav-link", "dropdown-toggle"})
_NAV_ONLY_ATTRS = ("id", "data-bs-toggle", "data-toggle", "aria-expanded", "aria-haspopup", "role")


class NavFitError(RuntimeError):
    """Base class for fit pass failures that are absorbed by the fitter."""


class MissingElementError(NavFitError):
    """Raised when a required navbar anchor cannot be found in the document."""


@dataclass(frozen=True)
class Selectors:
    """
    CSS selectors for the navbar anchors.

    Defaults match Bootstrap-style markup with a ``#main-nav-list`` item list.
    """
    nav_list: str = "#main-nav-list"
    more: str = ".nav-item.dropdown"
    menu: str = ".dropdown-menu"
    toggler: str = ".navbar-toggler"
    container: str = ".navbar .container-fluid"
    brand: str = ".navbar-brand"
    item_class: str = "nav-item"


DEFAULT_SELECTORS = Selectors()


@dataclass
class NavHandles:
    soup: BeautifulSoup
    nav_list: Tag
    items: List[Tag]
    more: Tag
    menu: Tag
    toggler: Tag
    container: Tag
    brand: Tag


def locate_handles(soup: BeautifulSoup, selectors: Selectors = DEFAULT_SELECTORS) -> NavHandles:
    """
    Find every anchor a fit pass needs.

    Raises:
        MissingElementError: If any anchor is absent.
    """
    nav_list = _require(soup, selectors.nav_list, "navigation list")
    more = _require(nav_list, selectors.more, "overflow dropdown")
    menu = _require(more, selectors.menu, "overflow menu")
    toggler = _require(soup, selectors.toggler, "navbar toggler")
    container = _require(soup, selectors.container, "navbar container")
    brand = _require(soup, selectors.brand, "navbar brand")

    items = [
        child
        for child in nav_list.find_all("li", recursive=False)
        if selectors.item_class in (child.get("class") or []) and child is not more
    ]
    return NavHandles(
        soup=soup,
        nav_list=nav_list,
        items=items,
        more=more,
        menu=menu,
        toggler=toggler,
        container=container,
        brand=brand,
    )


def _require(root: Tag, selector: str, label: str) -> Tag:
    found = root.select_one(selector)
    if found is None:
        raise MissingElementError(f"No {label} matches '{selector}'")
    return found


def get_display(element: Tag) -> Optional[str]:
    """Return the inline ``display`` value of an element, if any."""
    match = _DISPLAY_PATTERN.search(element.get("style") or "")
    if match is None:
        return None
    return match.group(1).strip().lower()


def set_display(element: Tag, value: Optional[str]) -> None:
    """
    Set (or with ``None`` remove) the inline ``display`` value of an element.

    ``none`` also sets the ``hidden`` attribute; any other value clears it.
    """
    declarations = [
        part.strip()
        for part in (element.get("style") or "").split(";")
        if part.strip() and not part.strip().lower().startswith("display")
    ]
    if value:
        declarations.append(f"display: {value}")
    if declarations:
        element["style"] = "; ".join(declarations)
    elif element.has_attr("style"):
        del element["style"]
    if value == "none":
        element["hidden"] = ""
    elif value and element.has_attr("hidden"):
        del element["hidden"]


def is_hidden(element: Tag) -> bool:
    """True when the element itself is hidden by inline style or ``hidden``."""
    return element.has_attr("hidden") or get_display(element) == "none"


def show_all(handles: NavHandles) -> None:
    """Natural layout: every item visible, the overflow trigger hidden and empty."""
    handles.menu.clear()
    for element in handles.items:
        set_display(element, "block")
    set_display(handles.more, "none")


def apply_fit(fit: FitResult, handles: NavHandles) -> None:
    """
    Reflect ``fit`` in the document.

    Shows the visible prefix, hides the rest, rebuilds the overflow menu from
    clones of the collapsed links and toggles the trigger. Applying the same
    result twice leaves the document unchanged.
    """
    if fit.total != len(handles.items):
        raise ValueError(
            f"Fit covers {fit.total} items but the navigation list has {len(handles.items)}."
        )

    handles.menu.clear()
    for index, element in enumerate(handles.items):
        set_display(element, "block" if index < fit.visible_count else "none")

    for element in handles.items[fit.visible_count:]:
        entry = _build_menu_entry(handles.soup, element)
        if entry is not None:
            handles.menu.append(entry)

    set_display(handles.more, "block" if fit.has_overflow else "none")


def _build_menu_entry(soup: BeautifulSoup, element: Tag) -> Optional[Tag]:
    link = element.find("a")
    if link is None:
        logger.debug("Nav item without a link skipped: %s", element.get("id"))
        return None

    entry = soup.new_tag("li")
    entry.append(_as_dropdown_link(link))

    submenu = element.find("ul")
    if submenu is not None:
        entry["class"] = ["dropdown-submenu"]
        nested = soup.new_tag("ul", attrs={"class": "dropdown-menu"})
        for child_link in submenu.find_all("a"):
            child_entry = soup.new_tag("li")
            child_entry.append(_as_dropdown_link(child_link))
            nested.append(child_entry)
        entry.append(nested)
    return entry


def _as_dropdown_link(link: Tag) -> Tag:
    clone = copy.copy(link)
    classes = [name for name in (clone.get("class") or []) if name not in _NAV_ONLY_CLASSES]
    if "dropdown-item" not in classes:
        classes.append("dropdown-item")
    clone["class"] = classes
    for name in _NAV_ONLY_ATTRS:
        if clone.has_attr(name):
            del clone[name]
    return clone

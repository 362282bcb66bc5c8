"""
Pure decision logic: how many leading nav items fit inline.
"""

from __future__ import annotations

from typing import Sequence

from .model import FitResult, NavItem

DEFAULT_SAFETY_MARGIN = 40.0
# A "More" control must hide at least this many items to be worth its width.
MIN_COLLAPSED_ITEMS = 2


def compute_fit(
    items: Sequence[NavItem],
    available_width: float,
    more_button_width: float,
    *,
    safety_margin: float = DEFAULT_SAFETY_MARGIN,
) -> FitResult:
    """
    Split ``items`` into a visible prefix and an overflow tail.

    Args:
        items: Ordered nav items with measured ``rendered_width``.
        available_width: Pixels available in the bar, net of the brand.
        more_button_width: Pixels taken by the "More" trigger when shown.
        safety_margin: Extra pixels reserved when the trigger is shown.

    Returns:
        A FitResult whose visible and overflow counts add up to ``len(items)``.
    """
    items = tuple(items)
    count = len(items)
    widths = [max(float(item.rendered_width), 0.0) for item in items]

    if count == 0 or sum(widths) <= available_width:
        return FitResult(visible_count=count)

    if available_width <= 0:
        visible = 0
    else:
        budget = available_width - more_button_width - safety_margin
        visible = _longest_fitting_prefix(widths, budget)

    if count >= MIN_COLLAPSED_ITEMS:
        ceiling = count - MIN_COLLAPSED_ITEMS
        if visible > ceiling:
            visible = ceiling
        elif available_width > 0:
            # Keep the first entry inline while the menu still hides two or more.
            visible = max(visible, min(1, ceiling))

    return FitResult(visible_count=visible, overflow_items=items[visible:])


def _longest_fitting_prefix(widths: Sequence[float], budget: float) -> int:
    used = 0.0
    for index, width in enumerate(widths):
        used += width
        if used > budget:
            return index
    return len(widths)

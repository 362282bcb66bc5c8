"""
Value types shared by the measurement, fitting and mutation phases.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass
class NavItem:
    """
    One top-level navigation entry as seen by a fit pass.

    Attributes:
        id: Stable identifier of the entry.
        label: Visible text of the entry.
        href: Link target.
        rendered_width: Intrinsic width in pixels, re-measured every pass.
    """
    id: str
    label: str
    href: str
    rendered_width: float = 0.0


@dataclass(frozen=True)
class FitResult:
    """
    Outcome of fitting items into a bar: a visible prefix and the collapsed rest.
    """
    visible_count: int
    overflow_items: Tuple[NavItem, ...] = ()

    @property
    def has_overflow(self) -> bool:
        return bool(self.overflow_items)

    @property
    def total(self) -> int:
        return self.visible_count + len(self.overflow_items)


@dataclass(frozen=True)
class LayoutContext:
    """
    Geometry captured at the start of a pass.

    Attributes:
        available_width: Pixels available for items, net of brand and safety margin.
        more_button_width: Pixels used by the "More" trigger when shown.
        collapse_breakpoint: True when the toggler (mobile layout) is in control.
    """
    available_width: float
    more_button_width: float
    collapse_breakpoint: bool = False


class FitPhase(str, Enum):
    IDLE = "idle"
    MEASURING = "measuring"
    COMPUTING = "computing"
    MUTATING = "mutating"


class PassStatus(str, Enum):
    APPLIED = "applied"
    MISSING_ELEMENT = "missing-element"
    ZERO_WIDTH = "zero-width"
    MOBILE_MODE = "mobile-mode"
    FAILED = "failed"


@dataclass
class PassReport:
    """
    Stores what happened during one measure/compute/mutate cycle.
    """
    status: PassStatus
    items: Tuple[NavItem, ...] = ()
    context: Optional[LayoutContext] = None
    fit: Optional[FitResult] = None
    detail: str = ""
    visible_labels: Tuple[str, ...] = field(default=())

    @property
    def overflow_labels(self) -> Tuple[str, ...]:
        if self.fit is None:
            return ()
        return tuple(item.label for item in self.fit.overflow_items)

    def summary_rows(self):
        yield ("Status", self.status.value)
        if self.context is not None:
            yield ("Available width", f"{self.context.available_width:.1f}px")
            yield ("More button width", f"{self.context.more_button_width:.1f}px")
        if self.fit is not None:
            yield ("Visible items", str(self.fit.visible_count))
            yield ("Overflow items", str(len(self.fit.overflow_items)))
        if self.detail:
            yield ("Detail", self.detail)

"""
NavFitter: wires triggers to the measure → compute → mutate cycle.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from bs4 import BeautifulSoup

from ..config import SiteConfig
from .algorithm import DEFAULT_SAFETY_MARGIN, compute_fit
from .debounce import Debouncer
from .dom import DEFAULT_SELECTORS, MissingElementError, NavHandles, Selectors, apply_fit, locate_handles, show_all
from .measure import DEFAULT_BRAND_MARGIN, LayoutEngine, StaticLayout, ZeroWidthMeasurementError, measure_pass, read_nav_items
from .model import FitPhase, LayoutContext, PassReport, PassStatus

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.05


class NavFitter:
    """
    Keep a navigation bar's inline items in step with the available width.

    Passes never raise: anchors missing from the document, transient zero-width
    measurements and the mobile (toggler) layout are all reported through the
    returned PassReport and logged.
    """

    def __init__(
        self,
        soup: BeautifulSoup,
        layout: LayoutEngine,
        *,
        selectors: Selectors = DEFAULT_SELECTORS,
        safety_margin: float = DEFAULT_SAFETY_MARGIN,
        brand_margin: float = DEFAULT_BRAND_MARGIN,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        timer_factory: Callable[..., Any] = threading.Timer,
    ) -> None:
        self.soup = soup
        self.layout = layout
        self.selectors = selectors
        self.safety_margin = safety_margin
        self.brand_margin = brand_margin
        self.phase = FitPhase.IDLE
        self.passes = 0
        self.last_report: Optional[PassReport] = None
        self._lock = threading.Lock()
        self._debouncer = Debouncer(self.update, debounce_seconds, timer_factory=timer_factory)

    @classmethod
    def from_config(
        cls,
        soup: BeautifulSoup,
        config: SiteConfig,
        *,
        viewport_width: Optional[float] = None,
        **kwargs: Any,
    ) -> "NavFitter":
        settings = config.layout
        width = viewport_width if viewport_width is not None else settings.design_width
        layout = StaticLayout(settings, width, brand_logo_width=config.brand_logo_width)
        return cls(
            soup,
            layout,
            safety_margin=settings.overflow_safety_margin,
            brand_margin=settings.brand_safety_margin,
            debounce_seconds=settings.debounce_ms / 1000.0,
            **kwargs,
        )

    def on_load(self) -> PassReport:
        """First pass after the document is ready; runs immediately."""
        return self.update()

    def on_resize(self, viewport_width: float) -> None:
        """Record the new viewport width and schedule a debounced pass."""
        with self._lock:
            self.layout.resize(viewport_width)
        self._debouncer.trigger()

    @property
    def pending(self) -> bool:
        return self._debouncer.pending

    def settle(self) -> Optional[PassReport]:
        """Run a pending debounced pass now; returns its report, if any."""
        return self._debouncer.flush()

    def close(self) -> None:
        self._debouncer.cancel()

    def update(self) -> PassReport:
        """Run one full pass and return what happened."""
        with self._lock:
            self.passes += 1
            try:
                handles = locate_handles(self.soup, self.selectors)
            except MissingElementError as exc:
                logger.warning("Navigation fit disabled: %s", exc)
                report = PassReport(status=PassStatus.MISSING_ELEMENT, detail=str(exc))
            except Exception as exc:
                logger.exception("Navigation anchors could not be located")
                report = PassReport(status=PassStatus.FAILED, detail=str(exc))
            else:
                try:
                    report = self._run_pass(handles)
                except ZeroWidthMeasurementError as exc:
                    logger.info("Skipping navigation fit pass: %s", exc)
                    report = PassReport(status=PassStatus.ZERO_WIDTH, detail=str(exc))
                except Exception as exc:
                    logger.exception("Navigation fit pass failed")
                    report = PassReport(status=PassStatus.FAILED, detail=str(exc))
            finally:
                self.phase = FitPhase.IDLE
            self.last_report = report
            return report

    def _run_pass(self, handles: NavHandles) -> PassReport:
        self.phase = FitPhase.MEASURING
        if self.layout.is_rendered(handles.toggler):
            show_all(handles)
            items = tuple(read_nav_items(handles, self.layout))
            logger.debug("Toggler visible at %.0fpx; showing all %d items", self.layout.viewport_width, len(items))
            return PassReport(
                status=PassStatus.MOBILE_MODE,
                items=items,
                context=LayoutContext(available_width=0.0, more_button_width=0.0, collapse_breakpoint=True),
                visible_labels=tuple(item.label for item in items),
            )

        show_all(handles)
        self.layout.reflow()
        items, context = measure_pass(handles, self.layout, brand_margin=self.brand_margin)

        self.phase = FitPhase.COMPUTING
        fit = compute_fit(items, context.available_width, context.more_button_width, safety_margin=self.safety_margin)

        self.phase = FitPhase.MUTATING
        apply_fit(fit, handles)
        logger.debug(
            "Fit at %.0fpx: %d visible, %d in overflow",
            self.layout.viewport_width,
            fit.visible_count,
            len(fit.overflow_items),
        )
        return PassReport(
            status=PassStatus.APPLIED,
            items=tuple(items),
            context=context,
            fit=fit,
            visible_labels=tuple(item.label for item in items[: fit.visible_count]),
        )

"""
Navigation overflow fitting: pure fit decision, measurement and DOM mutation.
"""

from .algorithm import DEFAULT_SAFETY_MARGIN, compute_fit
from .debounce import Debouncer
from .dom import (
    DEFAULT_SELECTORS,
    MissingElementError,
    NavFitError,
    NavHandles,
    Selectors,
    apply_fit,
    locate_handles,
    show_all,
)
from .fitter import NavFitter
from .measure import LayoutEngine, StaticLayout, ZeroWidthMeasurementError, measure_pass, text_width
from .model import FitPhase, FitResult, LayoutContext, NavItem, PassReport, PassStatus

__all__ = [
    "DEFAULT_SAFETY_MARGIN",
    "DEFAULT_SELECTORS",
    "Debouncer",
    "FitPhase",
    "FitResult",
    "LayoutContext",
    "LayoutEngine",
    "MissingElementError",
    "NavFitError",
    "NavFitter",
    "NavHandles",
    "NavItem",
    "PassReport",
    "PassStatus",
    "Selectors",
    "StaticLayout",
    "ZeroWidthMeasurementError",
    "apply_fit",
    "compute_fit",
    "locate_handles",
    "measure_pass",
    "show_all",
    "text_width",
]

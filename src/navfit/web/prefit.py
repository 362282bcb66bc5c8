"""
Run a single fit pass over an HTML document.
"""

from __future__ import annotations

import logging
from typing import Optional, Tuple

from bs4 import BeautifulSoup

from ..config import SiteConfig
from ..fit import NavFitter, PassReport, PassStatus

logger = logging.getLogger(__name__)


def fit_document(markup: str, config: SiteConfig, *, viewport_width: Optional[float] = None) -> Tuple[str, PassReport]:
    """
    Fit the navigation bar in ``markup`` for ``viewport_width``.

    Args:
        markup: Full HTML document or fragment containing the navbar.
        config: Site configuration providing the layout tunables.
        viewport_width: Viewport width in pixels (defaults to the design width).

    Returns:
        The serialized document and the report of the pass. Documents without
        a recognisable navbar come back unchanged.
    """
    soup = BeautifulSoup(markup, "html.parser")
    fitter = NavFitter.from_config(soup, config, viewport_width=viewport_width)
    try:
        report = fitter.on_load()
    finally:
        fitter.close()
    logger.debug("Prefit at %.0fpx finished with status %s", fitter.layout.viewport_width, report.status.value)
    if report.status is PassStatus.MISSING_ELEMENT:
        return markup, report
    return str(soup), report

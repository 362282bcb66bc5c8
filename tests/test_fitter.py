import logging

import pytest
from bs4 import BeautifulSoup

from navfit.config import LayoutConfig, SiteConfig
from navfit.fit import FitPhase, NavFitter, PassStatus, StaticLayout
from navfit.fit.dom import Selectors, get_display, is_hidden
from navfit.render import render_navbar


class FixedLayout:
    """Layout engine returning preset widths, for exercising the fitter alone."""

    def __init__(self, item_width=100.0, container=700.0, brand=100.0, more=80.0, mobile=False):
        self.viewport_width = container
        self.item_width = item_width
        self.container = container
        self.brand = brand
        self.more = more
        self.mobile = mobile
        self.reflows = 0

    def resize(self, viewport_width):
        self.viewport_width = viewport_width
        self.container = viewport_width

    def reflow(self):
        self.reflows += 1

    def is_rendered(self, element):
        node = element
        while node is not None and node.name != "[document]":
            if is_hidden(node):
                return False
            if "navbar-toggler" in (node.get("class") or []):
                return self.mobile
            node = node.parent
        return True

    def measure(self, element):
        if not self.is_rendered(element):
            return 0.0
        classes = element.get("class") or []
        if "container-fluid" in classes:
            return self.container
        if "navbar-brand" in classes:
            return self.brand
        if "dropdown" in classes:
            return self.more
        return self.item_width


class _NoopTimer:
    daemon = False

    def start(self):
        pass

    def cancel(self):
        pass


LABELS = ["Home", "News", "Admissions", "Academics", "Staff", "Contact"]


def _fitter(navbar_factory, layout, **kwargs):
    return NavFitter(navbar_factory(LABELS), layout, brand_margin=0, safety_margin=40, **kwargs)


def _visible(fitter):
    return [
        li.find("a").get_text(strip=True)
        for li in fitter.soup.find(id="main-nav-list").find_all("li", class_="nav-item", recursive=False)
        if get_display(li) == "block" and "dropdown" not in li["class"]
    ]


def test_fast_path_shows_everything(navbar_factory) -> None:
    # 100 brand + 600 items fit in 750.
    fitter = _fitter(navbar_factory, FixedLayout(container=750))

    report = fitter.on_load()

    assert report.status is PassStatus.APPLIED
    assert report.fit.visible_count == 6
    assert _visible(fitter) == LABELS
    assert get_display(fitter.soup.select_one(".nav-item.dropdown")) == "none"
    assert fitter.phase is FitPhase.IDLE


def test_collapses_into_more_menu(navbar_factory) -> None:
    # available 500 - 100 brand = 400; budget 400 - 80 - 40 = 280.
    fitter = _fitter(navbar_factory, FixedLayout(container=500))

    report = fitter.on_load()

    assert report.fit.visible_count == 2
    assert report.visible_labels == ("Home", "News")
    assert report.overflow_labels == ("Admissions", "Academics", "Staff", "Contact")
    menu_links = [a.get_text(strip=True) for a in fitter.soup.select(".dropdown-menu a")]
    assert menu_links == ["Admissions", "Academics", "Staff", "Contact"]


def test_mobile_layout_bypasses_fit(navbar_factory) -> None:
    fitter = _fitter(navbar_factory, FixedLayout(container=300, mobile=True))

    report = fitter.on_load()

    assert report.status is PassStatus.MOBILE_MODE
    assert report.fit is None
    assert report.context.collapse_breakpoint is True
    assert _visible(fitter) == LABELS
    assert fitter.soup.select(".dropdown-menu a") == []


def test_missing_anchor_logs_warning_and_leaves_document(caplog: pytest.LogCaptureFixture) -> None:
    soup = BeautifulSoup('<nav class="navbar"><ul id="main-nav-list"><li class="nav-item"><a>Home</a></li></ul></nav>', "html.parser")
    before = str(soup)
    fitter = NavFitter(soup, FixedLayout())

    caplog.set_level(logging.WARNING)
    report = fitter.on_load()

    assert report.status is PassStatus.MISSING_ELEMENT
    assert "Navigation fit disabled" in caplog.text
    assert str(soup) == before


def test_zero_width_pass_is_skipped(navbar_factory) -> None:
    fitter = _fitter(navbar_factory, FixedLayout(item_width=0.0, container=200))

    report = fitter.on_load()

    assert report.status is PassStatus.ZERO_WIDTH
    assert report.fit is None
    assert fitter.soup.select(".dropdown-menu a") == []
    assert fitter.phase is FitPhase.IDLE


def test_unexpected_errors_are_absorbed(navbar_factory, caplog: pytest.LogCaptureFixture) -> None:
    class BrokenLayout(FixedLayout):
        def measure(self, element):
            raise RuntimeError("layout engine unavailable")

    fitter = _fitter(navbar_factory, BrokenLayout())

    caplog.set_level(logging.ERROR)
    report = fitter.on_load()

    assert report.status is PassStatus.FAILED
    assert "layout engine unavailable" in report.detail
    assert "Navigation fit pass failed" in caplog.text
    assert fitter.phase is FitPhase.IDLE


def test_locate_errors_are_absorbed(navbar_factory, caplog: pytest.LogCaptureFixture) -> None:
    fitter = _fitter(navbar_factory, FixedLayout(), selectors=Selectors(nav_list="#main-nav-list[["))

    caplog.set_level(logging.ERROR)
    report = fitter.on_load()

    assert report.status is PassStatus.FAILED
    assert "Navigation anchors could not be located" in caplog.text
    assert fitter.phase is FitPhase.IDLE


def test_hidden_trigger_is_revealed_when_items_overflow(navbar_factory) -> None:
    soup = navbar_factory(LABELS)
    more = soup.select_one(".nav-item.dropdown")
    del more["style"]
    more["hidden"] = ""
    fitter = NavFitter(soup, FixedLayout(container=500), brand_margin=0, safety_margin=40)

    report = fitter.on_load()

    assert report.status is PassStatus.APPLIED
    assert report.context.more_button_width == 80
    assert report.fit.has_overflow
    assert not more.has_attr("hidden")
    assert len(soup.select(".dropdown-menu a")) == len(report.fit.overflow_items)


def test_resize_waits_for_running_pass(navbar_factory) -> None:
    class LockCheckingLayout(FixedLayout):
        def resize(self, viewport_width):
            self.locked_during_resize = fitter._lock.locked()
            super().resize(viewport_width)

    layout = LockCheckingLayout()
    fitter = _fitter(navbar_factory, layout, timer_factory=lambda wait, func: _NoopTimer())

    fitter.on_resize(900)

    assert layout.locked_during_resize is True
    assert layout.viewport_width == 900


def test_resize_is_debounced_into_one_pass(navbar_factory) -> None:
    timers = []

    class ManualTimer:
        def __init__(self, interval, function):
            self.function = function
            self.cancelled = False
            self.daemon = False
            timers.append(self)

        def start(self):
            pass

        def cancel(self):
            self.cancelled = True

    fitter = _fitter(navbar_factory, FixedLayout(container=900), timer_factory=ManualTimer)
    fitter.on_load()

    for width in (850, 700, 600, 500):
        fitter.on_resize(width)

    assert fitter.passes == 1
    assert fitter.pending
    timers[-1].function()
    assert fitter.passes == 2
    assert fitter.last_report.fit.visible_count == 2
    assert not fitter.pending


def test_repeated_passes_do_not_duplicate_menu_entries(navbar_factory) -> None:
    fitter = _fitter(navbar_factory, FixedLayout(container=500))

    fitter.on_load()
    fitter.update()
    fitter.update()

    assert len(fitter.soup.select(".dropdown-menu > li")) == 4


def test_growing_viewport_restores_items(navbar_factory) -> None:
    fitter = _fitter(navbar_factory, FixedLayout(container=500))
    fitter.on_load()

    fitter.on_resize(1000)
    report = fitter.settle()

    assert report.fit.visible_count == 6
    assert _visible(fitter) == LABELS
    assert fitter.soup.select(".dropdown-menu a") == []


def test_from_config_uses_layout_settings() -> None:
    config = SiteConfig(
        brand="Central",
        items=[{"label": label} for label in LABELS],
        layout=LayoutConfig(overflow_safety_margin=25, brand_safety_margin=90, debounce_ms=75, design_width=1440),
    )
    soup = BeautifulSoup(render_navbar(config), "html.parser")

    fitter = NavFitter.from_config(soup, config)

    assert isinstance(fitter.layout, StaticLayout)
    assert fitter.layout.viewport_width == 1440
    assert fitter.safety_margin == 25
    assert fitter.brand_margin == 90
    assert fitter._debouncer.wait == pytest.approx(0.075)


def test_static_layout_end_to_end(site_config: SiteConfig) -> None:
    soup = BeautifulSoup(render_navbar(site_config), "html.parser")
    fitter = NavFitter.from_config(soup, site_config, viewport_width=4000)

    wide = fitter.on_load()
    fitter.on_resize(1100)
    narrow = fitter.settle()
    fitter.on_resize(800)
    mobile = fitter.settle()
    fitter.close()

    assert wide.status is PassStatus.APPLIED
    assert wide.fit.overflow_items == ()
    assert narrow.status is PassStatus.APPLIED
    assert len(narrow.fit.overflow_items) >= 2
    assert narrow.fit.visible_count + len(narrow.fit.overflow_items) == len(site_config.items)
    assert mobile.status is PassStatus.MOBILE_MODE
    assert all(not is_hidden(li) for li in fitter.soup.select("#main-nav-list > li.nav-item:not(.dropdown)"))

"""
Generate the page structure for every entry in the navigation menu.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path, PurePosixPath
from typing import Dict, Iterable, Iterator, List, Optional, Tuple

from ..config import NavLinkConfig, SiteConfig, get_settings
from ..fit import PassStatus
from ..render import SitePage, build_page, render_navbar
from ..util import is_local_href, write_text_file
from .prefit import fit_document

logger = logging.getLogger(__name__)

DEFAULT_WEB_ROOT = Path("outputs/site")
FAVICON_FILENAME = "favicon.svg"
FAVICON_SVG = """<svg xmlns="http://www.w3.org/2000/svg" width="64" height="64" viewBox="0 0 64 64" role="img" aria-label="Site favicon">
  <rect x="4" y="4" width="56" height="56" rx="12" fill="#0a2a43"/>
  <rect x="14" y="20" width="36" height="5" rx="2" fill="#ffffff"/>
  <rect x="14" y="30" width="36" height="5" rx="2" fill="#ffffff"/>
  <rect x="14" y="40" width="22" height="5" rx="2" fill="#dbe9f5"/>
</svg>
"""


@dataclass
class ScaffoldReport:
    """
    Stores what changed when scaffolding ran.

    Attributes:
        root: The root directory of the web output.
        viewport_width: Viewport width the navigation was prefit for.
        directories_created: List of newly created folders.
        pages_written: List of newly written pages.
        pages_skipped: List of skipped pages (already existed).
        fit_statuses: Fit pass status per written page.
        menu_written: True if the home page was updated.
    """
    root: Path
    viewport_width: float = 0.0
    directories_created: List[Path] = field(default_factory=list)
    pages_written: List[Path] = field(default_factory=list)
    pages_skipped: List[Path] = field(default_factory=list)
    fit_statuses: Dict[Path, PassStatus] = field(default_factory=dict)
    menu_written: bool = False

    def summary_rows(self) -> Iterable[tuple[str, str]]:
        yield ("Root", str(self.root))
        yield ("Viewport width", f"{self.viewport_width:.0f}px")
        yield ("Directories created", str(len(self.directories_created)))
        yield ("Pages written", str(len(self.pages_written)))
        yield ("Pages skipped", str(len(self.pages_skipped)))
        applied = sum(1 for status in self.fit_statuses.values() if status is PassStatus.APPLIED)
        yield ("Navigation prefit", f"{applied}/{len(self.fit_statuses)}")
        yield ("Menu updated", "yes" if self.menu_written else "no")


def resolve_web_root(config: SiteConfig) -> Path:
    """
    Determine the absolute path to the web root directory.

    Args:
        config: The site configuration.

    Returns:
        Absolute Path object for the web root.
    """
    root = config.web_root or get_settings().web_root or DEFAULT_WEB_ROOT
    return Path(root).expanduser().resolve()


def ensure_directory(path: Path, report: ScaffoldReport) -> None:
    """
    Create a directory if it doesn't exist and record the action.
    """
    if not path.exists():
        path.mkdir(parents=True, exist_ok=True)
        report.directories_created.append(path)


def write_favicon(root: Path, force: bool) -> None:
    """
    Write the default favicon to the web root unless it already exists.
    """
    target = root / FAVICON_FILENAME
    if target.exists() and not force:
        return
    write_text_file(target, FAVICON_SVG)


def iter_local_pages(items: List[NavLinkConfig]) -> Iterator[Tuple[NavLinkConfig, PurePosixPath]]:
    """
    Yield every menu entry (children included) that links to a page in the site.

    Directory links ("news/") map to their index.html; the home page is skipped.
    """
    for item in items:
        if is_local_href(item.href):
            href = item.href.split("#", 1)[0].split("?", 1)[0]
            if href.endswith("/"):
                href = f"{href}index.html"
            relative = PurePosixPath(href)
            if ".." in relative.parts:
                logger.warning("Skipping menu entry '%s': %s leaves the web root.", item.label, item.href)
            elif relative != PurePosixPath("index.html"):
                yield item, relative
        yield from iter_local_pages(item.children)


def _base_for(relative: PurePosixPath) -> str:
    return "../" * (len(relative.parts) - 1)


def write_page(
    config: SiteConfig,
    root: Path,
    relative: PurePosixPath,
    title: str,
    *,
    viewport_width: float,
    force: bool,
    report: ScaffoldReport,
) -> None:
    """
    Write one page with its navigation prefit, unless it exists and ``force`` is off.
    """
    target = root.joinpath(*relative.parts)
    if target.exists() and not force:
        report.pages_skipped.append(target)
        return
    ensure_directory(target.parent, report)
    base = _base_for(relative)
    page = SitePage(
        title=title if title == config.site_title else f"{title} | {config.site_title}",
        heading=title,
        navbar_html=render_navbar(config, base=base),
        favicon_href=f"{base}{FAVICON_FILENAME}",
    )
    markup, fit_report = fit_document(build_page(page), config, viewport_width=viewport_width)
    write_text_file(target, markup)
    report.pages_written.append(target)
    report.fit_statuses[target] = fit_report.status


def generate_site_structure(
    config: SiteConfig,
    *,
    force: bool = False,
    viewport_width: Optional[float] = None,
) -> ScaffoldReport:
    """
    Ensure a page exists for every local menu entry and refresh the home page.

    Args:
        config: The site configuration.
        force: If True, overwrite existing pages.
        viewport_width: Width to prefit the navigation for (defaults to the design width).

    Returns:
        A ScaffoldReport detailing the actions taken.
    """
    width = float(viewport_width or config.layout.design_width)
    root = resolve_web_root(config)
    report = ScaffoldReport(root=root, viewport_width=width)
    ensure_directory(root, report)
    write_favicon(root, force)

    seen: set[PurePosixPath] = set()
    for item, relative in iter_local_pages(config.items):
        if relative in seen:
            continue
        seen.add(relative)
        write_page(config, root, relative, item.label, viewport_width=width, force=force, report=report)

    write_page(
        config,
        root,
        PurePosixPath("index.html"),
        config.site_title,
        viewport_width=width,
        force=True,
        report=report,
    )
    report.menu_written = True
    logger.info("Scaffolded %d page(s) under %s", len(report.pages_written), root)
    return report

"""
Command line interface for the navigation fitter.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import List, Optional

import typer
from bs4 import BeautifulSoup
from rich.console import Console
from rich.table import Table

from . import __version__
from .config import ConfigError, SiteConfig, get_settings, load_config
from .fit import NavFitter, PassReport, PassStatus
from .render import render_navbar
from .util import write_text_file
from .web import ScaffoldReport, fit_document, generate_site_structure

console = Console()
app = typer.Typer(help="Fit navigation bars into the available width and build the site around them.")
logger = logging.getLogger(__name__)

LOG_LEVELS = ["critical", "error", "warning", "info", "debug"]


def _configure_logging(level_name: str) -> None:
    try:
        env_override = get_settings().log_level
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc
    level_str = (env_override or level_name or "info").upper()
    if level_str not in {lvl.upper() for lvl in LOG_LEVELS}:
        level_str = "INFO"
    logging.basicConfig(
        level=getattr(logging, level_str, logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    logger.debug("Logging configured at %s", level_str)


def _resolve_config_path(value: Path) -> Path:
    """Ensure config path exists and return absolute path."""
    resolved = value.expanduser().resolve()
    if not resolved.exists():
        raise typer.BadParameter(f"No config file found at {resolved}")
    if not resolved.is_file():
        raise typer.BadParameter(f"Config path must be a file, got directory: {resolved}")
    return resolved


def _load_config_or_exit(path: Path) -> SiteConfig:
    try:
        return load_config(path)
    except ConfigError as exc:
        console.print(f"[bold red]Configuration error:[/] {exc}")
        raise typer.Exit(code=1) from exc


def _default_width(config: SiteConfig, width: Optional[int]) -> int:
    if width is not None:
        return width
    return get_settings().viewport_width or config.layout.design_width


def _print_pass_report(report: PassReport, title: str) -> None:
    table = Table(title=title)
    table.add_column("Key")
    table.add_column("Value", overflow="fold")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)

    if not report.items:
        return
    items_table = Table(title="Navigation Items")
    items_table.add_column("#", justify="right")
    items_table.add_column("Label")
    items_table.add_column("Width", justify="right")
    items_table.add_column("Placement")
    visible = report.fit.visible_count if report.fit is not None else len(report.items)
    for index, item in enumerate(report.items, start=1):
        placement = "[yellow]more[/]" if index > visible else "[green]inline[/]"
        items_table.add_row(str(index), item.label, f"{item.rendered_width:.1f}", placement)
    console.print(items_table)


def _print_scaffold_report(report: ScaffoldReport) -> None:
    table = Table(title="Scaffold Summary")
    table.add_column("Key")
    table.add_column("Value")
    for key, value in report.summary_rows():
        table.add_row(key, value)
    console.print(table)


def _parse_widths(raw: str) -> List[int]:
    widths: List[int] = []
    for chunk in raw.split(","):
        chunk = chunk.strip()
        if not chunk:
            continue
        try:
            widths.append(int(chunk))
        except ValueError as exc:
            raise typer.BadParameter(f"Invalid width '{chunk}'; expected integers separated by commas.") from exc
    if not widths:
        raise typer.BadParameter("Provide at least one width.")
    return widths


@app.callback(invoke_without_command=True)
def _root_command(
    ctx: typer.Context,
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show navfit version and exit.",
        is_flag=True,
    ),
    log_level: str = typer.Option(
        "info",
        "--log-level",
        help="Logging level (critical, error, warning, info, debug).",
        show_default=True,
        case_sensitive=False,
    ),
) -> None:
    """
    Default command when no subcommand is selected.
    """
    _configure_logging(log_level)

    if version:
        console.print(f"[bold green]navfit[/] {__version__}")
        raise typer.Exit()

    if ctx.invoked_subcommand is None:
        console.print(
            "[bold yellow]navfit[/] is ready. Run [cyan]navfit fit --config path/to/menu.toml --width 1024[/] "
            "to see how the menu fits.",
        )


@app.command()
def fit(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the menu configuration TOML file.",
        callback=_resolve_config_path,
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        "-w",
        min=0,
        help="Viewport width in pixels (defaults to the configured design width).",
    ),
) -> None:
    """
    Show which menu entries stay inline and which collapse into the overflow menu.
    """
    site_config = _load_config_or_exit(config)
    viewport = _default_width(site_config, width)
    logger.info("Fitting %d menu entries at %dpx", len(site_config.items), viewport)
    _, report = fit_document(render_navbar(site_config), site_config, viewport_width=viewport)
    _print_pass_report(report, f"Navigation Fit at {viewport}px")
    if report.status is PassStatus.FAILED:
        raise typer.Exit(code=1)


@app.command()
def apply(
    source: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML file containing the navbar."),
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the menu configuration TOML file (layout settings).",
        callback=_resolve_config_path,
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        "-w",
        min=0,
        help="Viewport width in pixels (defaults to the configured design width).",
    ),
    output: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Where to write the fitted HTML (defaults to overwriting the source).",
    ),
) -> None:
    """
    Prefit the navigation bar of an existing HTML file for a viewport width.
    """
    site_config = _load_config_or_exit(config)
    viewport = _default_width(site_config, width)
    markup, report = fit_document(source.read_text(encoding="utf-8"), site_config, viewport_width=viewport)
    if report.status is PassStatus.MISSING_ELEMENT:
        console.print(f"[bold yellow]No navbar to fit:[/] {report.detail}")
        raise typer.Exit(code=1)
    target = output or source
    write_text_file(target, markup)
    _print_pass_report(report, f"Navigation Fit at {viewport}px")
    console.print(f"[bold green]Wrote[/] {target}")


@app.command()
def simulate(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the menu configuration TOML file.",
        callback=_resolve_config_path,
    ),
    widths: str = typer.Option(
        ...,
        "--widths",
        help="Comma separated viewport widths, fed in order as resize events.",
    ),
    interval_ms: int = typer.Option(
        10,
        "--interval-ms",
        min=0,
        help="Delay between resize events; bursts faster than the debounce window coalesce.",
    ),
) -> None:
    """
    Replay a drag-resize against the debounced fitter and report the passes it ran.
    """
    site_config = _load_config_or_exit(config)
    events = _parse_widths(widths)
    soup = BeautifulSoup(render_navbar(site_config), "html.parser")
    fitter = NavFitter.from_config(soup, site_config, viewport_width=events[0])
    try:
        fitter.on_load()
        for viewport in events:
            fitter.on_resize(viewport)
            if interval_ms:
                time.sleep(interval_ms / 1000.0)
        fitter.settle()
    finally:
        fitter.close()

    report = fitter.last_report
    console.print(
        f"[bold]{len(events)}[/] resize event(s) produced [bold]{fitter.passes}[/] fit pass(es) including the load pass."
    )
    if report is not None:
        _print_pass_report(report, f"Final Navigation Fit at {events[-1]}px")


@app.command()
def scaffold(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the menu configuration TOML file.",
        callback=_resolve_config_path,
    ),
    force: bool = typer.Option(
        False,
        "--force",
        "-f",
        help="Rewrite pages even if they already exist.",
    ),
    width: Optional[int] = typer.Option(
        None,
        "--width",
        "-w",
        min=0,
        help="Viewport width to prefit the navigation for.",
    ),
) -> None:
    """
    Create/refresh one page per menu entry plus the home page, with the navigation prefit.
    """
    site_config = _load_config_or_exit(config)
    report = generate_site_structure(site_config, force=force, viewport_width=_default_width(site_config, width))
    _print_scaffold_report(report)


@app.command("config-hash")
def config_hash(
    config: Path = typer.Option(
        ...,
        "--config",
        "-c",
        help="Path to the menu configuration TOML file.",
        callback=_resolve_config_path,
    ),
) -> None:
    """
    Output the deterministic hash of a config file for cache invalidation or change detection.
    """
    site_config = _load_config_or_exit(config)
    console.print(f"[bold green]{site_config.hash}[/]")


def main() -> None:
    """
    Entry-point used by the console script defined in pyproject.toml.
    """
    app()

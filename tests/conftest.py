from pathlib import Path
import textwrap

import pytest
from bs4 import BeautifulSoup
from typer.testing import CliRunner

from navfit.config import SiteConfig, NavLinkConfig


LONG_LABELS = [
    "Admissions and Enrollment",
    "Academic Programs Overview",
    "Student Services Center",
    "Teachers and Staff Directory",
    "Alumni Association Network",
    "Transparency and Public Records",
    "Calendar of School Events",
    "Downloads and Documents",
]


@pytest.fixture
def runner() -> CliRunner:
    return CliRunner()


@pytest.fixture
def site_config(tmp_path: Path) -> SiteConfig:
    return SiteConfig(
        site_title="Central High School",
        brand="Central High",
        web_root=tmp_path / "site",
        items=[NavLinkConfig(label=label, href=f"page-{index}/index.html") for index, label in enumerate(LONG_LABELS)],
    )


@pytest.fixture
def sample_config(tmp_path: Path) -> dict:
    """
    Write a small configuration file for tests and return metadata.
    """
    web_root = tmp_path / "site"
    config_text = textwrap.dedent(
        f"""
        site_title = "Central High School"
        brand = "Central High"
        web_root = "{web_root}"
        more_label = "More"

        [layout]
        design_width = 1280
        debounce_ms = 20

        [[item]]
        label = "Home"
        href = "index.html"
        icon = "bi-house"

        [[item]]
        label = "Admissions and Enrollment"
        href = "admissions/index.html"

        [[item]]
        label = "Academic Programs Overview"
        href = "academics/"

        [[item.child]]
        label = "Science Track"
        href = "academics/science.html"

        [[item.child]]
        label = "Humanities Track"
        href = "academics/humanities.html"

        [[item]]
        label = "Teachers and Staff Directory"
        href = "staff/index.html"

        [[item]]
        label = "Alumni Association Network"
        href = "alumni/index.html"

        [[item]]
        label = "Transparency and Public Records"
        href = "transparency/index.html"

        [[item]]
        label = "Contact"
        href = "mailto:office@example.edu"
        """
    ).strip()
    path = tmp_path / "menu.toml"
    path.write_text(config_text + "\n", encoding="utf-8")
    return {"path": path, "web_root": web_root}


def make_navbar(labels, *, toggler_hidden: bool = False) -> BeautifulSoup:
    """Build a minimal Bootstrap-style navbar document for DOM tests."""
    items = "".join(
        f'<li class="nav-item" id="nav-{index}"><a class="nav-link active" href="/p{index}.html">{label}</a></li>'
        for index, label in enumerate(labels)
    )
    toggler_style = ' style="display: none"' if toggler_hidden else ""
    markup = f"""
    <nav class="navbar"><div class="container-fluid">
      <a class="navbar-brand" href="/">Brand</a>
      <button class="navbar-toggler"{toggler_style}></button>
      <div class="navbar-collapse">
        <ul id="main-nav-list">{items}
          <li class="nav-item dropdown" style="display: none"><a class="nav-link dropdown-toggle" href="#">More</a><ul class="dropdown-menu"></ul></li>
        </ul>
      </div>
    </div></nav>
    """
    return BeautifulSoup(markup, "html.parser")


@pytest.fixture
def navbar_factory():
    return make_navbar

"""
Navbar markup generation.
"""

from __future__ import annotations

import html
from typing import List

from ..config import NavLinkConfig, SiteConfig
from ..util import generate_unique_slugs, is_local_href


def resolve_href(href: str, base: str = "") -> str:
    """Prefix site-relative links with ``base`` so nested pages resolve them."""
    if base and is_local_href(href):
        return f"{base}{href}"
    return href


def item_slugs(items: List[NavLinkConfig]) -> List[str]:
    """Unique slugs for a list of entries, honouring explicit ids."""
    return generate_unique_slugs([item.label for item in items], [item.id for item in items])


def render_navbar(config: SiteConfig, *, base: str = "") -> str:
    """
    Render the navigation bar for a page.

    Args:
        config: The site configuration.
        base: Prefix for relative links (e.g., "../" on pages one level deep).

    Returns:
        HTML string with every item visible and the overflow trigger hidden.
    """
    brand_label = html.escape(config.brand, quote=True)
    brand_parts = []
    if config.brand_logo:
        logo = html.escape(resolve_href(config.brand_logo, base), quote=True)
        width_attr = f' width="{config.brand_logo_width:g}"' if config.brand_logo_width else ""
        brand_parts.append(f'<img src="{logo}" alt=""{width_attr}>')
    brand_parts.append(f"<span>{brand_label}</span>")

    entries = [
        _render_item(item, slug, base)
        for item, slug in zip(config.items, item_slugs(config.items))
    ]
    more_label = html.escape(config.more_label, quote=True)
    entries.append(
        '        <li class="nav-item dropdown nav-more" style="display: none" hidden>'
        f'<a class="nav-link dropdown-toggle" href="#" role="button" aria-expanded="false">{more_label}</a>'
        '<ul class="dropdown-menu"></ul></li>'
    )

    home = html.escape(resolve_href("index.html", base), quote=True)
    return "\n".join(
        [
            '<nav class="navbar navbar-expand-lg">',
            '  <div class="container-fluid">',
            f'    <a class="navbar-brand" href="{home}">{"".join(brand_parts)}</a>',
            '    <button class="navbar-toggler" type="button" aria-label="Toggle navigation"><span class="navbar-toggler-icon"></span></button>',
            '    <div class="collapse navbar-collapse" id="main-nav">',
            '      <ul class="navbar-nav" id="main-nav-list">',
            *entries,
            "      </ul>",
            "    </div>",
            "  </div>",
            "</nav>",
        ]
    )


def _render_item(item: NavLinkConfig, slug: str, base: str) -> str:
    classes = "nav-item has-submenu" if item.children else "nav-item"
    link = _render_link(item, base, "nav-link")
    if not item.children:
        return f'        <li class="{classes}" id="nav-{slug}">{link}</li>'
    children = "".join(
        f"<li>{_render_link(child, base, 'nav-link')}</li>" for child in item.children
    )
    return f'        <li class="{classes}" id="nav-{slug}">{link}<ul class="nav-submenu">{children}</ul></li>'


def _render_link(item: NavLinkConfig, base: str, css_class: str) -> str:
    href = html.escape(resolve_href(item.href, base), quote=True)
    label = html.escape(item.label, quote=True)
    icon = ""
    if item.icon:
        icon = f'<i class="bi {html.escape(item.icon, quote=True)}" aria-hidden="true"></i> '
    return f'<a class="{css_class}" href="{href}">{icon}{label}</a>'

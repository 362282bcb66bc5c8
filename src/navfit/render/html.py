"""
Page HTML generation utilities.
"""

from __future__ import annotations

from dataclasses import dataclass
import html
from typing import Optional


@dataclass
class SitePage:
    title: str
    heading: str
    navbar_html: str
    body_text: str = "Content will be published here."
    favicon_href: Optional[str] = None


def build_page(page: SitePage) -> str:
    """
    Return the full HTML document for ``page``.
    """
    title = html.escape(page.title, quote=True)
    heading = html.escape(page.heading, quote=True)
    body_html = "".join(
        f"<p>{html.escape(paragraph.strip(), quote=True)}</p>"
        for paragraph in (page.body_text or "").split("\n\n")
        if paragraph.strip()
    )
    favicon = ""
    if page.favicon_href:
        favicon = f'<link rel="icon" href="{html.escape(page.favicon_href, quote=True)}" type="image/svg+xml" sizes="any">\n  '

    return f"""<!DOCTYPE html>
<html>
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  {favicon}<title>{title}</title>
  {_STYLE_BLOCK}
</head>
<body>
{page.navbar_html}
<main>
<h1>{heading}</h1>
<div id="page-content">{body_html}</div>
</main>
{_SCRIPT_BLOCK}
</body>
</html>
"""


_STYLE_BLOCK = """<style>
body { font-family: -apple-system, BlinkMacSystemFont, "Segoe UI", Roboto, Helvetica, Arial, sans-serif; background: #f8f9fa; color: #212529; margin: 0; line-height: 1.6; }
main { margin: 1em auto; padding: 0 1em; max-width: 960px; }
h1 { color: #343a40; border-bottom: 2px solid #dee2e6; padding-bottom: 0.5em; margin-top: 1em; font-size: 1.8em; }
#page-content { background: #ffffff; padding: 1.5em 2em; border: 1px solid #dee2e6; border-radius: 6px; box-shadow: 0 2px 4px rgba(0,0,0,0.05); }
.navbar { background: #0a2a43; padding: 0.5rem 0; }
.navbar .container-fluid { display: flex; flex-wrap: wrap; align-items: center; padding: 0 12px; }
.navbar-brand { color: #ffffff; font-size: 1.25rem; font-weight: 600; text-decoration: none; margin-right: 1rem; display: flex; align-items: center; gap: 0.5rem; white-space: nowrap; }
.navbar-toggler { background: none; border: 1px solid rgba(255,255,255,0.4); border-radius: 4px; padding: 0.25rem 0.6rem; margin-left: auto; cursor: pointer; }
.navbar-toggler-icon { display: inline-block; width: 1.4em; height: 2px; background: #ffffff; box-shadow: 0 -6px 0 #ffffff, 0 6px 0 #ffffff; vertical-align: middle; }
.navbar-collapse { display: none; flex-basis: 100%; }
.navbar-collapse.show { display: block; }
.navbar-nav { list-style: none; margin: 0; padding: 0; }
.nav-item { position: relative; white-space: nowrap; }
.nav-link { display: block; padding: 0.5rem; color: #dbe9f5; text-decoration: none; font-size: 1rem; }
.nav-link:hover { color: #ffffff; }
.nav-submenu, .dropdown-menu { display: none; position: absolute; right: 0; min-width: 12rem; list-style: none; margin: 0; padding: 0.4rem 0; background: #ffffff; border: 1px solid #dee2e6; border-radius: 6px; box-shadow: 0 4px 12px rgba(0,0,0,0.12); z-index: 10; }
.nav-submenu { left: 0; right: auto; }
.nav-item:hover > .nav-submenu, .dropdown-menu.show, .dropdown-submenu:hover > .dropdown-menu { display: block; }
.dropdown-submenu { position: relative; }
.dropdown-submenu > .dropdown-menu { top: 0; right: 100%; }
.nav-submenu .nav-link, .dropdown-item { display: block; padding: 0.35rem 1rem; color: #212529; text-decoration: none; white-space: nowrap; }
.dropdown-item:hover, .nav-submenu .nav-link:hover { background: #f1f3f5; }
.dropdown-toggle::after { content: ""; display: inline-block; margin-left: 0.35em; border-top: 0.3em solid; border-right: 0.3em solid transparent; border-left: 0.3em solid transparent; vertical-align: 0.2em; }
@media (min-width: 992px) {
  .navbar-toggler { display: none; }
  .navbar-collapse { display: flex !important; flex-basis: auto; flex-grow: 1; }
  .navbar-nav { display: flex; flex-direction: row; }
}
@media (max-width: 600px) { main { margin: 0.5em; padding: 0 0.8em; } h1 { font-size: 1.5em; } #page-content { padding: 1em 1.2em; } }
</style>"""


_SCRIPT_BLOCK = """<script>
document.querySelectorAll('.navbar-toggler').forEach(function (toggler) {
  toggler.addEventListener('click', function () {
    document.getElementById('main-nav').classList.toggle('show');
  });
});
document.querySelectorAll('.nav-more > .dropdown-toggle').forEach(function (toggle) {
  toggle.addEventListener('click', function (event) {
    event.preventDefault();
    const menu = toggle.parentElement.querySelector('.dropdown-menu');
    const open = menu.classList.toggle('show');
    toggle.setAttribute('aria-expanded', open ? 'true' : 'false');
  });
});
</script>"""

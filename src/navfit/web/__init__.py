"""
Web output helpers (scaffolding, navigation prefit, etc.).
"""

from .prefit import fit_document
from .scaffold import ScaffoldReport, generate_site_structure, resolve_web_root

__all__ = ["ScaffoldReport", "fit_document", "generate_site_structure", "resolve_web_root"]

"""
Pydantic models for validating and hashing navigation menu configuration files.
"""

from __future__ import annotations

import json
import hashlib
import logging
import tomllib
from pathlib import Path
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ConfigError(RuntimeError):
    """Raised when configuration files cannot be loaded or validated."""


class NavLinkConfig(BaseModel):
    """
    Configuration for a single navigation menu entry.

    Attributes:
        label: Text shown in the navigation bar (e.g., "Admissions").
        href: Link target. Relative targets get a page directory generated for them.
        icon: Optional icon class (e.g., "bi-house").
        id: Optional stable identifier; derived from the label when omitted.
        children: Nested entries shown in the entry's submenu.
    """
    label: str = Field(min_length=1)
    href: str = "#"
    icon: Optional[str] = None
    id: Optional[str] = None
    children: List[NavLinkConfig] = Field(default_factory=list)

    model_config = {
        "extra": "forbid",
    }

    @field_validator("label")
    @classmethod
    def _strip_label(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("label must not be blank")
        return stripped


class LayoutConfig(BaseModel):
    """
    Layout tunables used when measuring and fitting the navigation bar.

    Attributes:
        brand_safety_margin: Pixels reserved next to the brand on top of its width.
        overflow_safety_margin: Extra pixels reserved when the "More" control is shown.
        debounce_ms: Quiet period before a resize triggers a new fit pass.
        collapse_breakpoint: Viewport width at or below which the toggler takes over.
        design_width: Viewport width used when prefitting generated pages.
        font_size: Nav link font size in pixels.
        brand_font_scale: Brand font size relative to ``font_size``.
        item_padding: Horizontal padding of a nav item (both sides together).
        container_padding: Horizontal padding of the navbar container.
        icon_width: Width of an icon glyph including its gap.
        caret_width: Width of the dropdown caret on the "More" trigger.
    """
    brand_safety_margin: float = Field(default=120.0, ge=0)
    overflow_safety_margin: float = Field(default=40.0, ge=0)
    debounce_ms: int = Field(default=50, ge=0)
    collapse_breakpoint: int = Field(default=991, ge=0)
    design_width: int = Field(default=1280, gt=0)
    font_size: float = Field(default=16.0, gt=0)
    brand_font_scale: float = Field(default=1.25, gt=0)
    item_padding: float = Field(default=16.0, ge=0)
    container_padding: float = Field(default=24.0, ge=0)
    icon_width: float = Field(default=20.0, ge=0)
    caret_width: float = Field(default=12.0, ge=0)

    model_config = {
        "extra": "forbid",
    }


class SiteConfig(BaseModel):
    """
    Top-level configuration for a site navigation bar.

    Attributes:
        site_title: Title used on generated pages.
        brand: Brand text shown at the left of the bar.
        brand_logo: Optional logo image path for the brand.
        brand_logo_width: Rendered logo width in pixels.
        more_label: Label of the overflow trigger.
        web_root: Directory where generated pages are written.
        items: Ordered top-level navigation entries.
        layout: Measurement and fitting tunables.
    """
    site_title: str = "Website"
    brand: str = "Home"
    brand_logo: Optional[str] = None
    brand_logo_width: float = Field(default=0.0, ge=0)
    more_label: str = "More"
    web_root: Optional[Path] = None
    items: List[NavLinkConfig] = Field(default_factory=list)
    layout: LayoutConfig = Field(default_factory=LayoutConfig)

    model_config = {
        "extra": "forbid",
        "arbitrary_types_allowed": True,
        "populate_by_name": True,
    }

    @property
    def hash(self) -> str:
        """
        Deterministic hash of the normalized config, used to detect changes.
        """
        payload = self.model_dump(mode="json", round_trip=True)
        blob = json.dumps(payload, sort_keys=True, separators=(",", ":")).encode("utf-8")
        return hashlib.sha256(blob).hexdigest()


NavLinkConfig.model_rebuild()


def load_config(path: Path | str) -> SiteConfig:
    """
    Load and validate a TOML config file into a SiteConfig instance.

    Args:
        path: Path to the TOML configuration file.

    Returns:
        A validated SiteConfig object.

    Raises:
        ConfigError: If the file is missing, unreadable, or invalid.
    """
    config_path = Path(path).expanduser().resolve()
    if not config_path.exists():
        raise ConfigError(f"Configuration file not found: {config_path}")

    try:
        with config_path.open("rb") as handle:
            raw_data: Dict[str, Any] = tomllib.load(handle)
    except OSError as exc:
        raise ConfigError(f"Unable to read configuration file: {exc}") from exc
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Invalid TOML in configuration file: {exc}") from exc

    raw_data = _normalize_toml_schema(raw_data)

    try:
        config = SiteConfig.model_validate(raw_data)
    except ValidationError as exc:
        raise ConfigError(str(exc)) from exc

    _warn_duplicate_links(config.items)
    return config


def _normalize_toml_schema(data: Any) -> Dict[str, Any]:
    """
    Normalize TOML-specific schema conveniences to the internal config model.

    Accepts singular table arrays: [[item]] and [[item.child]], and maps them to the
    internal plural list fields: items and children.
    """
    if not isinstance(data, dict):
        raise ConfigError("Configuration root must be a TOML table/object.")

    if "items" in data:
        raise ConfigError("Use [[item]] blocks (singular) instead of [[items]].")

    normalized = dict(data)
    normalized["items"] = [_normalize_entry(entry) for entry in _coerce_table_array(normalized.pop("item", None), "item")]
    return normalized


def _normalize_entry(entry: dict) -> dict:
    if "children" in entry:
        raise ConfigError("Use [[item.child]] blocks (singular) instead of children lists.")
    normalized = dict(entry)
    children = _coerce_table_array(normalized.pop("child", None), "item.child")
    if children:
        normalized["children"] = [_normalize_entry(child) for child in children]
    return normalized


def _coerce_table_array(value: Any, label: str) -> list[dict]:
    if value is None:
        return []
    if isinstance(value, dict):
        return [value]
    if isinstance(value, list):
        if not all(isinstance(item, dict) for item in value):
            raise ConfigError(f"Each [[{label}]] entry must be a table/object.")
        return value
    raise ConfigError(f"Invalid [{label}] block; expected a table or array of tables.")


def _warn_duplicate_links(items: List[NavLinkConfig]) -> None:
    seen: Dict[str, str] = {}

    def visit(entries: List[NavLinkConfig]) -> None:
        for entry in entries:
            if entry.href and entry.href != "#":
                previous = seen.get(entry.href)
                if previous is not None:
                    logger.warning(
                        "Menu entry '%s' references %s, already used by '%s'.",
                        entry.label,
                        entry.href,
                        previous,
                    )
                else:
                    seen[entry.href] = entry.label
            visit(entry.children)

    visit(items)

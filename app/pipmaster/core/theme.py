"""Color theme for the pipmaster CLI.

The bundled ``data/theme.toml`` holds two tables: ``[colors]`` for the
general palette and ``[categories]`` keyed by category display name.
A user file at ~/.config/pipmaster/theme.toml may override any subset
of either table.
"""

import logging
import re
import tomllib
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError
from rich.theme import Theme

from pipmaster.core.paths import get_user_theme_path
from pipmaster.models.package import PackageCategory

logger = logging.getLogger(__name__)

THEME_SECTIONS = ("colors", "categories")

_HEX_PATTERN = re.compile(r"#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})")


def _check_hex(value: str) -> str:
    color = value.strip()
    if not _HEX_PATTERN.fullmatch(color):
        msg = f"expected a #RGB or #RRGGBB color, got {value!r}"
        raise ValueError(msg)
    return color.lower()


HexColor = Annotated[str, AfterValidator(_check_hex)]


class Palette(BaseModel):
    """General palette used by tables, messages and verdicts."""

    model_config = ConfigDict(extra="forbid")

    text: HexColor = "#f8fafc"
    muted: HexColor = "#94a3b8"
    header: HexColor = "#60a5fa"
    border: HexColor = "#334155"
    success: HexColor = "#10b981"
    warning: HexColor = "#f59e0b"
    error: HexColor = "#ef4444"
    info: HexColor = "#3b82f6"


def _default_category_colors() -> dict[PackageCategory, str]:
    return {
        PackageCategory.DATA_SCIENCE: "#3b82f6",
        PackageCategory.WEB: "#8b5cf6",
        PackageCategory.UTILITY: "#ec4899",
        PackageCategory.SYSTEM: "#10b981",
        PackageCategory.AI_ML: "#f59e0b",
        PackageCategory.OTHER: "#64748b",
    }


class ThemeConfig(BaseModel):
    """Complete theme: palette plus one color per package category."""

    model_config = ConfigDict(extra="forbid")

    colors: Palette = Field(default_factory=Palette)
    categories: dict[PackageCategory, HexColor] = Field(default_factory=_default_category_colors)

    def category_color(self, category: PackageCategory) -> str:
        """Color for a category, falling back to the muted palette color."""
        return self.categories.get(category, self.colors.muted)


def category_style(category: PackageCategory) -> str:
    """Rich style name for a category, e.g. ``category.ai-ml``."""
    slug = re.sub(r"[^a-z]+", "-", category.value.lower()).strip("-")
    return f"category.{slug}"


def _read_theme_file(path: Path) -> dict[str, dict[str, object]] | None:
    """Read the theme tables of a TOML file.

    Returns:
        Mapping of table name to its entries, or None when the file is
        missing or unreadable. Tables that are not TOML tables are skipped.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return None
    except (tomllib.TOMLDecodeError, OSError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return None

    sections: dict[str, dict[str, object]] = {}
    for name in THEME_SECTIONS:
        table = data.get(name)
        if isinstance(table, dict):
            sections[name] = table
        elif table is not None:
            logger.warning("Ignoring [%s] in %s: not a table", name, path)
    return sections


def load_theme() -> ThemeConfig:
    """Load the bundled theme and apply user overrides table by table.

    An override that fails validation discards the whole user file and
    the built-in defaults are used.
    """
    bundled_path = Path(str(resources.files("pipmaster.data").joinpath("theme.toml")))
    merged = _read_theme_file(bundled_path)
    if merged is None:
        logger.error("Bundled theme missing at %s", bundled_path)
        merged = {}

    user_path = get_user_theme_path()
    overrides = _read_theme_file(user_path) or {}
    for name, table in overrides.items():
        merged[name] = {**merged.get(name, {}), **table}
    if overrides:
        logger.debug("Applied theme overrides from %s", user_path)

    try:
        return ThemeConfig.model_validate(merged)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        return ThemeConfig()


def build_rich_theme(config: ThemeConfig) -> Theme:
    """Translate a ThemeConfig into named Rich styles."""
    palette = config.colors
    styles = {
        "text": palette.text,
        "muted": palette.muted,
        "header": palette.header,
        "bold_header": f"bold {palette.header}",
        "border": palette.border,
        "success": palette.success,
        "warning": palette.warning,
        "error": f"bold {palette.error}",
        "info": palette.info,
        "package.name": f"bold {palette.text}",
        "verdict.safe": f"bold {palette.success}",
        "verdict.caution": f"bold {palette.warning}",
    }
    for category in PackageCategory:
        styles[category_style(category)] = config.category_color(category)
    return Theme(styles)


@lru_cache(maxsize=1)
def get_theme() -> Theme:
    """Rich theme for the shared consoles, loaded once per process."""
    return build_rich_theme(load_theme())

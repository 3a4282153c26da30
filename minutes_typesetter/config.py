"""Page geometry and document settings for the minutes typesetter.

The defaults reproduce the legacy Edison Township minutes format: US Letter,
one-inch margins, 10pt Times on an 11pt line, 36pt section indent. They can
be overridden from a YAML file, e.g.:

    geometry:
      font_size: 11
      line_gap: 2
    document:
      author: "Office of the Municipal Clerk"
"""

import logging
from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Optional

import yaml

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PageGeometry:
    """Fixed page and font metrics shared (read-only) by every render."""
    page_width: float = 612
    page_height: float = 792
    margin_top: float = 72
    margin_bottom: float = 72
    margin_left: float = 72
    margin_right: float = 72
    font_size: float = 10
    line_gap: float = 1
    section_indent: float = 36
    bottom_padding: float = 14
    font_regular: str = "Times-Roman"
    font_bold: str = "Times-Bold"

    @property
    def line_height(self) -> float:
        return self.font_size + self.line_gap

    @property
    def content_width(self) -> float:
        return self.page_width - self.margin_left - self.margin_right

    @property
    def bottom_limit(self) -> float:
        """Lowest y (measured from the page top) any body text may reach."""
        return self.page_height - self.margin_bottom - self.bottom_padding

    def font_for(self, bold: bool) -> str:
        return self.font_bold if bold else self.font_regular


@dataclass(frozen=True)
class MinutesConfig:
    geometry: PageGeometry = field(default_factory=PageGeometry)
    author: str = "Township of Edison Municipal Clerk"
    title_template: str = "Council Meeting Minutes - {date}"


DEFAULT_CONFIG = MinutesConfig()


def _apply_overrides(target, overrides: dict, section: str):
    known = {f.name for f in fields(target)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ValueError(f"Unknown {section} setting(s): {', '.join(unknown)}")
    return replace(target, **overrides)


def load_config(path: Optional[Path] = None) -> MinutesConfig:
    """Load typesetter settings from a YAML file.

    Args:
        path: YAML file with optional ``geometry`` and ``document`` mappings.
            None returns the defaults.

    Returns:
        MinutesConfig with the file's overrides applied.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file contains unknown sections or keys.
    """
    if path is None:
        return DEFAULT_CONFIG

    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {path} must contain a mapping")

    unknown = sorted(set(data) - {"geometry", "document"})
    if unknown:
        raise ValueError(f"Unknown config section(s) in {path}: {', '.join(unknown)}")

    geometry = _apply_overrides(PageGeometry(), data.get("geometry") or {}, "geometry")
    config = replace(DEFAULT_CONFIG, geometry=geometry)

    document = dict(data.get("document") or {})
    if "geometry" in document:
        raise ValueError("Unknown document setting(s): geometry")
    config = _apply_overrides(config, document, "document")

    logger.info(f"Loaded config from {path}")
    return config

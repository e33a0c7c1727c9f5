"""Theme lookup tables shared by every backend"""

from types import MappingProxyType
from typing import Any, Mapping, Optional

from loguru import logger
from pydantic import BaseModel, ConfigDict

from config import settings


class Theme(BaseModel):
    """Colours are 6-digit RGB hex strings without a leading '#'"""
    model_config = ConfigDict(frozen=True)

    name: str
    primary: str
    accent: str
    background: str = "FFFFFF"
    muted: str = "666666"
    header_fill: str = "E8E8E8"
    title_fill: str = "F8F9FA"
    formula_fill: str = "F0F8FF"
    body_font: str = "Calibri"
    code_font: str = settings.CODE_FONT
    pdf_font: str = "Helvetica"
    pdf_bold_font: str = "Helvetica-Bold"
    pdf_code_font: str = "Courier"


THEMES: Mapping[str, Theme] = MappingProxyType({
    "default": Theme(name="default", primary="2C3E50", accent="3498DB"),
    "corporate": Theme(name="corporate", primary="1A365D", accent="2B6CB0"),
    "academic": Theme(
        name="academic", primary="2D3748", accent="4A5568", body_font="Times New Roman",
        pdf_font="Times-Roman", pdf_bold_font="Times-Bold"
    ),
})


def get_theme(name: Optional[str], overrides: Optional[dict[str, Any]] = None) -> Theme:
    """Resolve a theme by name, applying per-call overrides to a copy"""
    theme = THEMES.get(name or settings.DEFAULT_THEME)
    if theme is None:
        logger.debug(f"Unknown theme {name!r}; using default")
        theme = THEMES["default"]

    if overrides:
        known = {k: v for k, v in overrides.items() if k in Theme.model_fields and k != "name"}
        theme = theme.model_copy(update=known)
    return theme

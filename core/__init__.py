"""Core abstractions for OSF converters"""

from .models import *
from .enums import *
from .exceptions import *
from .interfaces import *
from .themes import Theme, THEMES, get_theme

__all__ = [
    # Models
    "CellValue",
    "TextRun",
    "LinkRun",
    "ImageRun",
    "InlineRun",
    "ParagraphContent",
    "ListItem",
    "ListContent",
    "MetaBlock",
    "DocBlock",
    "SlideBlock",
    "FormulaEntry",
    "SheetBlock",
    "UnknownBlock",
    "Block",
    "Document",
    "StyledRun",
    "ContentUnit",
    "MaterializedGrid",
    "TranslatedFormula",
    "SheetView",
    "DocumentMetadata",
    "Margins",
    "ConversionOptions",
    "OutputArtifact",
    # Enums
    "BlockKind",
    "RunStyle",
    "UnitKind",
    "OutputFormat",
    "PageSize",
    "Orientation",
    # Exceptions
    "ConverterError",
    "UnsupportedFormatError",
    "DocumentError",
    # Interfaces
    "Emitter",
    "Converter",
    # Themes
    "Theme",
    "THEMES",
    "get_theme",
]

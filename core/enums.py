"""Core enumerations for OSF converters"""

from enum import Enum


class BlockKind(str, Enum):
    """Top-level block kinds of a parsed OSF document"""
    META = "meta"
    DOC = "doc"
    SLIDE = "slide"
    SHEET = "sheet"


class RunStyle(str, Enum):
    """Inline style attributes a text run may carry"""
    BOLD = "bold"
    ITALIC = "italic"
    CODE = "code"


class UnitKind(str, Enum):
    """Structural unit of doc-block prose"""
    HEADING = "heading"
    LIST_ITEM = "list_item"
    PARAGRAPH = "paragraph"


class OutputFormat(str, Enum):
    """Supported output formats"""
    DOCX = "docx"
    PPTX = "pptx"
    XLSX = "xlsx"
    PDF = "pdf"


class PageSize(str, Enum):
    """Page sizes understood by paged backends"""
    A4 = "A4"
    LETTER = "letter"
    LEGAL = "legal"


class Orientation(str, Enum):
    """Page orientation"""
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"

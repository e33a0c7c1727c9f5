"""Output format converters"""

from types import MappingProxyType
from typing import Mapping, Union

from core.enums import OutputFormat
from core.exceptions import UnsupportedFormatError
from .base import Converter
from .word import WordConverter
from .powerpoint import PowerPointConverter
from .excel import ExcelConverter
from .pdf import PdfConverter


CONVERTERS: Mapping[OutputFormat, type[Converter]] = MappingProxyType({
    OutputFormat.DOCX: WordConverter,
    OutputFormat.PPTX: PowerPointConverter,
    OutputFormat.XLSX: ExcelConverter,
    OutputFormat.PDF: PdfConverter,
})


def resolve_format(fmt: Union[OutputFormat, str]) -> OutputFormat:
    """Accept an OutputFormat, "docx", "DOCX" or ".docx" """
    if isinstance(fmt, OutputFormat):
        return fmt
    try:
        return OutputFormat(str(fmt).strip().lower().lstrip("."))
    except ValueError:
        raise UnsupportedFormatError(str(fmt), [f.value for f in OutputFormat]) from None


def get_converter(fmt: Union[OutputFormat, str]) -> Converter:
    """Fresh converter instance for a format"""
    return CONVERTERS[resolve_format(fmt)]()


__all__ = [
    "Converter",
    "WordConverter",
    "PowerPointConverter",
    "ExcelConverter",
    "PdfConverter",
    "CONVERTERS",
    "resolve_format",
    "get_converter",
]

"""Excel (.xlsx) converter"""

import re
from io import BytesIO
from typing import Optional

from openpyxl import Workbook
from openpyxl.styles import Alignment, Border, Font, PatternFill, Side
from openpyxl.utils import get_column_letter

from core.enums import OutputFormat
from core.interfaces import Emitter
from core.models import (
    ConversionOptions, DocBlock, Document, DocumentMetadata, SheetBlock, SheetView,
    SlideBlock, StyledRun
)
from core.themes import Theme
from rendering.grid import parse_header_labels
from rendering.inline import strip_markers
from rendering.text import content_preview
from config import settings
from .base import Converter


MAX_SHEET_NAME = 31
NUMBER_FORMAT = "#,##0.00"
THIN = Side(style="thin")
THIN_BORDER = Border(top=THIN, left=THIN, bottom=THIN, right=THIN)


def sanitize_worksheet_name(name: str, existing: list[str] = None) -> str:
    """Strip characters Excel forbids, cap at 31 chars and keep names unique"""
    base = re.sub(r"[\\/*?\[\]:]", "_", name or "").strip()[:MAX_SHEET_NAME] or "Sheet"
    taken = {n.lower() for n in existing or []}

    candidate = base
    counter = 2
    while candidate.lower() in taken:
        suffix = f" ({counter})"
        candidate = base[:MAX_SHEET_NAME - len(suffix)] + suffix
        counter += 1
    return candidate


def _fill(color: str) -> PatternFill:
    return PatternFill(fill_type="solid", fgColor="FF" + color)


def write_value(worksheet, row: int, column: int, value):
    """Write document data; text stays text even when it starts with '='"""
    cell = worksheet.cell(row=row, column=column, value=value)
    if isinstance(value, str):
        cell.data_type = "s"
    return cell


class ExcelEmitter(Emitter):
    """Worksheets per sheet block, content worksheets for prose and slides"""

    def __init__(self, document: Document, theme: Theme):
        self.document = document
        self.theme = theme
        self.workbook = Workbook()
        self.workbook.remove(self.workbook.active)
        self._set_properties(DocumentMetadata.from_block(document.first_meta()))

        self._content_index = 1
        self._sheet = None
        self._row = 1
        self._has_sheets = False

    def _set_properties(self, meta: DocumentMetadata):
        props = self.workbook.properties
        props.creator = meta.author or "OmniScript OSF"
        props.title = meta.title or "OSF Workbook"
        props.description = "Generated from OSF document"

    def _add_worksheet(self, name: str):
        worksheet = self.workbook.create_sheet(
            sanitize_worksheet_name(name, self.workbook.sheetnames)
        )
        worksheet.sheet_properties.tabColor = self.theme.accent
        return worksheet

    def _title_font(self, size: int) -> Font:
        return Font(bold=True, size=size, color="FF" + self.theme.primary)

    def _content_sheet(self):
        if self._sheet is None:
            self._sheet = self._add_worksheet(f"Content_{self._content_index}")
            self._content_index += 1
            self._row = 1
        return self._sheet

    def _close_content_sheet(self):
        if self._sheet is not None:
            autosize_columns(self._sheet)
        self._sheet = None

    def _write_line(self, text: str, font: Optional[Font] = None, wrap: bool = False):
        worksheet = self._content_sheet()
        cell = write_value(worksheet, self._row, 1, text)
        if font is not None:
            cell.font = font
        if wrap:
            cell.alignment = Alignment(wrap_text=True, vertical="top")
            worksheet.row_dimensions[self._row].height = max(15, min(100, len(text) / 10))
        self._row += 1

    def _write_info(self, worksheet, meta: DocumentMetadata, row: int) -> int:
        worksheet.cell(row=row, column=1, value="Document Information").font = self._title_font(16)
        row += 2
        for label, value in (("Title:", meta.title), ("Author:", meta.author), ("Date:", meta.date)):
            if value:
                worksheet.cell(row=row, column=1, value=label).font = Font(bold=True)
                write_value(worksheet, row, 2, value)
                row += 1
        return row

    # ─────────────────────────────────────────────────────────
    # Emitter
    # ─────────────────────────────────────────────────────────

    def emit_metadata(self, meta: DocumentMetadata):
        if meta.is_empty:
            return
        worksheet = self._add_worksheet("Info")
        self._write_info(worksheet, meta, 1)
        autosize_columns(worksheet)

    def begin_doc(self):
        self._content_sheet()
        self._write_line("Document Content", font=self._title_font(14))
        self._row += 1

    def end_doc(self):
        self._row += 1
        self._close_content_sheet()

    def emit_heading(self, level: int, runs: list[StyledRun]):
        self._write_line(strip_markers(runs), font=Font(bold=True, size=14 - 2 * (level - 1)))

    def emit_paragraph(self, runs: list[StyledRun]):
        self._write_line(strip_markers(runs), wrap=True)

    def emit_list_item(self, runs: list[StyledRun]):
        self._write_line(f"• {strip_markers(runs)}")

    def begin_slide(self, title: Optional[str]):
        self._content_sheet()
        if title:
            self._write_line(title, font=self._title_font(14))
            self._row += 1

    def end_slide(self):
        self._row += 1
        self._close_content_sheet()

    def sheet_row_offset(self, sheet: SheetBlock) -> int:
        offset = 2 if sheet.name else 0
        if parse_header_labels(sheet.cols):
            offset += 1
        return offset

    def emit_sheet(self, sheet: SheetView):
        self._has_sheets = True
        grid = sheet.grid
        worksheet = self._add_worksheet(sheet.name or "Sheet")
        row = 1

        if sheet.name:
            title = write_value(worksheet, row, 1, sheet.name)
            title.font = self._title_font(16)
            title.fill = _fill(self.theme.title_fill)
            if grid.width > 1:
                worksheet.merge_cells(
                    start_row=row, start_column=1, end_row=row, end_column=grid.width
                )
            row += 2

        if grid.headers:
            for c, label in enumerate(grid.headers, start=1):
                cell = write_value(worksheet, row, c, label)
                cell.font = Font(bold=True, color="FFFFFFFF")
                cell.fill = _fill(self.theme.accent)
                cell.border = THIN_BORDER
            row += 1

        for r, values in enumerate(grid.rows):
            for c, value in enumerate(values, start=1):
                if value == "":
                    continue
                cell = write_value(worksheet, row + r, c, value)
                if isinstance(value, (int, float)) and not isinstance(value, bool):
                    cell.number_format = NUMBER_FORMAT
                cell.border = THIN_BORDER

        for formula in sheet.formulas:
            cell = worksheet.cell(row=formula.row, column=formula.col, value=formula.expression)
            cell.fill = _fill(self.theme.formula_fill)
            cell.font = Font(italic=True)

        autosize_columns(worksheet)

    def _write_summary(self):
        worksheet = self._add_worksheet("Summary")
        row = 1

        meta = DocumentMetadata.from_block(self.document.first_meta())
        if not meta.is_empty:
            row = self._write_info(worksheet, meta, row) + 2

        content_blocks = [
            block for block in self.document.blocks
            if isinstance(block, (DocBlock, SlideBlock))
        ]
        if content_blocks:
            worksheet.cell(row=row, column=1, value="Content Summary").font = self._title_font(14)
            row += 2
            worksheet.cell(row=row, column=1, value="Type").font = Font(bold=True)
            worksheet.cell(row=row, column=2, value="Title/Content Preview").font = Font(bold=True)
            row += 1

            for block in content_blocks:
                worksheet.cell(row=row, column=1, value=block.type.upper())
                if isinstance(block, SlideBlock):
                    preview = block.title or "Untitled Slide"
                else:
                    preview = content_preview(block.content)
                write_value(worksheet, row, 2, preview)
                row += 1

        autosize_columns(worksheet)

    def finish(self) -> bytes:
        self._close_content_sheet()
        if not self._has_sheets:
            self._write_summary()

        buffer = BytesIO()
        self.workbook.save(buffer)
        return buffer.getvalue()


def autosize_columns(worksheet):
    """Width = longest value + 2, clamped to the configured bounds"""
    widths: dict[int, int] = {}
    for row in worksheet.iter_rows():
        for cell in row:
            if cell.value is None or cell.value == "":
                continue
            length = min(settings.MAX_COLUMN_WIDTH, len(str(cell.value)) + 2)
            widths[cell.column] = max(widths.get(cell.column, settings.MIN_COLUMN_WIDTH), length)

    for column, width in widths.items():
        worksheet.column_dimensions[get_column_letter(column)].width = width


class ExcelConverter(Converter):
    """Converter for Excel workbooks (.xlsx)"""

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.XLSX

    @property
    def mime_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

    @property
    def include_metadata_default(self) -> bool:
        return False

    def create_emitter(
        self, document: Document, options: ConversionOptions, theme: Theme
    ) -> ExcelEmitter:
        return ExcelEmitter(document, theme)

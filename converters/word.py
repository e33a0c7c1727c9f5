"""Word (.docx) converter"""

from io import BytesIO
from typing import Optional

from docx import Document as WordDocument
from docx.enum.text import WD_ALIGN_PARAGRAPH
from docx.oxml import OxmlElement
from docx.oxml.ns import qn
from docx.shared import RGBColor

from core.enums import OutputFormat
from core.interfaces import Emitter
from core.models import ConversionOptions, Document, DocumentMetadata, SheetView, StyledRun
from core.themes import Theme
from rendering.text import display_value
from .base import Converter


class WordEmitter(Emitter):
    """Builds a python-docx document block by block"""

    def __init__(self, theme: Theme, title: str):
        self.theme = theme
        self.doc = WordDocument()
        self.doc.core_properties.title = title
        self.doc.core_properties.author = "OmniScript OSF"
        self.doc.core_properties.comments = "Generated from OSF document"

    def _add_runs(self, paragraph, runs: list[StyledRun]):
        for styled in runs:
            run = paragraph.add_run(styled.text)
            if styled.bold:
                run.bold = True
            if styled.italic:
                run.italic = True
            if styled.code:
                run.font.name = self.theme.code_font

    def emit_metadata(self, meta: DocumentMetadata):
        if meta.title:
            heading = self.doc.add_heading(meta.title, level=0)
            heading.alignment = WD_ALIGN_PARAGRAPH.CENTER

        info = []
        if meta.author:
            info.append(f"Author: {meta.author}")
        if meta.date:
            info.append(f"Date: {meta.date}")
        if meta.theme:
            info.append(f"Theme: {meta.theme}")

        if info:
            paragraph = self.doc.add_paragraph()
            paragraph.alignment = WD_ALIGN_PARAGRAPH.CENTER
            run = paragraph.add_run(" | ".join(info))
            run.italic = True
            run.font.color.rgb = RGBColor.from_string(self.theme.muted)

    def emit_heading(self, level: int, runs: list[StyledRun]):
        heading = self.doc.add_heading(level=level)
        self._add_runs(heading, runs)

    def emit_paragraph(self, runs: list[StyledRun]):
        paragraph = self.doc.add_paragraph()
        self._add_runs(paragraph, runs)

    def emit_list_item(self, runs: list[StyledRun]):
        paragraph = self.doc.add_paragraph(style="List Bullet")
        self._add_runs(paragraph, runs)

    def begin_slide(self, title: Optional[str]):
        if title:
            heading = self.doc.add_heading(level=2)
            run = heading.add_run(title)
            run.font.color.rgb = RGBColor.from_string(self.theme.accent)

    def emit_sheet(self, sheet: SheetView):
        grid = sheet.grid
        if sheet.name:
            heading = self.doc.add_heading(level=3)
            run = heading.add_run(sheet.name)
            run.font.color.rgb = RGBColor.from_string(self.theme.accent)

        header_rows = 1 if grid.headers else 0
        if grid.width == 0 or header_rows + grid.row_count == 0:
            return

        table = self.doc.add_table(rows=header_rows + grid.row_count, cols=grid.width)
        table.style = "Table Grid"

        if grid.headers:
            for c, label in enumerate(grid.headers):
                cell = table.cell(0, c)
                cell.paragraphs[0].add_run(label).bold = True
                _shade(cell, self.theme.header_fill)

        for r in range(1, grid.row_count + 1):
            row = grid.rows[r - 1]
            for c in range(1, grid.width + 1):
                formula = sheet.formula_at(r, c)
                if formula is not None:
                    text = formula.expression
                elif c <= grid.col_count:
                    text = display_value(row[c - 1])
                else:
                    text = ""
                table.cell(header_rows + r - 1, c - 1).text = text

    def finish(self) -> bytes:
        buffer = BytesIO()
        self.doc.save(buffer)
        return buffer.getvalue()


def _shade(cell, fill: str):
    """Solid background fill for a table cell"""
    shading = OxmlElement("w:shd")
    shading.set(qn("w:val"), "clear")
    shading.set(qn("w:color"), "auto")
    shading.set(qn("w:fill"), fill)
    cell._tc.get_or_add_tcPr().append(shading)


class WordConverter(Converter):
    """Converter for Word documents (.docx)"""

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.DOCX

    @property
    def mime_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.wordprocessingml.document"

    @property
    def include_metadata_default(self) -> bool:
        return True

    def create_emitter(
        self, document: Document, options: ConversionOptions, theme: Theme
    ) -> WordEmitter:
        meta = document.first_meta()
        title = meta.title if meta is not None and meta.title else "OSF Document"
        return WordEmitter(theme, title)

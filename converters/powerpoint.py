"""PowerPoint (.pptx) converter"""

from io import BytesIO
from typing import Optional

from pptx import Presentation
from pptx.dml.color import RGBColor
from pptx.util import Inches, Pt

from core.enums import OutputFormat
from core.interfaces import Emitter
from core.models import ConversionOptions, Document, DocumentMetadata, SheetView, StyledRun
from core.themes import Theme
from rendering.inline import strip_markers
from rendering.text import display_value
from .base import Converter


TITLE_LAYOUT = 0
TITLE_AND_CONTENT_LAYOUT = 1
TITLE_ONLY_LAYOUT = 5


class PowerPointEmitter(Emitter):
    """One slide per meta, doc, slide and sheet block"""

    def __init__(self, theme: Theme):
        self.theme = theme
        self.prs = Presentation()
        self.prs.slide_width = Inches(10)
        self.prs.slide_height = Inches(7.5)
        self._body = None
        self._body_empty = True

    # ─────────────────────────────────────────────────────────
    # Slide helpers
    # ─────────────────────────────────────────────────────────

    def _new_content_slide(self, title: Optional[str]):
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[TITLE_AND_CONTENT_LAYOUT])
        if title:
            slide.shapes.title.text = title
            slide.shapes.title.text_frame.paragraphs[0].font.color.rgb = (
                RGBColor.from_string(self.theme.primary)
            )
        self._body = slide.placeholders[1].text_frame
        self._body_empty = True
        return slide

    def _add_paragraph(self, runs: list[StyledRun], level: int = 0, bold: bool = False):
        if self._body is None:
            self._new_content_slide(None)

        if self._body_empty:
            paragraph = self._body.paragraphs[0]
            self._body_empty = False
        else:
            paragraph = self._body.add_paragraph()
        paragraph.level = level

        for styled in runs:
            run = paragraph.add_run()
            run.text = styled.text
            if styled.bold or bold:
                run.font.bold = True
            if styled.italic:
                run.font.italic = True
            if styled.code:
                run.font.name = self.theme.code_font

    # ─────────────────────────────────────────────────────────
    # Emitter
    # ─────────────────────────────────────────────────────────

    def emit_metadata(self, meta: DocumentMetadata):
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[TITLE_LAYOUT])
        slide.shapes.title.text = meta.title or "OSF Presentation"
        byline = " | ".join(part for part in (meta.author, meta.date) if part)
        if byline:
            slide.placeholders[1].text = byline

    def begin_doc(self):
        self._body = None

    def end_doc(self):
        self._body = None

    def emit_heading(self, level: int, runs: list[StyledRun]):
        if self._body is None:
            self._new_content_slide(strip_markers(runs))
        else:
            self._add_paragraph(runs, bold=True)

    def emit_paragraph(self, runs: list[StyledRun]):
        self._add_paragraph(runs)

    def emit_list_item(self, runs: list[StyledRun]):
        self._add_paragraph(runs, level=1)

    def begin_slide(self, title: Optional[str]):
        self._new_content_slide(title)

    def end_slide(self):
        self._body = None

    def emit_sheet(self, sheet: SheetView):
        grid = sheet.grid
        slide = self.prs.slides.add_slide(self.prs.slide_layouts[TITLE_ONLY_LAYOUT])
        slide.shapes.title.text = sheet.name or "Sheet"
        self._body = None

        header_rows = 1 if grid.headers else 0
        row_total = header_rows + grid.row_count
        if grid.width == 0 or row_total == 0:
            return

        shape = slide.shapes.add_table(
            row_total, grid.width,
            Inches(0.5), Inches(1.5), Inches(9), Inches(0.4) * row_total
        )
        table = shape.table
        table.first_row = bool(grid.headers)

        for c, label in enumerate(grid.headers):
            table.cell(0, c).text = label

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
                cell = table.cell(header_rows + r - 1, c - 1)
                cell.text = text
                cell.text_frame.paragraphs[0].font.size = Pt(12)

    def finish(self) -> bytes:
        buffer = BytesIO()
        self.prs.save(buffer)
        return buffer.getvalue()


class PowerPointConverter(Converter):
    """Converter for PowerPoint presentations (.pptx)"""

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.PPTX

    @property
    def mime_type(self) -> str:
        return "application/vnd.openxmlformats-officedocument.presentationml.presentation"

    @property
    def include_metadata_default(self) -> bool:
        return True

    def create_emitter(
        self, document: Document, options: ConversionOptions, theme: Theme
    ) -> PowerPointEmitter:
        return PowerPointEmitter(theme)

"""PDF converter built on reportlab platypus"""

from io import BytesIO
from typing import Optional
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.enums import TA_CENTER
from reportlab.lib.pagesizes import A4, LEGAL, LETTER, landscape, portrait
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import inch
from reportlab.platypus import KeepTogether, Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from core.enums import Orientation, OutputFormat, PageSize
from core.interfaces import Emitter
from core.models import ConversionOptions, Document, DocumentMetadata, SheetView, StyledRun
from core.themes import Theme
from rendering.text import display_value
from .base import Converter


PAGE_SIZES = {
    PageSize.A4: A4,
    PageSize.LETTER: LETTER,
    PageSize.LEGAL: LEGAL,
}


def _hex(color: str):
    return colors.HexColor("#" + color)


def runs_to_markup(runs: list[StyledRun], code_font: str = "Courier") -> str:
    """Paragraph markup for styled runs; text is XML-escaped"""
    parts = []
    for run in runs:
        text = escape(run.text)
        if run.code:
            text = f'<font face="{code_font}">{text}</font>'
        if run.italic:
            text = f"<i>{text}</i>"
        if run.bold:
            text = f"<b>{text}</b>"
        parts.append(text)
    return "".join(parts)


def page_size(options: ConversionOptions) -> tuple[float, float]:
    size = PAGE_SIZES.get(options.page_size, A4)
    if options.orientation == Orientation.LANDSCAPE:
        return landscape(size)
    return portrait(size)


class PdfEmitter(Emitter):
    """Collects platypus flowables; finish() lays them out"""

    def __init__(self, theme: Theme, options: ConversionOptions, title: str):
        self.theme = theme
        self.options = options
        self.title = title
        self.story = []
        self._slide: Optional[list] = None
        self.styles = self._build_styles()

    def _build_styles(self) -> dict[str, ParagraphStyle]:
        sample = getSampleStyleSheet()
        primary = _hex(self.theme.primary)
        font, bold = self.theme.pdf_font, self.theme.pdf_bold_font

        styles = {
            "body": ParagraphStyle("OSFBody", parent=sample["BodyText"], fontName=font),
            "bullet": ParagraphStyle(
                "OSFBullet", parent=sample["BodyText"], fontName=font,
                leftIndent=18, bulletIndent=6
            ),
            "title": ParagraphStyle(
                "OSFTitle", parent=sample["Title"], fontName=bold,
                textColor=primary, alignment=TA_CENTER
            ),
            "byline": ParagraphStyle(
                "OSFByline", parent=sample["BodyText"], fontName=font,
                textColor=_hex(self.theme.muted), alignment=TA_CENTER
            ),
            "slide_title": ParagraphStyle(
                "OSFSlideTitle", parent=sample["Heading2"], fontName=bold,
                textColor=primary, borderColor=_hex(self.theme.accent),
                borderWidth=1, borderPadding=6, spaceAfter=12
            ),
        }
        for level in (1, 2, 3):
            styles[f"h{level}"] = ParagraphStyle(
                f"OSFHeading{level}", parent=sample[f"Heading{level}"],
                fontName=bold, textColor=primary
            )
        return styles

    def _markup(self, runs: list[StyledRun]) -> str:
        return runs_to_markup(runs, self.theme.pdf_code_font)

    def _append(self, flowable):
        target = self._slide if self._slide is not None else self.story
        target.append(flowable)

    @property
    def frame_width(self) -> float:
        margins = self.options.margins
        return page_size(self.options)[0] - (margins.left + margins.right) * inch

    # ─────────────────────────────────────────────────────────
    # Emitter
    # ─────────────────────────────────────────────────────────

    def emit_metadata(self, meta: DocumentMetadata):
        if meta.title:
            self.story.append(Paragraph(escape(meta.title), self.styles["title"]))
        if meta.author:
            self.story.append(Paragraph(f"By: {escape(meta.author)}", self.styles["byline"]))
        if meta.date:
            self.story.append(Paragraph(f"Date: {escape(meta.date)}", self.styles["byline"]))
        if not meta.is_empty:
            self.story.append(Spacer(1, 0.4 * inch))

    def emit_heading(self, level: int, runs: list[StyledRun]):
        self._append(Paragraph(self._markup(runs), self.styles[f"h{level}"]))

    def emit_paragraph(self, runs: list[StyledRun]):
        self._append(Paragraph(self._markup(runs), self.styles["body"]))

    def emit_list_item(self, runs: list[StyledRun]):
        self._append(Paragraph(self._markup(runs), self.styles["bullet"], bulletText="•"))

    def begin_slide(self, title: Optional[str]):
        self._slide = []
        if title:
            self._slide.append(Paragraph(escape(title), self.styles["slide_title"]))

    def end_slide(self):
        if self._slide:
            self.story.append(KeepTogether(self._slide))
            self.story.append(Spacer(1, 0.3 * inch))
        self._slide = None

    def emit_sheet(self, sheet: SheetView):
        grid = sheet.grid
        if sheet.name:
            self.story.append(Paragraph(escape(sheet.name), self.styles["h3"]))

        data = []
        if grid.headers:
            data.append(grid.headers + [""] * (grid.width - len(grid.headers)))
        for r in range(1, grid.row_count + 1):
            row = []
            for c in range(1, grid.width + 1):
                formula = sheet.formula_at(r, c)
                if formula is not None:
                    row.append(formula.expression)
                elif c <= grid.col_count:
                    row.append(display_value(grid.rows[r - 1][c - 1]))
                else:
                    row.append("")
            data.append(row)

        if not data or grid.width == 0:
            return

        commands = [
            ("GRID", (0, 0), (-1, -1), 0.5, colors.HexColor("#DDDDDD")),
            ("FONTNAME", (0, 0), (-1, -1), self.theme.pdf_font),
            ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ]
        if grid.headers:
            commands += [
                ("BACKGROUND", (0, 0), (-1, 0), _hex(self.theme.title_fill)),
                ("FONTNAME", (0, 0), (-1, 0), self.theme.pdf_bold_font),
            ]

        table = Table(
            data,
            colWidths=[self.frame_width / grid.width] * grid.width,
            repeatRows=1 if grid.headers else 0,
        )
        table.setStyle(TableStyle(commands))
        self.story.append(table)
        self.story.append(Spacer(1, 0.3 * inch))

    def finish(self) -> bytes:
        self.end_slide()
        if not self.story:
            self.story.append(Spacer(1, 1))

        margins = self.options.margins
        buffer = BytesIO()
        doc = SimpleDocTemplate(
            buffer,
            pagesize=page_size(self.options),
            leftMargin=margins.left * inch,
            rightMargin=margins.right * inch,
            topMargin=margins.top * inch,
            bottomMargin=margins.bottom * inch,
            title=self.title,
            author="OmniScript OSF",
        )
        doc.build(self.story)
        return buffer.getvalue()


class PdfConverter(Converter):
    """Converter for PDF documents"""

    @property
    def format(self) -> OutputFormat:
        return OutputFormat.PDF

    @property
    def mime_type(self) -> str:
        return "application/pdf"

    @property
    def include_metadata_default(self) -> bool:
        return False

    def create_emitter(
        self, document: Document, options: ConversionOptions, theme: Theme
    ) -> PdfEmitter:
        meta = document.first_meta()
        title = meta.title if meta is not None and meta.title else "OSF Document"
        return PdfEmitter(theme, options, title)

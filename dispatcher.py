"""Block dispatcher: walks a document and drives a backend emitter"""

from typing import Optional

from loguru import logger

from core.enums import UnitKind
from core.interfaces import Emitter
from core.models import (
    ConversionOptions, DocBlock, Document, DocumentMetadata, ListContent, MetaBlock,
    ParagraphContent, SheetBlock, SheetView, SlideBlock
)
from rendering import (
    join_runs, materialize_grid, split_content, tokenize_inline, translate_formulas
)


def build_sheet_view(sheet: SheetBlock, row_offset: int = 0) -> SheetView:
    """Materialize a sheet block's grid and translate its formulas"""
    return SheetView(
        name=sheet.name,
        grid=materialize_grid(sheet.data, sheet.cols),
        formulas=translate_formulas(sheet.formulas, row_offset),
    )


class BlockDispatcher:
    """Routes each block, in order, to the shared core and then the emitter"""

    def __init__(self, emitter: Emitter):
        self.emitter = emitter

    def dispatch(self, document: Document, options: Optional[ConversionOptions] = None):
        """
        Emit every block of the document.

        Meta blocks are emitted only when ``options.include_metadata`` is
        true. Unknown block kinds are skipped. Emitter errors propagate.
        """
        options = options or ConversionOptions()

        for index, block in enumerate(document.blocks):
            if isinstance(block, MetaBlock):
                if options.include_metadata:
                    self.emitter.emit_metadata(DocumentMetadata.from_block(block))
            elif isinstance(block, DocBlock):
                self._dispatch_doc(block)
            elif isinstance(block, SlideBlock):
                self._dispatch_slide(block)
            elif isinstance(block, SheetBlock):
                offset = self.emitter.sheet_row_offset(block)
                self.emitter.emit_sheet(build_sheet_view(block, offset))
            else:
                logger.debug(f"Skipping block {index} of unknown kind {getattr(block, 'type', None)!r}")

    def _dispatch_doc(self, block: DocBlock):
        self.emitter.begin_doc()
        for unit in split_content(block.content):
            runs = tokenize_inline(unit.text)
            if unit.kind == UnitKind.HEADING:
                self.emitter.emit_heading(unit.level, runs)
            elif unit.kind == UnitKind.LIST_ITEM:
                self.emitter.emit_list_item(runs)
            else:
                self.emitter.emit_paragraph(runs)
        self.emitter.end_doc()

    def _dispatch_slide(self, block: SlideBlock):
        self.emitter.begin_slide(block.title)
        for item in block.content:
            if isinstance(item, ParagraphContent):
                self.emitter.emit_paragraph(tokenize_inline(join_runs(item.content)))
            elif isinstance(item, ListContent):
                for list_item in item.items:
                    self.emitter.emit_list_item(tokenize_inline(join_runs(list_item.content)))
        self.emitter.end_slide()

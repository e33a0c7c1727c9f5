"""Abstract base classes for OSF converter components"""

from abc import ABC, abstractmethod
from typing import Optional

from .enums import OutputFormat
from .models import (
    ConversionOptions, Document, DocumentMetadata, OutputArtifact, SheetBlock, SheetView,
    StyledRun
)


class Emitter(ABC):
    """Backend capability driven block by block by the dispatcher"""

    @abstractmethod
    def emit_metadata(self, meta: DocumentMetadata):
        """Emit the title/author/date header"""
        pass

    def begin_doc(self):
        """A doc block starts"""
        pass

    def end_doc(self):
        """A doc block ends"""
        pass

    @abstractmethod
    def emit_heading(self, level: int, runs: list[StyledRun]):
        """Emit a heading of level 1-3"""
        pass

    @abstractmethod
    def emit_paragraph(self, runs: list[StyledRun]):
        """Emit a paragraph"""
        pass

    @abstractmethod
    def emit_list_item(self, runs: list[StyledRun]):
        """Emit one unordered list item"""
        pass

    @abstractmethod
    def begin_slide(self, title: Optional[str]):
        """A slide block starts"""
        pass

    def end_slide(self):
        """A slide block ends"""
        pass

    def sheet_row_offset(self, sheet: SheetBlock) -> int:
        """Rows the backend places above a sheet's data; formulas shift by it"""
        return 0

    @abstractmethod
    def emit_sheet(self, sheet: SheetView):
        """Emit a materialized sheet"""
        pass

    @abstractmethod
    def finish(self) -> bytes:
        """Serialize everything emitted so far"""
        pass


class Converter(ABC):
    """Abstract base class for output format converters"""

    @property
    @abstractmethod
    def format(self) -> OutputFormat:
        """Output format produced"""
        pass

    @property
    @abstractmethod
    def mime_type(self) -> str:
        """MIME type of the produced artifact"""
        pass

    @property
    def extension(self) -> str:
        return self.format.value

    @property
    @abstractmethod
    def include_metadata_default(self) -> bool:
        """Whether meta blocks render when the caller does not say"""
        pass

    def get_supported_formats(self) -> list[str]:
        return [self.format.value]

    @abstractmethod
    def convert(
        self, document: Document, options: Optional[ConversionOptions] = None
    ) -> OutputArtifact:
        """Convert a document into this format"""
        pass

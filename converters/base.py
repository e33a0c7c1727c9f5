"""Base converter: resolves options and drives the dispatcher"""

from abc import ABC, abstractmethod
from typing import Any, Optional, Union

from loguru import logger

from core.interfaces import Converter as IConverter, Emitter
from core.models import ConversionOptions, Document, OutputArtifact
from core.themes import Theme, get_theme
from dispatcher import BlockDispatcher


class Converter(IConverter, ABC):
    """Shared convert() for every backend; subclasses only supply an emitter"""

    @abstractmethod
    def create_emitter(
        self, document: Document, options: ConversionOptions, theme: Theme
    ) -> Emitter:
        """Fresh emitter for one conversion"""
        pass

    def resolve_options(
        self, document: Document, options: Optional[ConversionOptions] = None
    ) -> ConversionOptions:
        """Fill unset options, taking the theme from the meta block when present"""
        options = options or ConversionOptions()
        meta = document.first_meta()
        if options.theme is None and meta is not None and meta.theme:
            options = options.model_copy(update={"theme": meta.theme})
        return options.resolved(self.include_metadata_default)

    def convert(
        self,
        document: Union[Document, dict[str, Any]],
        options: Optional[ConversionOptions] = None
    ) -> OutputArtifact:
        """Convert a document (model or parser dict) into this format"""
        document = Document.from_dict(document)
        options = self.resolve_options(document, options)
        theme = get_theme(options.theme, options.custom_styles)

        logger.info(
            f"Converting {len(document.blocks)} blocks to {self.format.value} "
            f"(theme={theme.name}, metadata={options.include_metadata})"
        )

        emitter = self.create_emitter(document, options, theme)
        BlockDispatcher(emitter).dispatch(document, options)
        content = emitter.finish()

        logger.info(f"Produced {self.extension} artifact: {len(content)} bytes")
        return OutputArtifact(
            content=content,
            mime_type=self.mime_type,
            extension=self.extension,
        )

"""Conversion orchestrator: one document, many output formats"""

import asyncio
from typing import Any, Iterable, Optional, Union

from loguru import logger

from core.enums import OutputFormat
from core.models import ConversionOptions, Document, OutputArtifact
from converters import get_converter, resolve_format


DocumentInput = Union[Document, dict[str, Any]]


class Orchestrator:
    """Coordinates converters for a single document"""

    def __init__(self, options: Optional[ConversionOptions] = None):
        self.options = options or ConversionOptions()

    def convert(
        self,
        document: DocumentInput,
        fmt: Union[OutputFormat, str],
        options: Optional[ConversionOptions] = None
    ) -> OutputArtifact:
        """Convert to a single format"""
        converter = get_converter(fmt)
        return converter.convert(Document.from_dict(document), options or self.options)

    def convert_all(
        self,
        document: DocumentInput,
        formats: Optional[Iterable[Union[OutputFormat, str]]] = None,
        options: Optional[ConversionOptions] = None
    ) -> dict[OutputFormat, OutputArtifact]:
        """Convert to every requested format, one after another"""
        document = Document.from_dict(document)
        targets = self._targets(formats)
        return {fmt: self.convert(document, fmt, options) for fmt in targets}

    async def run(
        self,
        document: DocumentInput,
        formats: Optional[Iterable[Union[OutputFormat, str]]] = None,
        options: Optional[ConversionOptions] = None
    ) -> dict[OutputFormat, OutputArtifact]:
        """Convert to every requested format concurrently, one worker thread per format"""
        document = Document.from_dict(document)
        targets = self._targets(formats)
        logger.info(f"Running {len(targets)} conversions: {', '.join(t.value for t in targets)}")

        artifacts = await asyncio.gather(*(
            asyncio.to_thread(self.convert, document, fmt, options)
            for fmt in targets
        ))
        return dict(zip(targets, artifacts))

    def _targets(
        self, formats: Optional[Iterable[Union[OutputFormat, str]]]
    ) -> list[OutputFormat]:
        if formats is None:
            return list(OutputFormat)
        targets = []
        for fmt in formats:
            resolved = resolve_format(fmt)
            if resolved not in targets:
                targets.append(resolved)
        return targets


def convert_document(
    document: DocumentInput,
    fmt: Union[OutputFormat, str],
    options: Optional[ConversionOptions] = None
) -> OutputArtifact:
    """Shortcut for a one-off conversion"""
    return Orchestrator().convert(document, fmt, options)

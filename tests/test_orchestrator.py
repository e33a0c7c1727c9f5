import pytest

from core.enums import OutputFormat
from core.exceptions import UnsupportedFormatError
from core.models import ConversionOptions, Document
from orchestrator import Orchestrator, convert_document


def test_convert_all_defaults_to_every_format(sample_document):
    artifacts = Orchestrator().convert_all(sample_document)

    assert list(artifacts) == list(OutputFormat)
    assert artifacts[OutputFormat.PDF].content.startswith(b"%PDF")
    for fmt, artifact in artifacts.items():
        assert artifact.extension == fmt.value
        assert artifact.size > 0


def test_convert_all_deduplicates_requested_formats(sample_document):
    artifacts = Orchestrator().convert_all(sample_document, ["docx", "DOCX", OutputFormat.XLSX])

    assert list(artifacts) == [OutputFormat.DOCX, OutputFormat.XLSX]


def test_convert_all_rejects_unknown_format(sample_document):
    with pytest.raises(UnsupportedFormatError):
        Orchestrator().convert_all(sample_document, ["docx", "rtf"])


@pytest.mark.asyncio
async def test_run_converts_concurrently(sample_document):
    orchestrator = Orchestrator(ConversionOptions(theme="academic"))

    artifacts = await orchestrator.run(Document.from_dict(sample_document), ["pdf", "pptx"])

    assert set(artifacts) == {OutputFormat.PDF, OutputFormat.PPTX}
    assert artifacts[OutputFormat.PDF].mime_type == "application/pdf"


def test_convert_document_shortcut(prose_document):
    artifact = convert_document(prose_document, ".xlsx")

    assert artifact.extension == "xlsx"
    assert artifact.content[:2] == b"PK"


def test_input_document_is_not_mutated(sample_document):
    before = repr(sample_document)

    Orchestrator().convert_all(sample_document)

    assert repr(sample_document) == before

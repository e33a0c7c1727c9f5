import pytest
from pydantic import ValidationError

from converters import get_converter
from core.enums import Orientation, OutputFormat, PageSize
from core.exceptions import DocumentError
from core.models import (
    ConversionOptions, DocBlock, Document, DocumentMetadata, LinkRun, ListContent, MetaBlock,
    ParagraphContent, SheetBlock, SlideBlock, TextRun, UnknownBlock
)
from core.themes import THEMES, get_theme


def test_from_dict_builds_typed_blocks(sample_document):
    document = Document.from_dict(sample_document)

    assert [type(b) for b in document.blocks] == [MetaBlock, DocBlock, SlideBlock, SheetBlock]
    assert document.first_meta().title == "Test Document"
    assert document.first_meta().theme == "corporate"


def test_unknown_block_kind_is_preserved():
    document = Document.from_dict({"blocks": [{"type": "chart", "series": [1, 2]}, {"content": "x"}]})

    assert all(isinstance(b, UnknownBlock) for b in document.blocks)
    assert document.blocks[0].type == "chart"


def test_non_mapping_blocks_are_skipped():
    document = Document.from_dict({"blocks": [{"type": "doc", "content": "x"}, "stray", 3]})

    assert len(document.blocks) == 1


def test_blocks_must_be_a_list():
    with pytest.raises(DocumentError) as exc_info:
        Document.from_dict({"blocks": "not a list"})

    assert exc_info.value.field == "blocks"


def test_document_must_be_a_mapping():
    with pytest.raises(DocumentError):
        Document.from_dict(["blocks"])


def test_missing_blocks_is_empty_document():
    assert Document.from_dict({}).blocks == []
    assert Document.from_dict({"blocks": None}).blocks == []


def test_sheet_without_data_or_formulas():
    sheet = SheetBlock.model_validate({"type": "sheet", "name": "Empty"})

    assert sheet.data == {}
    assert sheet.formulas == []
    assert sheet.cols is None


def test_sheet_non_mapping_data_treated_as_empty():
    sheet = SheetBlock.model_validate({"type": "sheet", "data": ["a", "b"], "formulas": "nope"})

    assert sheet.data == {}
    assert sheet.formulas == []


def test_malformed_formula_entries_dropped():
    sheet = SheetBlock.model_validate({
        "type": "sheet",
        "formulas": [
            {"cell": [1, 2], "expr": "(1,1)*2"},
            {"cell": [0, 2], "expr": "(1,1)"},
            {"cell": [1], "expr": "(1,1)"},
            {"expr": "(1,1)"},
        ],
    })

    assert len(sheet.formulas) == 1
    assert sheet.formulas[0].cell == (1, 2)


def test_slide_runs_are_coerced():
    slide = SlideBlock.model_validate({
        "type": "slide",
        "content": [
            {"type": "paragraph", "content": ["bare", {"text": "untyped"}, {"type": "link", "text": "l", "url": "u"}]},
            {"type": "unordered_list", "items": ["one", {"content": "two"}]},
        ],
    })

    paragraph, bullets = slide.content
    assert isinstance(paragraph, ParagraphContent)
    assert isinstance(paragraph.content[0], TextRun)
    assert paragraph.content[1].text == "untyped"
    assert isinstance(paragraph.content[2], LinkRun)
    assert isinstance(bullets, ListContent)
    assert [item.content[0].text for item in bullets.items] == ["one", "two"]


def test_unknown_slide_content_dropped():
    slide = SlideBlock.model_validate({
        "type": "slide",
        "title": "T",
        "content": [{"type": "chart"}, {"type": "paragraph", "content": ["kept"]}, "stray"],
    })

    assert len(slide.content) == 1
    assert slide.content[0].content[0].text == "kept"


def test_doc_content_coerced_to_text():
    assert DocBlock.model_validate({"type": "doc", "content": None}).content == ""
    assert DocBlock.model_validate({"type": "doc", "content": 42}).content == "42"


def test_blocks_are_frozen(sample_document):
    document = Document.from_dict(sample_document)

    with pytest.raises(ValidationError):
        document.blocks[1].content = "changed"


def test_metadata_from_block():
    meta = MetaBlock(props={"title": "T", "author": "", "date": 2025})

    metadata = DocumentMetadata.from_block(meta)
    assert metadata.title == "T"
    assert metadata.author is None
    assert metadata.date == "2025"
    assert not metadata.is_empty
    assert DocumentMetadata.from_block(None).is_empty


def test_options_resolved_with_defaults():
    options = ConversionOptions().resolved(include_metadata_default=True)

    assert options.theme == "default"
    assert options.include_metadata is True
    assert options.page_size == PageSize.A4
    assert options.orientation == Orientation.PORTRAIT
    assert options.margins.left == 1.0


def test_explicit_options_win_over_defaults():
    options = ConversionOptions(
        theme="academic", include_metadata=False, orientation="landscape"
    ).resolved(include_metadata_default=True)

    assert options.theme == "academic"
    assert options.include_metadata is False
    assert options.orientation == Orientation.LANDSCAPE


def test_theme_lookup_and_fallback():
    assert get_theme("corporate").primary == "1A365D"
    assert get_theme("no-such-theme") == THEMES["default"]
    assert get_theme(None).name == "default"


def test_theme_overrides_apply_to_copy():
    theme = get_theme("default", {"accent": "FF0000", "name": "ignored", "unknown": 1})

    assert theme.accent == "FF0000"
    assert theme.name == "default"
    assert THEMES["default"].accent == "3498DB"


def _with_trailing_doc(block: dict) -> Document:
    return Document.from_dict({"blocks": [block, {"type": "doc", "content": "ok"}]})


def test_numeric_sheet_name_is_stringified():
    document = _with_trailing_doc({"type": "sheet", "name": 2024, "data": {"1,1": 1}})

    sheet, doc = document.blocks
    assert isinstance(sheet, SheetBlock)
    assert sheet.name == "2024"
    assert doc.content == "ok"


def test_invalid_sheet_cols_are_ignored():
    document = _with_trailing_doc({"type": "sheet", "cols": 5})

    sheet, doc = document.blocks
    assert isinstance(sheet, SheetBlock)
    assert sheet.cols is None
    assert doc.content == "ok"


def test_tuple_sheet_cols_become_a_list():
    sheet = SheetBlock.model_validate({"type": "sheet", "cols": ("A", "B")})

    assert sheet.cols == ["A", "B"]


def test_numeric_slide_title_is_stringified():
    document = _with_trailing_doc({"type": "slide", "title": 7, "layout": 2})

    slide, doc = document.blocks
    assert isinstance(slide, SlideBlock)
    assert slide.title == "7"
    assert slide.layout == "2"
    assert doc.content == "ok"


def test_non_mapping_meta_props_are_empty():
    document = _with_trailing_doc({"type": "meta", "props": ["x"]})

    meta, doc = document.blocks
    assert isinstance(meta, MetaBlock)
    assert meta.props == {}
    assert meta.title is None
    assert doc.content == "ok"


def test_non_list_paragraph_content_is_empty():
    document = _with_trailing_doc({
        "type": "slide",
        "content": [
            {"type": "paragraph", "content": 5},
            {"type": "unordered_list", "items": ["one", 3, None]},
        ],
    })

    slide, doc = document.blocks
    paragraph, bullets = slide.content
    assert paragraph.content == []
    assert [item.content[0].text for item in bullets.items] == ["one"]
    assert doc.content == "ok"


def test_block_failing_validation_degrades_to_unknown():
    document = _with_trailing_doc({
        "type": "slide",
        "title": "Broken",
        "content": [{"type": "paragraph", "content": [{"type": "text", "text": 5}]}],
    })

    broken, doc = document.blocks
    assert isinstance(broken, UnknownBlock)
    assert broken.type == "slide"
    assert isinstance(doc, DocBlock)
    assert doc.content == "ok"


def test_malformed_blocks_never_break_conversion():
    document = {"blocks": [
        {"type": "sheet", "name": 2024, "cols": 5, "data": {"1,1": "x"}},
        {"type": "slide", "title": 7, "content": [{"type": "paragraph", "content": 5}]},
        {"type": "meta", "props": ["x"]},
        {"type": "slide", "content": [{"type": "paragraph", "content": [{"type": "link", "url": 1}]}]},
        {"type": "doc", "content": "ok"},
    ]}

    for fmt in OutputFormat:
        assert get_converter(fmt).convert(document).size > 0

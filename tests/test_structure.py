import pytest

from core.enums import UnitKind
from core.models import ImageRun, LinkRun, TextRun
from rendering.structure import split_content
from rendering.text import content_preview, display_value, extract_text, join_runs


def test_headings_lists_and_paragraphs():
    units = split_content(
        "# Title\n"
        "First line\n"
        "second line\n"
        "\n"
        "## Section\n"
        "- one\n"
        "* two\n"
        "### Deep"
    )

    assert [(u.kind, u.text, u.level) for u in units] == [
        (UnitKind.HEADING, "Title", 1),
        (UnitKind.PARAGRAPH, "First line second line", 0),
        (UnitKind.HEADING, "Section", 2),
        (UnitKind.LIST_ITEM, "one", 0),
        (UnitKind.LIST_ITEM, "two", 0),
        (UnitKind.HEADING, "Deep", 3),
    ]


def test_blank_line_separates_paragraphs():
    units = split_content("alpha\n\n  \nbeta")

    assert [u.text for u in units] == ["alpha", "beta"]
    assert all(u.kind == UnitKind.PARAGRAPH for u in units)


def test_list_item_closes_running_paragraph():
    units = split_content("intro\n- item\noutro")

    assert [u.kind for u in units] == [UnitKind.PARAGRAPH, UnitKind.LIST_ITEM, UnitKind.PARAGRAPH]


def test_markers_need_trailing_space():
    units = split_content("#hashtag\n-dash")

    assert len(units) == 1
    assert units[0].kind == UnitKind.PARAGRAPH
    assert units[0].text == "#hashtag -dash"


def test_empty_content_has_no_units():
    assert split_content("") == []
    assert split_content("\n\n") == []


def test_extract_text_per_run_kind():
    assert extract_text(TextRun(text="plain")) == "plain"
    assert extract_text(LinkRun(text="site", url="https://example.com")) == "site"
    assert extract_text(ImageRun(alt="logo", url="logo.png")) == "logo"


def test_extract_text_rejects_unknown_runs():
    with pytest.raises(TypeError):
        extract_text("raw string")


def test_join_runs():
    runs = [TextRun(text="See "), LinkRun(text="docs", url="https://example.com"), TextRun(text=".")]

    assert join_runs(runs) == "See docs."


def test_content_preview_strips_markers_and_truncates():
    assert content_preview("# Intro\nSome **bold** and `code`") == "Intro Some bold and code"

    preview = content_preview("x" * 80, limit=20)
    assert preview == "x" * 17 + "..."
    assert len(preview) == 20


def test_display_value():
    assert display_value(True) == "true"
    assert display_value(False) == "false"
    assert display_value(12) == "12"
    assert display_value(1.5) == "1.5"
    assert display_value("") == ""

import copy

import pytest


SAMPLE_DOCUMENT = {
    "blocks": [
        {
            "type": "meta",
            "props": {
                "title": "Test Document",
                "author": "Test Author",
                "date": "2025-01-01",
                "theme": "corporate",
            },
        },
        {
            "type": "doc",
            "content": (
                "# Introduction\n"
                "This is a **test document** with *various* formatting elements.\n"
                "\n"
                "## Key Features\n"
                "- Rich text support\n"
                "- Multiple output formats\n"
                "- Formula calculations"
            ),
        },
        {
            "type": "slide",
            "title": "Sample Slide",
            "content": [
                {
                    "type": "unordered_list",
                    "items": [
                        {"content": ["First bullet point"]},
                        {"content": [{"type": "text", "text": "Second bullet point"}]},
                        {"content": ["Third ", {"type": "link", "text": "bullet", "url": "https://example.com"}]},
                    ],
                },
                {"type": "paragraph", "content": ["Closing `remark`"]},
            ],
        },
        {
            "type": "sheet",
            "name": "Sales Data",
            "cols": ["Region", "Q1", "Q2", "Growth"],
            "data": {
                "1,1": "North", "1,2": 100, "1,3": 120,
                "2,1": "South", "2,2": 150, "2,3": 180,
            },
            "formulas": [
                {"cell": [1, 4], "expr": "((1,3)-(1,2))/(1,2)*100"},
                {"cell": [2, 4], "expr": "=((2,3)-(2,2))/(2,2)*100"},
            ],
        },
    ]
}


@pytest.fixture
def sample_document() -> dict:
    return copy.deepcopy(SAMPLE_DOCUMENT)


@pytest.fixture
def prose_document() -> dict:
    """No sheet blocks: spreadsheet output falls back to a summary"""
    return {
        "blocks": [
            {"type": "meta", "props": {"title": "Notes", "author": "Ana"}},
            {"type": "doc", "content": "# Notes\nSome **bold** text."},
            {"type": "slide", "title": "Agenda", "content": []},
        ]
    }

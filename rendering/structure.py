"""Doc-block prose -> headings, list items and paragraphs"""

from core.enums import UnitKind
from core.models import ContentUnit


HEADING_MARKERS = (("### ", 3), ("## ", 2), ("# ", 1))
LIST_MARKERS = ("- ", "* ")


def split_content(content: str) -> list[ContentUnit]:
    """
    Split doc content into structural units.

    Lines are trimmed. "# ", "## " and "### " start headings, "- " and "* "
    start list items, and a blank line closes the running paragraph.
    Consecutive text lines are joined with a single space.
    """
    units: list[ContentUnit] = []
    paragraph: list[str] = []

    def flush():
        if paragraph:
            units.append(ContentUnit(kind=UnitKind.PARAGRAPH, text=" ".join(paragraph)))
            paragraph.clear()

    for line in (content or "").split("\n"):
        stripped = line.strip()

        heading = _heading(stripped)
        if heading:
            flush()
            level, text = heading
            units.append(ContentUnit(kind=UnitKind.HEADING, text=text, level=level))
        elif stripped.startswith(LIST_MARKERS):
            flush()
            units.append(ContentUnit(kind=UnitKind.LIST_ITEM, text=stripped[2:]))
        elif not stripped:
            flush()
        else:
            paragraph.append(stripped)

    flush()
    return units


def _heading(line: str):
    for marker, level in HEADING_MARKERS:
        if line.startswith(marker):
            return level, line[len(marker):]
    return None

"""Format-agnostic rendering core shared by every converter"""

from .inline import tokenize_inline, strip_markers, MARKER_RULES
from .grid import (
    materialize_grid, parse_cell_key, parse_cell_map, parse_header_labels, normalize_cell_value
)
from .formulas import (
    column_letter, column_number, cell_address, translate_formula, translate_formulas
)
from .structure import split_content
from .text import extract_text, join_runs, content_preview, display_value

__all__ = [
    "tokenize_inline",
    "strip_markers",
    "MARKER_RULES",
    "materialize_grid",
    "parse_cell_key",
    "parse_cell_map",
    "parse_header_labels",
    "normalize_cell_value",
    "column_letter",
    "column_number",
    "cell_address",
    "translate_formula",
    "translate_formulas",
    "split_content",
    "extract_text",
    "join_runs",
    "content_preview",
    "display_value",
]

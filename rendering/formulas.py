"""Coordinate-pair formulas -> A1-style cell addresses"""

import re
from typing import Iterable

from loguru import logger

from core.models import FormulaEntry, TranslatedFormula


FORMULA_PREFIX = "="

# Only this exact shape is recognised; "(1 ,2)" or "( 1,2 )x" variants pass through
COORDINATE_REF = re.compile(r"\(\s*(\d+),\s*(\d+)\s*\)")


def column_letter(number: int) -> str:
    """
    Convert a 1-based column number to its letter code.

    Examples:
        1 -> A, 26 -> Z, 27 -> AA, 52 -> AZ, 53 -> BA
    """
    if number < 1:
        raise ValueError(f"Column number must be positive: {number}")

    letters = ""
    while number > 0:
        number, remainder = divmod(number - 1, 26)
        letters = chr(ord("A") + remainder) + letters
    return letters


def column_number(letters: str) -> int:
    """
    Convert a letter code back to its 1-based column number.

    Examples:
        A -> 1, Z -> 26, AA -> 27, BA -> 53
    """
    if not letters or not letters.isalpha() or not letters.isascii():
        raise ValueError(f"Invalid column letters: {letters!r}")

    number = 0
    for char in letters.upper():
        number = number * 26 + (ord(char) - ord("A") + 1)
    return number


def cell_address(row: int, col: int) -> str:
    """(1, 4) -> D1"""
    return f"{column_letter(col)}{row}"


def translate_formula(expr: str, row_offset: int = 0) -> str:
    """
    Rewrite every "(row, col)" reference in a formula as a cell address.

    Adds the leading "=" when missing. Everything that is not a recognised
    coordinate pair is copied unchanged; references outside the sheet are
    translated all the same. Pairs with a zero component have no address and
    are left as written.

    Args:
        expr: Raw formula expression
        row_offset: Rows to add to every referenced row

    Returns:
        Translated formula, e.g. "=(C1-B1)/B1*100"
    """
    if not expr.startswith(FORMULA_PREFIX):
        expr = FORMULA_PREFIX + expr

    def _replace(match: re.Match) -> str:
        row, col = int(match.group(1)), int(match.group(2))
        if row < 1 or col < 1:
            logger.debug(f"Leaving unaddressable reference {match.group(0)!r} as written")
            return match.group(0)
        return cell_address(row + row_offset, col)

    return COORDINATE_REF.sub(_replace, expr)


def translate_formulas(
    entries: Iterable[FormulaEntry],
    row_offset: int = 0
) -> list[TranslatedFormula]:
    """Translate formula entries, shifting target cells by the same offset"""
    translated = []
    for entry in entries:
        row, col = entry.cell
        row += row_offset
        translated.append(TranslatedFormula(
            row=row,
            col=col,
            address=cell_address(row, col),
            source=entry.expr,
            expression=translate_formula(entry.expr, row_offset),
        ))
    return translated

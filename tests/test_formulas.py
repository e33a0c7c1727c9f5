import pytest
from openpyxl.utils import get_column_letter

from core.models import FormulaEntry
from rendering.formulas import (
    cell_address, column_letter, column_number, translate_formula, translate_formulas
)


@pytest.mark.parametrize("number,letters", [
    (1, "A"), (26, "Z"), (27, "AA"), (52, "AZ"), (53, "BA"), (702, "ZZ"), (703, "AAA"),
])
def test_column_letter_examples(number, letters):
    assert column_letter(number) == letters
    assert column_number(letters) == number


def test_column_letter_matches_openpyxl():
    for number in range(1, 2001):
        assert column_letter(number) == get_column_letter(number)


def test_column_letter_rejects_non_positive():
    with pytest.raises(ValueError):
        column_letter(0)
    with pytest.raises(ValueError):
        column_number("A1")


def test_cell_address():
    assert cell_address(1, 4) == "D1"
    assert cell_address(10, 28) == "AB10"


def test_single_reference_gets_prefix():
    assert translate_formula("(1,4)") == "=D1"


def test_function_arguments_translated():
    assert translate_formula("SUM((1,2),(2,2))") == "=SUM(B1,B2)"


def test_arithmetic_expression():
    assert translate_formula("((1,3)-(1,2))/(1,2)*100") == "=(C1-B1)/B1*100"


def test_existing_prefix_not_doubled():
    assert translate_formula("=(2,2)*2") == "=B2*2"


def test_a1_formula_passes_through():
    assert translate_formula("=SUM(A1:A10)") == "=SUM(A1:A10)"


def test_unrecognised_spacing_left_as_written():
    assert translate_formula("(2 ,3)") == "=(2 ,3)"


def test_out_of_range_reference_still_translated():
    assert translate_formula("(100,30)") == "=AD100"


def test_zero_component_left_as_written():
    assert translate_formula("(0,3)+(1,1)") == "=(0,3)+A1"


def test_row_offset_shifts_references():
    assert translate_formula("(1,2)+(2,2)", row_offset=3) == "=B4+B5"


def test_translate_formulas_shifts_target_cells():
    entries = [FormulaEntry(cell=(1, 4), expr="(1,3)-(1,2)")]

    translated = translate_formulas(entries, row_offset=2)

    assert len(translated) == 1
    formula = translated[0]
    assert (formula.row, formula.col) == (3, 4)
    assert formula.address == "D3"
    assert formula.source == "(1,3)-(1,2)"
    assert formula.expression == "=C3-B3"

import pytest

from starling_spaces.categories import (
    SPENDING_CATEGORIES,
    category_choices,
    is_known_category,
    validate_category,
)
from starling_spaces.errors import ValidationError


def test_allow_list_is_unique_and_upper_snake_case():
    assert len(SPENDING_CATEGORIES) == len(set(SPENDING_CATEGORIES))
    assert len(SPENDING_CATEGORIES) >= 80
    for code in SPENDING_CATEGORIES:
        assert code == code.upper()
        assert " " not in code


def test_validate_category_normalizes_case_and_whitespace():
    assert validate_category("EATING_OUT") == "EATING_OUT"
    assert validate_category("  eating_out ") == "EATING_OUT"


@pytest.mark.parametrize("code", ["NOT_A_REAL_CODE", "", "Eating Out"])
def test_validate_category_rejects_unknown_codes(code: str):
    with pytest.raises(ValidationError):
        validate_category(code)


def test_choices_pair_codes_with_labels():
    choices = dict(category_choices())
    assert choices["EATING_OUT"] == "Eating Out"
    assert is_known_category("GROCERIES")
    assert not is_known_category("groceries")

import pytest

from task_service.exceptions import ValidationError
from task_service.validation import description_errors, title_errors, validate_task_fields


@pytest.mark.parametrize("title", [None, "", "   "])
def test_title_required(title) -> None:
    assert title_errors(title) == "Title is required"


def test_title_length_bounds() -> None:
    assert title_errors("x") is None
    assert title_errors("x" * 255) is None
    assert title_errors("x" * 256) == "Title must be between 1 and 255 characters"


def test_description_length_bound() -> None:
    assert description_errors(None) is None
    assert description_errors("d" * 1000) is None
    assert description_errors("d" * 1001) == "Description cannot exceed 1000 characters"


def test_validate_task_fields_reports_every_field() -> None:
    with pytest.raises(ValidationError) as excinfo:
        validate_task_fields("", "d" * 1001)

    assert set(excinfo.value.errors) == {"title", "description"}


def test_validate_task_fields_accepts_valid_input() -> None:
    validate_task_fields("Learn Docker", None)

import pytest

from task_api.core.errors import ValidationError
from task_api.models.task import TaskStatus
from task_api.services.task_inputs import (
    CreateTaskInput,
    UpdateTaskInput,
    validate_create,
    validate_update,
)


def test_validate_create_trims_and_defaults():
    values = validate_create(CreateTaskInput(title="  Buy groceries  ", description="  "))

    assert values.title == "Buy groceries"
    assert values.description is None
    assert values.status == "pending"


@pytest.mark.parametrize("title", ["", "   ", "\t\n", None, 42])
def test_validate_create_rejects_missing_or_blank_title(title):
    with pytest.raises(ValidationError) as excinfo:
        validate_create(CreateTaskInput(title=title))

    assert excinfo.value.field == "title"
    assert "required" in excinfo.value.message


def test_validate_create_title_length_counts_after_trim():
    assert validate_create(CreateTaskInput(title="  " + "x" * 255 + "  ")).title == "x" * 255

    with pytest.raises(ValidationError, match="at most 255"):
        validate_create(CreateTaskInput(title="x" * 256))


@pytest.mark.parametrize("status", ["pending", "in_progress", "completed", TaskStatus.COMPLETED])
def test_validate_create_accepts_known_statuses(status):
    values = validate_create(CreateTaskInput(title="t", status=status))

    assert values.status in ("pending", "in_progress", "completed")


@pytest.mark.parametrize("status", ["done", "PENDING", "", 1])
def test_validate_create_rejects_unknown_status(status):
    with pytest.raises(ValidationError) as excinfo:
        validate_create(CreateTaskInput(title="t", status=status))

    assert excinfo.value.field == "status"
    assert excinfo.value.message == (
        "Invalid status. Must be one of: pending, in_progress, completed"
    )


def test_validate_update_only_touches_present_fields():
    values = validate_update(UpdateTaskInput.from_fields(status="completed"))

    assert values.present == frozenset({"status"})
    assert values.status == "completed"


def test_validate_update_distinguishes_empty_description_from_omitted():
    cleared = validate_update(UpdateTaskInput.from_fields(description="   "))
    omitted = validate_update(UpdateTaskInput.from_fields(title="x"))

    assert "description" in cleared.present
    assert cleared.description is None
    assert "description" not in omitted.present


def test_validate_update_rejects_blank_title():
    with pytest.raises(ValidationError, match="Title must be a non-empty string"):
        validate_update(UpdateTaskInput.from_fields(title="  "))


def test_validate_update_rejects_null_status():
    with pytest.raises(ValidationError):
        validate_update(UpdateTaskInput.from_fields(status=None))


def test_from_fields_rejects_unknown_names():
    with pytest.raises(TypeError):
        UpdateTaskInput.from_fields(priority="high")

"""Unit tests for validation and form error conversions."""

from __future__ import annotations

from fastapi.exceptions import RequestValidationError
from pydantic import BaseModel
from pydantic import Field
from pydantic import ValidationError
from pydantic import model_validator
import pytest

from api_errors.core.codes import ErrorCode
from api_errors.core.errors import ApiError
from api_errors.core.transformers import FormValidationError
from api_errors.core.transformers import api_error_from_validation_error
from api_errors.core.transformers import form_validation_error_from_api_error
from api_errors.core.transformers import form_validation_error_from_validation_error
from api_errors.schemas.error import BadRequest
from api_errors.schemas.error import ErrorInfo
from api_errors.schemas.error import FieldViolation


class _Signup(BaseModel):
    email: str
    password: str = Field(min_length=8)


class _PasswordChange(BaseModel):
    password: str
    confirmation: str

    @model_validator(mode="after")
    def _passwords_match(self) -> "_PasswordChange":
        if self.password != self.confirmation:
            raise ValueError("passwords do not match")
        return self


def _validation_error(model: type[BaseModel], data: dict[str, object]) -> ValidationError:
    with pytest.raises(ValidationError) as exc_info:
        model.model_validate(data)
    return exc_info.value


def test_validation_error_becomes_invalid_argument_with_violations() -> None:
    error = api_error_from_validation_error(_validation_error(_Signup, {"password": "1"}))

    assert error.code is ErrorCode.INVALID_ARGUMENT
    assert error.message == "Validation Error"
    (bad_request,) = error.details
    assert isinstance(bad_request, BadRequest)
    assert [violation.field for violation in bad_request.field_violations] == ["email", "password"]
    assert bad_request.field_violations[0].description == "Field required"


def test_form_level_errors_are_appended_to_message() -> None:
    exc = _validation_error(_PasswordChange, {"password": "a", "confirmation": "b"})

    error = api_error_from_validation_error(exc)

    assert error.message.startswith("Validation Error: ")
    assert "passwords do not match" in error.message
    assert error.details == (BadRequest(field_violations=[]),)


def test_request_validation_errors_group_messages_per_field() -> None:
    exc = RequestValidationError(
        [
            {"loc": ("body", "password"), "msg": "too short", "type": "string_too_short"},
            {"loc": ("query", "limit"), "msg": "not an integer", "type": "int_parsing"},
            {"loc": ("body", "password"), "msg": "needs a digit", "type": "value_error"},
            {"loc": ("body", "pets", 0, "name"), "msg": "Field required", "type": "missing"},
        ]
    )

    error = api_error_from_validation_error(exc)

    assert error.details == (
        BadRequest(
            field_violations=[
                FieldViolation(field="password", description="too short; needs a digit"),
                FieldViolation(field="limit", description="not an integer"),
                FieldViolation(field="pets[0].name", description="Field required"),
            ]
        ),
    )


def test_list_indexes_render_as_brackets_in_field_paths() -> None:
    exc = RequestValidationError(
        [
            {"loc": ("body", "email_addresses", 1, "email"), "msg": "invalid email", "type": "value_error"},
            {"loc": ("body", "email_addresses", 3, "type", 2), "msg": "unknown type", "type": "enum"},
            {"loc": ("body", 0, "name"), "msg": "Field required", "type": "missing"},
        ]
    )

    form_error = form_validation_error_from_validation_error(exc)

    assert list(form_error.field_errors) == ["email_addresses[1].email", "email_addresses[3].type[2]", "[0].name"]


def test_form_validation_error_from_api_error_collects_violations() -> None:
    error = ApiError(
        ErrorCode.INVALID_ARGUMENT,
        "invalid input parameters",
        [
            ErrorInfo(reason="SIGNUP_REJECTED", metadata={}),
            BadRequest(
                field_violations=[
                    FieldViolation(field="email", description="must be a valid email address"),
                    FieldViolation(field="password", description="must be at least 8 characters long"),
                ]
            ),
        ],
    )

    form_error = form_validation_error_from_api_error(error)

    assert form_error.form_errors == ["INVALID_ARGUMENT: invalid input parameters"]
    assert form_error.field_errors == {
        "email": ["must be a valid email address"],
        "password": ["must be at least 8 characters long"],
    }


def test_form_validation_error_from_validation_error_splits_form_and_fields() -> None:
    form_error = form_validation_error_from_validation_error(_validation_error(_Signup, {"password": "1"}))

    assert form_error.form_errors == []
    assert list(form_error.field_errors) == ["email", "password"]


def test_form_validation_error_renders_all_errors() -> None:
    form_error = FormValidationError(["NOT_FOUND: gone"], {"email": ["taken", "too long"], "name": ["required"]})

    assert str(form_error) == "FormValidationError: NOT_FOUND: gone; Fields: email: taken, too long; name: required"

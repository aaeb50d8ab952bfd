"""Conversions between validation failures, API errors and form errors."""

from __future__ import annotations

from collections.abc import Iterable
from collections.abc import Mapping
from typing import Any

from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError

from api_errors.core.codes import ErrorCode
from api_errors.core.errors import ApiError
from api_errors.schemas.error import BadRequest
from api_errors.schemas.error import FieldViolation

VALIDATION_ERROR_MESSAGE = "Validation Error"

_LOCATION_PREFIXES = frozenset({"body", "query", "path", "header", "cookie"})


class FormValidationError(Exception):
    """Validation failure shaped for form UIs: form-wide and per-field errors."""

    def __init__(self, form_errors: Iterable[str], field_errors: Mapping[str, Iterable[str]]) -> None:
        super().__init__("FormValidationError")
        self.form_errors = list(form_errors)
        self.field_errors = {field: list(errors) for field, errors in field_errors.items()}

    def __str__(self) -> str:
        fields = "; ".join(f"{field}: {', '.join(errors)}" for field, errors in self.field_errors.items())
        return f"FormValidationError: {', '.join(self.form_errors)}; Fields: {fields}"


def _format_location(location: tuple[Any, ...] | list[Any] | Any) -> str | None:
    if not isinstance(location, (tuple, list)):
        return str(location)

    path = ""
    for part in location:
        if isinstance(part, int) and not isinstance(part, bool):
            path += f"[{part}]"
        elif part not in _LOCATION_PREFIXES:
            path += f".{part}" if path else str(part)

    # Empty or prefix-only locations describe the request as a whole.
    return path or None


def _flatten(issues: Iterable[Mapping[str, Any]]) -> tuple[list[str], dict[str, list[str]]]:
    form_errors: list[str] = []
    field_errors: dict[str, list[str]] = {}
    for issue in issues:
        message = str(issue.get("msg", "Invalid value"))
        field = _format_location(issue.get("loc", ()))
        if field is None:
            form_errors.append(message)
        else:
            field_errors.setdefault(field, []).append(message)
    return form_errors, field_errors


def api_error_from_validation_error(exc: ValidationError | RequestValidationError) -> ApiError:
    """Report a failed validation as INVALID_ARGUMENT with a BadRequest detail."""
    form_errors, field_errors = _flatten(exc.errors())

    message = VALIDATION_ERROR_MESSAGE
    if form_errors:
        message += ": " + "; ".join(form_errors)

    violations = [
        FieldViolation(field=field, description="; ".join(errors)) for field, errors in field_errors.items()
    ]
    return ApiError(ErrorCode.INVALID_ARGUMENT, message, [BadRequest(field_violations=violations)])


def form_validation_error_from_api_error(error: ApiError) -> FormValidationError:
    """Expose an API error's field violations as form errors."""
    field_errors: dict[str, list[str]] = {}
    for detail in error.details:
        if isinstance(detail, BadRequest):
            for violation in detail.field_violations:
                field_errors[violation.field] = [violation.description]

    return FormValidationError([f"{error.code.value}: {error.message}"], field_errors)


def form_validation_error_from_validation_error(exc: ValidationError | RequestValidationError) -> FormValidationError:
    form_errors, field_errors = _flatten(exc.errors())
    return FormValidationError(form_errors, field_errors)

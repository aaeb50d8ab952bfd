"""API error envelope: construction, rendering and wire (de)serialization."""

from __future__ import annotations

from collections.abc import Mapping
from collections.abc import Sequence
import logging
from typing import Any
from typing import Protocol

from fastapi.responses import JSONResponse
from pydantic import ValidationError

from api_errors.core.codes import ErrorCode
from api_errors.core.codes import code_to_status
from api_errors.core.config import get_error_settings
from api_errors.schemas.error import DETAIL_TYPE_KEY
from api_errors.schemas.error import ERROR_DETAILS_ADAPTER
from api_errors.schemas.error import KNOWN_DETAIL_TYPES
from api_errors.schemas.error import ErrorDetails
from api_errors.schemas.error import ErrorEnvelope

logger = logging.getLogger(__name__)


class ApiErrorParseError(ValueError):
    """Raised when an error payload cannot be decoded into an ApiError."""


class _JSONResponseLike(Protocol):
    def json(self) -> Any: ...


class ApiError(Exception):
    """Structured error returned to API callers.

    ``message`` is a developer-facing English text. Localized text belongs in a
    ``LocalizedMessage`` detail, and dynamic values used in the message should
    also be listed in an ``ErrorInfo`` detail's metadata.

    Instances are immutable and compare by value.
    """

    def __init__(
        self,
        code: ErrorCode,
        message: str,
        details: Sequence[ErrorDetails] | None = None,
    ) -> None:
        message = str(message)
        super().__init__(message)
        self._code = code
        self._message = message
        self._details: tuple[ErrorDetails, ...] = tuple(details) if details else ()

    @classmethod
    def with_details(cls, code: ErrorCode, message: str, details: Sequence[ErrorDetails]) -> ApiError:
        return cls(code, message, details)

    @property
    def code(self) -> ErrorCode:
        return self._code

    @property
    def message(self) -> str:
        return self._message

    @property
    def details(self) -> tuple[ErrorDetails, ...]:
        return self._details

    @property
    def status_code(self) -> int:
        return code_to_status(self._code)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ApiError):
            return NotImplemented
        return (self._code, self._message, self._details) == (other._code, other._message, other._details)

    def __hash__(self) -> int:
        return hash((self._code, self._message))

    def __str__(self) -> str:
        return f"ApiError {{ code: {self._code.value}, message: {self._message!r}, details: {list(self._details)!r} }}"

    def __repr__(self) -> str:
        return f"ApiError(code={self._code!r}, message={self._message!r}, details={self._details!r})"

    def to_payload(self) -> dict[str, Any]:
        """Return the JSON-compatible wire payload."""
        return {
            "code": self._code.value,
            "message": self._message,
            "details": [ERROR_DETAILS_ADAPTER.dump_python(detail, mode="json", by_alias=True) for detail in self._details],
        }

    def to_log_dict(self) -> dict[str, Any]:
        """Return a structured form suitable for log records."""
        return {"status": self.status_code, **self.to_payload()}

    def into_response(self) -> JSONResponse:
        """Render this error as an HTTP response with its mapped status."""
        return JSONResponse(status_code=self.status_code, content=self.to_payload())

    @classmethod
    def from_payload(cls, payload: Any, *, strict: bool | None = None) -> ApiError:
        """Rebuild an ApiError from a decoded wire payload.

        Unknown ``code`` tokens are always rejected. Details with an unknown
        ``@type`` are dropped unless ``strict`` is set, in which case they are
        rejected as well. ``strict=None`` uses the configured default.
        """
        if strict is None:
            strict = get_error_settings().strict_details

        try:
            envelope = ErrorEnvelope.model_validate(payload)
        except ValidationError as exc:
            raise ApiErrorParseError("Invalid error payload") from exc

        details: list[ErrorDetails] = []
        for index, raw_detail in enumerate(envelope.details):
            detail_type = raw_detail.get(DETAIL_TYPE_KEY)
            if not isinstance(detail_type, str) or detail_type not in KNOWN_DETAIL_TYPES:
                if strict:
                    raise ApiErrorParseError(f"Unknown error detail type at details[{index}]: {detail_type!r}")
                logger.debug("Dropping error detail with unknown type=%r at index=%s", detail_type, index)
                continue
            try:
                details.append(ERROR_DETAILS_ADAPTER.validate_python(raw_detail))
            except ValidationError as exc:
                raise ApiErrorParseError(f"Invalid {detail_type} detail at details[{index}]") from exc

        return cls(envelope.code, envelope.message, details)

    @classmethod
    def from_response(cls, response: _JSONResponseLike, *, strict: bool | None = None) -> ApiError:
        """Decode the JSON body of an HTTP client response into an ApiError."""
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiErrorParseError("Error response body is not valid JSON") from exc
        if not isinstance(payload, Mapping):
            raise ApiErrorParseError("Error response body must be a JSON object")
        return cls.from_payload(payload, strict=strict)

"""Standardized API error model for HTTP services."""

from api_errors.core.codes import ErrorCode
from api_errors.core.codes import code_to_status
from api_errors.core.codes import is_retryable
from api_errors.core.errors import ApiError
from api_errors.core.errors import ApiErrorParseError
from api_errors.core.handlers import register_error_handlers
from api_errors.core.transformers import FormValidationError
from api_errors.core.transformers import api_error_from_validation_error
from api_errors.core.transformers import form_validation_error_from_api_error
from api_errors.core.transformers import form_validation_error_from_validation_error
from api_errors.schemas.error import BadRequest
from api_errors.schemas.error import ErrorDetails
from api_errors.schemas.error import ErrorInfo
from api_errors.schemas.error import FieldViolation
from api_errors.schemas.error import LocalizedMessage

__all__ = [
    "ApiError",
    "ApiErrorParseError",
    "BadRequest",
    "ErrorCode",
    "ErrorDetails",
    "ErrorInfo",
    "FieldViolation",
    "FormValidationError",
    "LocalizedMessage",
    "api_error_from_validation_error",
    "code_to_status",
    "form_validation_error_from_api_error",
    "form_validation_error_from_validation_error",
    "is_retryable",
    "register_error_handlers",
]

"""Error detail schemas carried inside the API error envelope."""

from __future__ import annotations

from typing import Annotated
from typing import Any
from typing import Literal
from typing import Union
from typing import get_args

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import TypeAdapter

from api_errors.core.codes import ErrorCode

DETAIL_TYPE_KEY = "@type"


class FieldViolation(BaseModel):
    """Single invalid request field and why it was rejected.

    ``field`` is a dot-separated path into the request body, e.g.
    ``email_addresses[1].email``.
    """

    model_config = ConfigDict(frozen=True)

    field: str
    description: str


class _Detail(BaseModel):
    model_config = ConfigDict(frozen=True)


class ErrorInfo(_Detail):
    """Machine-readable cause of an error.

    ``reason`` is a terse UPPER_SNAKE_CASE identifier such as ``NO_STOCK``.
    Any dynamic value that appears in the envelope message must also be
    present in ``metadata``.
    """

    type: Literal["ErrorInfo"] = Field(default="ErrorInfo", alias=DETAIL_TYPE_KEY)
    reason: str
    metadata: dict[str, str]


class BadRequest(_Detail):
    """Syntactic violations found in a client request."""

    type: Literal["BadRequest"] = Field(default="BadRequest", alias=DETAIL_TYPE_KEY)
    field_violations: tuple[FieldViolation, ...]


class LocalizedMessage(_Detail):
    """Error text translated for a BCP 47 locale such as ``en-US`` or ``fr-CH``."""

    type: Literal["LocalizedMessage"] = Field(default="LocalizedMessage", alias=DETAIL_TYPE_KEY)
    locale: str
    message: str


ErrorDetails = Annotated[
    Union[ErrorInfo, BadRequest, LocalizedMessage],
    Field(discriminator="type"),
]

ERROR_DETAILS_ADAPTER: TypeAdapter[ErrorDetails] = TypeAdapter(ErrorDetails)

KNOWN_DETAIL_TYPES = frozenset(
    tag
    for variant in get_args(get_args(ErrorDetails)[0])
    for tag in get_args(variant.model_fields["type"].annotation)
)


class ErrorEnvelope(BaseModel):
    """Wire shape of an error response body before detail decoding."""

    model_config = ConfigDict(frozen=True)

    code: ErrorCode
    message: str
    details: list[dict[str, Any]]

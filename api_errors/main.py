"""Demo FastAPI application serving every failure through the API error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from pydantic import BaseModel
from pydantic import Field

from api_errors.core.codes import ErrorCode
from api_errors.core.errors import ApiError
from api_errors.core.handlers import register_error_handlers
from api_errors.schemas.error import ErrorInfo
from api_errors.schemas.error import LocalizedMessage

logger = logging.getLogger(__name__)


class Pet(BaseModel):
    name: str
    type: str


class UserCreate(BaseModel):
    """Payload to create a user."""

    first_name: str
    last_name: str
    pets: list[Pet] = Field(min_length=1)


app = FastAPI(title="api-errors demo")
register_error_handlers(app)


@app.get("/ping")
def ping() -> str:
    return "pong"


@app.get("/users/{user_id}")
def get_user(user_id: int) -> dict[str, str]:
    """Every lookup misses: there is no user store behind this demo."""
    raise ApiError(
        ErrorCode.NOT_FOUND,
        f"user {user_id} not found",
        [
            ErrorInfo(reason="USER_NOT_FOUND", metadata={"user_id": str(user_id)}),
            LocalizedMessage(locale="en-US", message=f"We could not find user {user_id}."),
        ],
    )


@app.post("/users", status_code=201)
def create_user(payload: UserCreate) -> UserCreate:
    """Validate and echo back a user."""
    logger.info("Creating user %s", payload.first_name)
    return payload

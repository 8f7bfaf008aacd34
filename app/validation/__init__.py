"""Request validation.

Each endpoint declares a `RequestSchema`; `validate` checks raw input against
it and returns either `Valid` (the parsed model) or `Invalid` (the message of
the first failing field). The `body` and `query` dependency factories run the
check before the route handler and raise `ValidationFailure` on `Invalid`.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import dataclass
from json import JSONDecodeError
from typing import Any, ClassVar, Generic, TypeVar, Union

from fastapi import Request
from pydantic import BaseModel, ConfigDict, ValidationError

from app.utils.base import ValidationFailure


logger = logging.getLogger(__name__)

INVALID_BODY = "Invalid request body"


class RequestSchema(BaseModel):
    """Base for endpoint schemas.

    `messages` maps a field name to the message reported for any error on
    that field; `{name}` placeholders are filled from the raw input.
    """
    model_config = ConfigDict(extra="forbid")

    messages: ClassVar[dict[str, str]] = {}


S = TypeVar("S", bound=RequestSchema)


@dataclass(frozen=True)
class Valid(Generic[S]):
    value: S


@dataclass(frozen=True)
class Invalid:
    message: str
    field: str | None = None


ValidationResult = Union[Valid[S], Invalid]


def _default_message(field: str, error: dict) -> str:
    if error["type"] == "missing":
        return f'"{field}" is required'
    if error["type"] == "extra_forbidden":
        return f'"{field}" is not allowed'
    msg: str = error["msg"]
    # Drop pydantic's "Value error, " prefix from custom validators.
    if msg.startswith("Value error, "):
        msg = msg[len("Value error, "):]
    return f'"{field}" {msg[:1].lower()}{msg[1:]}'


def validate(schema: type[S], data: Any) -> ValidationResult:
    """Check `data` against `schema`, reporting only the first failure."""
    if not isinstance(data, dict):
        return Invalid(INVALID_BODY)
    try:
        return Valid(schema.model_validate(data))
    except ValidationError as exc:
        error = exc.errors()[0]
        field = str(error["loc"][0]) if error["loc"] else "value"
        template = schema.messages.get(field)
        if template is None:
            return Invalid(_default_message(field, error), field)
        values = defaultdict(str, {k: v for k, v in data.items() if isinstance(v, str)})
        return Invalid(template.format_map(values), field)


def _unwrap(result: ValidationResult) -> Any:
    if isinstance(result, Invalid):
        logger.debug("Validation failed on %s: %s", result.field, result.message)
        raise ValidationFailure(result.message)
    return result.value


def body(schema: type[S]):
    """Return a FastAPI dependency validating the JSON body against `schema`."""

    async def _dependency(request: Request) -> S:
        try:
            data = await request.json()
        except (JSONDecodeError, UnicodeDecodeError):
            raise ValidationFailure(INVALID_BODY)
        return _unwrap(validate(schema, data))

    return _dependency


def query(schema: type[S]):
    """Return a FastAPI dependency validating query parameters against `schema`."""

    def _dependency(request: Request) -> S:
        return _unwrap(validate(schema, dict(request.query_params)))

    return _dependency

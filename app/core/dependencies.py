"""
Request-level helpers shared by the API routers.
Keep this file lean: body size enforcement, JSON parsing, schema validation.
Business logic belongs in services/.
"""
import json
from typing import Any, Type, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError as PydanticValidationError

from app.core.exceptions import PayloadTooLargeException, ValidationException

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def enforce_body_limit(request: Request, max_bytes: int) -> bytes:
    """
    Returns the raw body, or raises PayloadTooLargeException.

    The declared Content-Length is checked first; the body is then read as a
    stream and abandoned as soon as it passes `max_bytes`, so an oversized or
    lying client never gets its payload buffered or parsed.
    """
    content_length = request.headers.get("content-length")
    if content_length and content_length.isdigit() and int(content_length) > max_bytes:
        raise PayloadTooLargeException()

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise PayloadTooLargeException()
    return bytes(body)


async def read_json_body(request: Request, max_bytes: int) -> Any:
    """Size check, then JSON decode. Either step failing ends the request."""
    raw = await enforce_body_limit(request, max_bytes)
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise ValidationException("Invalid JSON format")


def validate_payload(schema: Type[SchemaT], payload: Any) -> SchemaT:
    """
    Run `schema` over a decoded payload. Only the first failing check is
    reported, with the message the schema's validator raised.
    """
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationException(_first_error_message(exc)) from exc


def _first_error_message(exc: PydanticValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid input data"
    # ValueErrors raised by our validators are kept in ctx["error"]
    original = errors[0].get("ctx", {}).get("error")
    if original is not None:
        return str(original)
    return "Invalid input data"

"""HTTP-level helpers: JSON responses, body parsing and API errors."""

from __future__ import annotations

from dataclasses import dataclass
from http import HTTPStatus

from .appmodels import ApiResponse
from .decode import DecodeError, decode
from .encode import encode

JSON_CONTENT_TYPE = "application/json"


@dataclass(frozen=True)
class Response:
    """A finished HTTP response."""

    status: int
    body: bytes
    content_type: str = JSON_CONTENT_TYPE

    @property
    def headers(self):
        return {"Content-Type": self.content_type}


class AppError(Exception):
    """An error that turns into a JSON error reply."""

    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, message):
        text = str(message)
        super().__init__(text)
        self.message = text

    def to_response(self):
        """Render the error as an ``ApiResponse`` error body."""
        return Response(int(self.status), encode(ApiResponse.error(self.message)))


class BadRequest(AppError):
    status = HTTPStatus.BAD_REQUEST


class Unauthorized(AppError):
    status = HTTPStatus.UNAUTHORIZED


class NotFound(AppError):
    status = HTTPStatus.NOT_FOUND


class InternalServerError(AppError):
    status = HTTPStatus.INTERNAL_SERVER_ERROR


def json_response(value):
    """Encode a value as a JSON reply, or a 500 reply if it cannot be encoded."""
    try:
        body = encode(value)
    except (TypeError, ValueError) as exc:
        failure = ApiResponse.error(f"Serialization error: {exc}")
        return Response(int(HTTPStatus.INTERNAL_SERVER_ERROR), encode(failure))
    return Response(int(HTTPStatus.OK), body)


def parse_json_body(body, cls):
    """Decode a request body, raising BadRequest when it does not fit."""
    try:
        return decode(body, cls)
    except DecodeError as exc:
        raise BadRequest(f"JSON Decode error: {exc}") from exc
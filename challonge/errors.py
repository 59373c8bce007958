"""Error types raised by the Challonge client, and response classification."""

from __future__ import annotations

import json
import logging
from typing import Any

import requests

logger = logging.getLogger(__name__)


class ChallongeError(Exception):
    """Base class for every error raised by this package."""


class TransportError(ChallongeError):
    """The HTTP layer failed before a response was received."""

    def __init__(self, cause: requests.RequestException) -> None:
        super().__init__(f"Transport failure: {cause}")
        self.cause = cause


class StatusError(ChallongeError):
    """The service answered with a non-success status code.

    ``body`` holds the parsed JSON document when the body was valid JSON,
    otherwise the raw text.
    """

    def __init__(self, status_code: int, body: Any = None) -> None:
        super().__init__(f"Unexpected status {status_code}")
        self.status_code = status_code
        self.body = body


class ValidationError(StatusError):
    """The service rejected the request with a list of field errors."""

    def __init__(self, status_code: int, messages: list[str]) -> None:
        super().__init__(status_code, {"errors": messages})
        self.messages = messages

    def __str__(self) -> str:
        return f"Validation failed ({self.status_code}): {'; '.join(self.messages)}"


class JsonSyntaxError(ChallongeError):
    """The response body is not a JSON document."""

    def __init__(self, cause: ValueError, text: str = "") -> None:
        super().__init__(f"Malformed JSON: {cause}")
        self.cause = cause
        self.text = text


class DecodeError(ChallongeError):
    """Valid JSON that does not have the expected structure.

    ``description`` is a fixed string naming the failed expectation and
    ``value`` echoes the JSON value that was received (or the missing key).
    """

    def __init__(self, description: str, value: Any = None) -> None:
        super().__init__(f"{description}: {value!r}")
        self.description = description
        self.value = value


class EncodeError(ChallongeError):
    """A builder value that cannot be written as form fields."""

    def __init__(self, description: str, value: Any = None) -> None:
        super().__init__(f"{description}: {value!r}")
        self.description = description
        self.value = value


def transport_error(exc: requests.RequestException) -> TransportError:
    """Wrap an exception raised by ``requests`` while sending."""
    return TransportError(exc)


def parse_json(text: str) -> Any:
    """Parse a JSON document, raising ``JsonSyntaxError`` on malformed input."""
    try:
        return json.loads(text)
    except ValueError as e:
        raise JsonSyntaxError(e, text) from e


def _validation_messages(body: Any) -> list[str] | None:
    if not isinstance(body, dict):
        return None
    errors = body.get("errors")
    if not isinstance(errors, list) or not all(isinstance(e, str) for e in errors):
        return None
    return errors


def error_from_response(response: requests.Response) -> StatusError:
    """Build the error for a non-success response.

    Bodies shaped like ``{"errors": [...]}`` become a ``ValidationError``.
    """
    try:
        body = json.loads(response.text) if response.text else None
    except ValueError:
        body = response.text

    messages = _validation_messages(body)
    if messages is not None:
        logger.debug("Validation errors from %s: %s", response.url, messages)
        return ValidationError(response.status_code, messages)
    return StatusError(response.status_code, body)


def check_response(response: requests.Response) -> Any:
    """Return the parsed JSON body of a successful response, or raise."""
    if not 200 <= response.status_code < 300:
        raise error_from_response(response)
    if not response.text:
        return None
    return parse_json(response.text)

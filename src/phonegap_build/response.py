"""Interpret transport results as success or failure outcomes."""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Union

from .config import SUCCESS_CODES
from .transport import TransportResult

logger = logging.getLogger(__name__)

# Used when a transport reports a failure without a message
TRANSPORT_ERROR = "Transport error"


@dataclass(frozen=True)
class Success:
    """The request succeeded; ``payload`` is the decoded JSON body."""

    payload: Any = None

    @property
    def ok(self) -> bool:
        return True

    @property
    def error(self) -> str:
        return ""


@dataclass(frozen=True)
class Failure:
    """The request failed.

    Attributes:
        message: Human readable description of what went wrong.
        status_code: HTTP status, when a response was received.
    """

    message: str
    status_code: int | None = None

    @property
    def ok(self) -> bool:
        return False

    @property
    def error(self) -> str:
        return self.message

    @property
    def payload(self) -> None:
        return None


Outcome = Union[Success, Failure]


def flatten_error(
    value: Any, key_value_separator: str = " - ", pair_separator: str = "; "
) -> str:
    """Render an ``error`` value from a response body as one string.

    Mappings become ``"key - value; key - value"`` in insertion order. Only
    the top level is flattened; nested values are rendered with ``str``.

        >>> flatten_error({"keystore_pw": "invalid", "key_pw": "invalid"})
        'keystore_pw - invalid; key_pw - invalid'
    """
    if not isinstance(value, Mapping):
        return str(value)
    return pair_separator.join(
        f"{key}{key_value_separator}{item}" for key, item in value.items()
    )


def decode_body(body: bytes) -> Any:
    """Parse a JSON body, returning None when it is empty or not JSON."""
    if not body:
        return None
    try:
        return json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        return None


class ResponseInterpreter:
    """Classify transport results against a set of accepted status codes."""

    def __init__(self, success_codes: Iterable[int] = SUCCESS_CODES) -> None:
        self.success_codes = frozenset(success_codes)

    def interpret(self, result: TransportResult) -> Outcome:
        """Turn a transport result into an Outcome.

        A transport error wins over everything else. Otherwise an ``error``
        key in the body makes the outcome a failure even when the status code
        says success, since the service reports some problems (a key that is
        already unlocked, an unknown platform) that way.
        """
        if result.error is not None:
            return Failure(result.error or TRANSPORT_ERROR)

        status = result.status_code
        succeeded = status in self.success_codes
        payload = decode_body(result.body)

        message = ""
        if isinstance(payload, Mapping) and payload.get("error"):
            message = flatten_error(payload["error"])
            succeeded = False

        if succeeded:
            return Success(payload)

        if not message:
            message = f"Request failed with status {status}"
        logger.debug("Request failed (%s): %s", status, message)
        return Failure(message, status_code=status)

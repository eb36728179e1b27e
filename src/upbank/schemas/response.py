"""
Two-armed API response.

Every operation returns `ApiResponse[T]`, which is either `Ok[T]` (the
`{"data": ..., "links": ...}` success shape) or `Err` (the `{"errors": [...]}`
error shape). Consumers match on both arms:

    match response:
        case Ok(data=accounts, links=links):
            ...
        case Err(error=error):
            ...

Decoding goes by body shape, not by HTTP status. Depending on the endpoint
and API revision, structured errors arrive with 200 or with 4xx, so the
status code is only used to flag disagreements in the log.
"""

import json
import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from .errors import ErrorModel
from .resource import DecodingError, expect_object, optional_field

logger = logging.getLogger(__name__)

T = TypeVar("T")
U = TypeVar("U")


@dataclass
class PaginationLinks:
    """Cursor links for a paginated list; absolute, directly fetchable URLs."""

    prev: str | None = None
    next: str | None = None

    @classmethod
    def from_dict(cls, raw: Any) -> "PaginationLinks":
        obj = expect_object(raw, "links")
        return cls(
            prev=optional_field(obj, "prev", str, "links"),
            next=optional_field(obj, "next", str, "links"),
        )


@dataclass
class Ok(Generic[T]):
    """Successful response carrying the decoded payload."""

    data: T
    links: PaginationLinks | None = None

    def is_ok(self) -> bool:
        return True

    def is_err(self) -> bool:
        return False

    def fold(self, on_ok: Callable[["Ok[T]"], U], on_err: Callable[["Err"], U]) -> U:
        """Apply on_ok to this response. Both handlers are required."""
        return on_ok(self)

    @property
    def next_page_url(self) -> str | None:
        return self.links.next if self.links else None

    @property
    def prev_page_url(self) -> str | None:
        return self.links.prev if self.links else None


@dataclass
class Err:
    """The API answered with a well-formed error envelope."""

    error: ErrorModel
    status_code: int | None = None

    def is_ok(self) -> bool:
        return False

    def is_err(self) -> bool:
        return True

    def fold(self, on_ok: Callable[[Ok[Any]], U], on_err: Callable[["Err"], U]) -> U:
        """Apply on_err to this response. Both handlers are required."""
        return on_err(self)

    def __str__(self) -> str:
        return str(self.error)


ApiResponse = Union[Ok[T], Err]


def load_json(body: bytes | str) -> Any:
    """Parse a response body as JSON."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise DecodingError(f"response body is not valid JSON: {e}") from e


def _is_success_status(status_code: int | None) -> bool:
    return status_code is None or 200 <= status_code < 300


def decode_response(
    body: bytes | str,
    parse_data: Callable[[Any], T],
    status_code: int | None = None,
    payload_key: str = "data",
) -> ApiResponse[T]:
    """
    Decode a response body into Ok or Err.

    The success shape `{payload_key: T, "links"?: {...}}` is tried first; only
    if it fails is the error shape tried.

    Args:
        body: Raw response body
        parse_data: Decoder for the payload under payload_key
        status_code: HTTP status, used only as a hint for logging
        payload_key: Top-level key of the success payload ("meta" for ping)

    Returns:
        Ok with the decoded payload, or Err with the decoded ErrorModel

    Raises:
        DecodingError: If the body matches neither shape
    """
    document = load_json(body)

    try:
        obj = expect_object(document, "body")
        if payload_key not in obj:
            raise DecodingError(f"missing '{payload_key}'", "body")
        data = parse_data(obj[payload_key])
        links = PaginationLinks.from_dict(obj["links"]) if obj.get("links") is not None else None
    except DecodingError as success_error:
        try:
            error = ErrorModel.from_dict(document)
        except DecodingError as error_error:
            raise DecodingError(
                f"body matches neither the success shape ({success_error}) "
                f"nor the error shape ({error_error})"
            ) from success_error

        if _is_success_status(status_code):
            logger.warning(
                "Error envelope returned with HTTP status %s: %s", status_code, error.statuses
            )
        return Err(error=error, status_code=status_code)

    if not _is_success_status(status_code):
        logger.warning("Success envelope returned with HTTP status %s", status_code)
    return Ok(data=data, links=links)


def decode_empty_response(body: bytes | str, status_code: int | None = None) -> ApiResponse[None]:
    """
    Decode the response of a mutation endpoint that answers 204 No Content.

    An empty body is success. A non-empty body is decoded by shape; a success
    payload, if any, is discarded.
    """
    if not body or not body.strip():
        if not _is_success_status(status_code):
            raise DecodingError(f"empty response body with HTTP status {status_code}")
        return Ok(data=None)
    return decode_response(body, lambda raw: None, status_code)

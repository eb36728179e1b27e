"""
List request builders.

A builder collects optional filters through chained setters and performs one
GET on `execute()`:

    client.transactions.list().size(10).status("settled").since(start).execute()

The filter record (`ListFilters`) and its mapping to query parameters
(`encode_filters`) are kept separate from the builder so the exact query can
be checked without any I/O.

Query parameter rules:
- Only set fields are emitted, in the fixed order size, status, since,
  until, category, tag, parent
- Keys are emitted literally (`page[size]`, `filter[since]`, ...)
- Values are percent-encoded for query position; timestamps are RFC 3339
  with UTC written as `Z`
"""

import dataclasses
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any, Generic, Self, TypeVar
from urllib.parse import quote, urljoin, urlsplit

from ..exceptions import ConversionError, RequestBuilderError, UpURLError
from ..schemas.response import ApiResponse, decode_response
from ..schemas.transaction import TransactionStatus
from .transport import Transport, auth_headers

logger = logging.getLogger(__name__)

T = TypeVar("T")

QUERY_KEYS: dict[str, str] = {
    "size": "page[size]",
    "status": "filter[status]",
    "since": "filter[since]",
    "until": "filter[until]",
    "category": "filter[category]",
    "tag": "filter[tag]",
    "parent": "filter[parent]",
}

CANONICAL_ORDER: tuple[str, ...] = tuple(QUERY_KEYS)


@dataclass
class ListFilters:
    """Optional list filters. None means unset; unset fields emit nothing."""

    size: int | None = None
    status: TransactionStatus | None = None
    since: datetime | None = None
    until: datetime | None = None
    category: str | None = None
    tag: str | None = None
    parent: str | None = None


def format_timestamp(value: datetime) -> str:
    """Format a datetime as RFC 3339. Naive datetimes are taken as local time."""
    if value.tzinfo is None:
        value = value.astimezone()
    text = value.isoformat()
    if value.utcoffset() == timedelta(0):
        text = text.removesuffix("+00:00") + "Z"
    return text


def _encode_value(value: Any) -> str:
    if isinstance(value, TransactionStatus):
        text = value.value
    elif isinstance(value, datetime):
        text = format_timestamp(value)
    else:
        text = str(value)
    return quote(text, safe="")


def encode_filters(
    filters: ListFilters, fields: tuple[str, ...] = CANONICAL_ORDER
) -> list[tuple[str, str]]:
    """
    Map a filter record to an ordered list of (key, encoded value) pairs.

    Args:
        filters: The filter record
        fields: Fields the endpoint supports; others are ignored

    Returns:
        One pair per set field, in canonical order
    """
    pairs: list[tuple[str, str]] = []
    for name in CANONICAL_ORDER:
        if name not in fields:
            continue
        value = getattr(filters, name)
        if value is None:
            continue
        pairs.append((QUERY_KEYS[name], _encode_value(value)))
    return pairs


def build_query_string(pairs: list[tuple[str, str]]) -> str:
    """Join already-encoded pairs into a query string."""
    return "&".join(f"{key}={value}" for key, value in pairs)


def with_query(url: str, pairs: list[tuple[str, str]]) -> str:
    if not pairs:
        return url
    return f"{url}?{build_query_string(pairs)}"


# URL construction


def normalize_base_url(url: str) -> str:
    """Validate an API base URL and make sure it ends in '/'.

    Without the trailing slash, joining a collection name would replace the
    last path component (`.../api/v1` + `accounts` -> `.../api/accounts`).

    Raises:
        UpURLError: If the URL is not an absolute http(s) URL
    """
    parts = urlsplit(url)
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise UpURLError(f"Invalid base URL {url!r}: expected an absolute http(s) URL")
    if parts.query or parts.fragment:
        raise UpURLError(f"Invalid base URL {url!r}: must not contain a query or fragment")
    return url if url.endswith("/") else f"{url}/"


def quote_segment(value: str) -> str:
    """Percent-encode an id for use as a single path segment."""
    if not value:
        raise UpURLError("Resource id must not be empty")
    # Dot segments are resolved away by urljoin and would leave the collection
    if value in (".", ".."):
        raise UpURLError(f"Resource id {value!r} is not a valid path segment")
    return quote(value, safe="")


def join_path(base: str, *segments: str) -> str:
    """
    Append path segments to a base URL.

    Every segment except the last is materialised with a trailing '/' before
    the next one is joined; otherwise URL reference resolution replaces the
    previous segment instead of appending to it:

        join_path("https://x/transactions/", "abc123", "relationships/tags")
        == "https://x/transactions/abc123/relationships/tags"

    Raises:
        UpURLError: On an empty, absolute, or scheme-bearing segment
    """
    if not base.endswith("/"):
        raise UpURLError(f"Base URL {base!r} must end in '/'")
    url = base
    for index, segment in enumerate(segments):
        if not segment:
            raise UpURLError("Path segment must not be empty")
        if segment.startswith("/") or urlsplit(segment).scheme:
            raise UpURLError(f"Path segment {segment!r} must be relative")
        if index < len(segments) - 1 and not segment.endswith("/"):
            segment = f"{segment}/"
        url = urljoin(url, segment)
    return url


# Builders


class RequestBuilder(Generic[T]):
    """
    Base list request builder.

    Lifecycle: configuring (setters callable) -> executed. A builder performs
    exactly one request; setters and execute() raise RequestBuilderError
    afterwards.
    """

    # Fields this builder's endpoint accepts, in canonical order
    FIELDS: tuple[str, ...] = ()

    def __init__(
        self,
        transport: Transport,
        url: str,
        token: str,
        parse: Callable[[Any], T],
        name: str = "list",
    ):
        self._transport = transport
        self._url = url
        self._token = token
        self._parse = parse
        self._name = name
        self._filters = ListFilters()
        self._executed = False

    @property
    def url(self) -> str:
        return self._url

    @property
    def filters(self) -> ListFilters:
        """A copy of the current filter record."""
        return dataclasses.replace(self._filters)

    @property
    def executed(self) -> bool:
        return self._executed

    def _set(self, name: str, value: Any, convert: Callable[[Any, str], Any]) -> Self:
        if self._executed:
            raise RequestBuilderError(f"Cannot set '{name}': {self._name} request already executed")
        setattr(self._filters, name, convert(value, name))
        return self

    def query(self) -> list[tuple[str, str]]:
        """Query parameters that execute() will send."""
        return encode_filters(self._filters, self.FIELDS)

    def request_url(self) -> str:
        return with_query(self._url, self.query())

    def execute(self) -> ApiResponse[T]:
        """
        Send the request and decode the response.

        Returns:
            Ok with the decoded list (and pagination links), or Err

        Raises:
            RequestBuilderError: If this builder was already executed
            UpTransportError: If the HTTP exchange failed
            DecodingError: If the body matches neither response shape
        """
        if self._executed:
            raise RequestBuilderError(f"{self._name} request already executed")
        self._executed = True

        url = self.request_url()
        logger.debug("Sending %s request to %s", self._name, url)
        response = self._transport.send("GET", url, auth_headers(self._token))
        result = decode_response(response.body, self._parse, response.status_code)
        logger.debug("%s request responded with %r", self._name, result)
        return result


def _positive_int(value: int, name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValueError(f"{name} must be a positive integer, got {value!r}")
    return value


def _timestamp(value: datetime | str, name: str) -> datetime:
    if isinstance(value, datetime):
        return value
    try:
        return datetime.fromisoformat(value)
    except (TypeError, ValueError):
        raise ConversionError(str(value), f"{name} must be an RFC 3339 timestamp") from None


def _status(value: TransactionStatus | str, name: str) -> TransactionStatus:
    if isinstance(value, TransactionStatus):
        return value
    return TransactionStatus.parse(value)


def _text(value: str, name: str) -> str:
    if not isinstance(value, str) or not value:
        raise ValueError(f"{name} must be a non-empty string, got {value!r}")
    return value


class PageSizeListBuilder(RequestBuilder[T]):
    """List endpoint that only supports page size."""

    FIELDS = ("size",)

    def size(self, value: int) -> Self:
        """Maximum number of records per page."""
        return self._set("size", value, _positive_int)


class TransactionListBuilder(PageSizeListBuilder[T]):
    """Transaction list endpoints (all transactions, or one account's)."""

    FIELDS = ("size", "status", "since", "until", "category", "tag")

    def status(self, value: TransactionStatus | str) -> Self:
        """Only HELD or only SETTLED transactions (strings are case-insensitive)."""
        return self._set("status", value, _status)

    def since(self, value: datetime | str) -> Self:
        """Transactions created at or after this time."""
        return self._set("since", value, _timestamp)

    def until(self, value: datetime | str) -> Self:
        """Transactions created before this time."""
        return self._set("until", value, _timestamp)

    def category(self, value: str) -> Self:
        """Category id, e.g. "good-life"."""
        return self._set("category", value, _text)

    def tag(self, value: str) -> Self:
        """Tag label."""
        return self._set("tag", value, _text)


class CategoryListBuilder(RequestBuilder[T]):
    FIELDS = ("parent",)

    def parent(self, value: str) -> Self:
        """Only children of this parent category."""
        return self._set("parent", value, _text)

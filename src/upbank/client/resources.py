"""
Per-resource API clients.

Each client is bound to one collection URL (e.g. `.../api/v1/transactions/`)
and a token, and is immutable after construction. Operations return
`ApiResponse[...]`; list operations return a builder instead, which performs
the request on `execute()`.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Callable, Iterable
from typing import Any, TypeVar
from urllib.parse import urlsplit

from ..exceptions import UpURLError
from ..schemas.account import Account, parse_account, parse_account_list
from ..schemas.category import Category, parse_category, parse_category_list
from ..schemas.resource import RelationshipData, ResourceType
from ..schemas.response import ApiResponse, decode_empty_response, decode_response
from ..schemas.tag import Tag, parse_tag, parse_tag_list
from ..schemas.transaction import Transaction, parse_transaction, parse_transaction_list
from ..schemas.util import PingMeta
from ..schemas.webhook import (
    Webhook,
    WebhookEvent,
    WebhookLogRecord,
    parse_webhook,
    parse_webhook_event,
    parse_webhook_list,
    parse_webhook_log_list,
)
from .builder import (
    CategoryListBuilder,
    PageSizeListBuilder,
    TransactionListBuilder,
    join_path,
    normalize_base_url,
    quote_segment,
)
from .transport import Transport, auth_headers

logger = logging.getLogger(__name__)

T = TypeVar("T")


class ApiClient:
    """Shared request plumbing: one base URL, one token, one transport."""

    def __init__(self, base_url: str, token: str, transport: Transport):
        self._base_url = normalize_base_url(base_url)
        self._token = token
        self._transport = transport

    @property
    def base_url(self) -> str:
        return self._base_url

    def _url(self, *segments: str) -> str:
        return join_path(self._base_url, *segments)

    def _call(
        self,
        method: str,
        url: str,
        parse: Callable[[Any], T] | None = None,
        payload: dict[str, Any] | None = None,
        payload_key: str = "data",
    ) -> ApiResponse[T]:
        """
        Make one API request and decode the response.

        With parse=None the endpoint is expected to answer 204 No Content and
        success decodes to Ok(None).
        """
        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        logger.debug("Sending %s request to %s", method, url)
        if body is not None:
            logger.debug(f"Request body: {json.dumps(payload, indent=2)}")

        response = self._transport.send(
            method, url, auth_headers(self._token, has_body=body is not None), body
        )

        if parse is None:
            result = decode_empty_response(response.body, response.status_code)
        else:
            result = decode_response(response.body, parse, response.status_code, payload_key)
        logger.debug("%s %s responded with %r", method, url, result)
        return result


class ResourceClient(ApiClient):
    """Client for one resource collection: get by id, and follow page links."""

    _parse_one: Callable[[Any], Any]
    _parse_list: Callable[[Any], list[Any]]

    def _get(self, resource_id: str) -> ApiResponse[Any]:
        return self._call("GET", self._url(quote_segment(resource_id)), self._parse_one)

    def follow(self, url: str) -> ApiResponse[list[Any]]:
        """
        Fetch a page from a pagination link (`Ok.links.next` / `.prev`).

        The link already carries the original filters and cursor, so it is
        requested as-is.

        Raises:
            UpURLError: If url is not an absolute http(s) URL
        """
        parts = urlsplit(url)
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise UpURLError(f"Pagination link {url!r} is not an absolute http(s) URL")
        return self._call("GET", url, self._parse_list)


class AccountClient(ResourceClient):
    _parse_one = staticmethod(parse_account)
    _parse_list = staticmethod(parse_account_list)

    def get(self, account_id: str) -> ApiResponse[Account]:
        return self._get(account_id)

    def list(self) -> PageSizeListBuilder[list[Account]]:
        return PageSizeListBuilder(
            self._transport, self._base_url, self._token, parse_account_list, "account list"
        )

    def transactions(self, account_id: str) -> TransactionListBuilder[list[Transaction]]:
        """List one account's transactions (`accounts/{id}/transactions`)."""
        url = self._url(quote_segment(account_id), "transactions")
        return TransactionListBuilder(
            self._transport, url, self._token, parse_transaction_list, "account transactions"
        )


class TransactionClient(ResourceClient):
    _parse_one = staticmethod(parse_transaction)
    _parse_list = staticmethod(parse_transaction_list)

    def get(self, transaction_id: str) -> ApiResponse[Transaction]:
        return self._get(transaction_id)

    def list(self) -> TransactionListBuilder[list[Transaction]]:
        return TransactionListBuilder(
            self._transport, self._base_url, self._token, parse_transaction_list, "transaction list"
        )

    def set_relationship(
        self, transaction_id: str, tag_ids: Iterable[str], removing: bool = False
    ) -> ApiResponse[None]:
        """
        Attach tags to (POST) or detach them from (DELETE) a transaction.

        Args:
            transaction_id: Transaction to modify
            tag_ids: Tag labels
            removing: Detach instead of attach

        Returns:
            Ok(None) on success (the API answers 204), or Err
        """
        tags = list(tag_ids)
        if not tags:
            raise ValueError("At least one tag is required")
        url = self._url(quote_segment(transaction_id), "relationships/tags")
        payload = {"data": [RelationshipData(ResourceType.TAGS, tag).to_dict() for tag in tags]}
        method = "DELETE" if removing else "POST"
        logger.info(
            "%s tags %s on transaction %s", "Removing" if removing else "Adding", tags, transaction_id
        )
        return self._call(method, url, payload=payload)

    def tag(self, transaction_id: str, tag_ids: Iterable[str]) -> ApiResponse[None]:
        return self.set_relationship(transaction_id, tag_ids)

    def untag(self, transaction_id: str, tag_ids: Iterable[str]) -> ApiResponse[None]:
        return self.set_relationship(transaction_id, tag_ids, removing=True)


class CategoryClient(ResourceClient):
    _parse_one = staticmethod(parse_category)
    _parse_list = staticmethod(parse_category_list)

    def get(self, category_id: str) -> ApiResponse[Category]:
        return self._get(category_id)

    def list(self) -> CategoryListBuilder[list[Category]]:
        return CategoryListBuilder(
            self._transport, self._base_url, self._token, parse_category_list, "category list"
        )


class TagClient(ResourceClient):
    _parse_one = staticmethod(parse_tag)
    _parse_list = staticmethod(parse_tag_list)

    def get(self, tag_id: str) -> ApiResponse[Tag]:
        return self._get(tag_id)

    def list(self) -> PageSizeListBuilder[list[Tag]]:
        return PageSizeListBuilder(
            self._transport, self._base_url, self._token, parse_tag_list, "tag list"
        )


class WebhookClient(ResourceClient):
    _parse_one = staticmethod(parse_webhook)
    _parse_list = staticmethod(parse_webhook_list)

    def get(self, webhook_id: str) -> ApiResponse[Webhook]:
        return self._get(webhook_id)

    def list(self) -> PageSizeListBuilder[list[Webhook]]:
        return PageSizeListBuilder(
            self._transport, self._base_url, self._token, parse_webhook_list, "webhook list"
        )

    def register(self, url: str, description: str | None = None) -> ApiResponse[Webhook]:
        """
        Register a new webhook.

        The returned webhook carries `secret_key`, which is only ever sent
        in this response.
        """
        attributes: dict[str, str] = {"url": url}
        if description is not None:
            attributes["description"] = description
        return self._call(
            "POST", self._base_url, parse_webhook, payload={"data": {"attributes": attributes}}
        )

    def delete(self, webhook_id: str) -> ApiResponse[None]:
        return self._call("DELETE", self._url(quote_segment(webhook_id)))

    def ping(self, webhook_id: str) -> ApiResponse[WebhookEvent]:
        """Send a PING event to the webhook (`webhooks/{id}/ping`)."""
        return self._call("POST", self._url(quote_segment(webhook_id), "ping"), parse_webhook_event)

    def logs(self, webhook_id: str) -> PageSizeListBuilder[list[WebhookLogRecord]]:
        """List delivery logs for a webhook (`webhooks/{id}/logs`)."""
        url = self._url(quote_segment(webhook_id), "logs")
        return PageSizeListBuilder(
            self._transport, url, self._token, parse_webhook_log_list, "webhook logs"
        )


class UtilClient(ApiClient):
    def ping(self) -> ApiResponse[PingMeta]:
        """Check the token against `util/ping`."""
        return self._call("GET", self._url("ping"), PingMeta.from_dict, payload_key="meta")

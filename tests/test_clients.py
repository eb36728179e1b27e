"""
Tests for the Up API resource clients.

These tests use responses library to mock HTTP requests,
validating client behavior without making real API calls.
"""

import json
from urllib.parse import parse_qsl, urlsplit

import pytest
import requests
import responses
from responses import matchers

from fixtures import (
    ACCOUNT_ID,
    API_URL,
    NOT_AUTHORIZED,
    PING,
    TOKEN,
    TRANSACTION_ID,
    WEBHOOK_ID,
    account_resource,
    category_resource,
    page,
    single,
    tag_resource,
    transaction_resource,
    webhook_event_resource,
    webhook_log_resource,
    webhook_resource,
)
from upbank.client import UpClient
from upbank.config import ConfigValidationError, UpConfig
from upbank.exceptions import UpConnectionError, UpTransportError, UpURLError
from upbank.schemas import DeliveryStatus, Err, Ok, WebhookEventType


def sent_query(call) -> dict:
    """Decoded query parameters of a recorded request."""
    return dict(parse_qsl(urlsplit(call.request.url).query))


def sent_path(call) -> str:
    return urlsplit(call.request.url).path


class TestUpClient:
    """Test client construction and connectivity checks."""

    def test_collection_urls(self):
        """Test a base URL without trailing slash still yields nested collections."""
        client = UpClient(TOKEN, base_url="https://api.up.test/api/v1")

        assert client.accounts.base_url == "https://api.up.test/api/v1/accounts/"
        assert client.transactions.base_url == "https://api.up.test/api/v1/transactions/"
        assert client.webhooks.base_url == "https://api.up.test/api/v1/webhooks/"

    def test_invalid_base_url(self):
        with pytest.raises(UpURLError):
            UpClient(TOKEN, base_url="not a url")

    def test_from_config(self):
        client = UpClient.from_config(UpConfig(token=TOKEN, base_url=API_URL, timeout=5))

        assert client.transport.timeout == 5
        assert client.accounts.base_url == f"{API_URL}accounts/"

    def test_from_invalid_config(self):
        with pytest.raises(ConfigValidationError, match="token is required"):
            UpClient.from_config(UpConfig(token=""))

    @responses.activate
    def test_test_connection_success(self, client):
        """Test connection check succeeds with a valid ping response."""
        responses.add(responses.GET, f"{API_URL}util/ping", json=PING, status=200)

        assert client.test_connection() is True

    @responses.activate
    def test_test_connection_failure(self, client):
        """Test connection check fails when the token is rejected."""
        responses.add(responses.GET, f"{API_URL}util/ping", json=NOT_AUTHORIZED, status=401)

        assert client.test_connection() is False

    @responses.activate
    def test_ping(self, client):
        responses.add(responses.GET, f"{API_URL}util/ping", json=PING, status=200)

        response = client.util.ping()

        assert isinstance(response, Ok)
        assert response.data.id == "3b5d17a4-6778-48dc-ae7d-9f8aace2e2fc"
        assert response.data.status_emoji == "⚡️"

    @responses.activate
    def test_auth_headers(self, client):
        """Test every request carries the bearer token."""
        responses.add(responses.GET, f"{API_URL}util/ping", json=PING, status=200)

        client.util.ping()

        headers = responses.calls[0].request.headers
        assert headers["Authorization"] == f"Bearer {TOKEN}"
        assert headers["Accept"] == "application/json"

    @responses.activate
    def test_connection_error(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}util/ping",
            body=requests.exceptions.ConnectionError("Connection refused"),
        )

        with pytest.raises(UpConnectionError, match="Failed to connect"):
            client.util.ping()

    @responses.activate
    def test_timeout(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}util/ping",
            body=requests.exceptions.ReadTimeout("Read timed out"),
        )

        with pytest.raises(UpConnectionError, match="timed out"):
            client.util.ping()

    @responses.activate
    def test_other_request_error(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}util/ping",
            body=requests.exceptions.TooManyRedirects("Exceeded 30 redirects"),
        )

        with pytest.raises(UpTransportError, match="Request failed"):
            client.util.ping()


class TestAccountClient:
    """Test account endpoints."""

    @responses.activate
    def test_get_account(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}accounts/{ACCOUNT_ID}",
            json=single(account_resource()),
            status=200,
        )

        response = client.accounts.get(ACCOUNT_ID)

        assert isinstance(response, Ok)
        assert response.data.id == ACCOUNT_ID
        assert response.data.attributes.balance.value == "1024.50"

    @responses.activate
    def test_get_account_unauthorized(self, client):
        """Test an error envelope comes back as Err, not an exception."""
        responses.add(
            responses.GET, f"{API_URL}accounts/{ACCOUNT_ID}", json=NOT_AUTHORIZED, status=401
        )

        response = client.accounts.get(ACCOUNT_ID)

        assert isinstance(response, Err)
        assert response.status_code == 401
        assert response.error.first.title == "Not Authorized"

    @responses.activate
    def test_list_accounts(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}accounts/",
            json=page([account_resource("a-1"), account_resource("a-2", "Savings")]),
            status=200,
        )

        response = client.accounts.list().size(2).execute()

        assert [a.attributes.display_name for a in response.data] == ["Spending", "Savings"]
        assert sent_query(responses.calls[0]) == {"page[size]": "2"}

    @responses.activate
    def test_list_accounts_without_filters(self, client):
        responses.add(responses.GET, f"{API_URL}accounts/", json=page([]), status=200)

        response = client.accounts.list().execute()

        assert response.data == []
        assert urlsplit(responses.calls[0].request.url).query == ""

    @responses.activate
    def test_account_transactions(self, client):
        """Test the nested transactions collection keeps the account id."""
        responses.add(
            responses.GET,
            f"{API_URL}accounts/{ACCOUNT_ID}/transactions",
            json=page([transaction_resource()]),
            status=200,
        )

        response = client.accounts.transactions(ACCOUNT_ID).status("held").size(5).execute()

        assert response.is_ok()
        assert sent_path(responses.calls[0]) == f"/api/v1/accounts/{ACCOUNT_ID}/transactions"
        assert sent_query(responses.calls[0]) == {"page[size]": "5", "filter[status]": "HELD"}


class TestTransactionClient:
    """Test transaction endpoints, including tag relationships."""

    @responses.activate
    def test_get_transaction(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}transactions/{TRANSACTION_ID}",
            json=single(transaction_resource()),
            status=200,
        )

        response = client.transactions.get(TRANSACTION_ID)

        assert response.data.attributes.description == "Woolworths"
        assert response.data.relationships.tags.ids == ["Holiday", "Queensland"]

    @responses.activate
    def test_list_with_filters(self, client):
        responses.add(
            responses.GET, f"{API_URL}transactions/", json=page([transaction_resource()]), status=200
        )

        client.transactions.list().since("2024-01-01T00:00:00Z").category("groceries").execute()

        assert sent_query(responses.calls[0]) == {
            "filter[since]": "2024-01-01T00:00:00Z",
            "filter[category]": "groceries",
        }

    @responses.activate
    def test_follow_pagination(self, client):
        """Test following links.next fetches the second page as-is."""
        next_url = f"{API_URL}transactions/?page%5Bsize%5D=1&page%5Bafter%5D=cursor1"
        responses.add(
            responses.GET,
            f"{API_URL}transactions/",
            json=page([transaction_resource("t-1")], next_url=next_url),
            status=200,
            match=[matchers.query_param_matcher({"page[size]": "1"})],
        )
        responses.add(
            responses.GET,
            f"{API_URL}transactions/",
            json=page([transaction_resource("t-2")], prev_url=f"{API_URL}transactions/?page%5Bsize%5D=1"),
            status=200,
            match=[matchers.query_param_matcher({"page[size]": "1", "page[after]": "cursor1"})],
        )

        first = client.transactions.list().size(1).execute()
        second = client.transactions.follow(first.next_page_url)

        assert first.next_page_url == next_url
        assert [t.id for t in first.data] == ["t-1"]
        assert [t.id for t in second.data] == ["t-2"]
        assert second.next_page_url is None
        assert len(responses.calls) == 2

    def test_follow_rejects_relative_link(self, client):
        with pytest.raises(UpURLError):
            client.transactions.follow("/transactions?page[after]=x")

    @responses.activate
    def test_tag_transaction(self, client):
        """Test tags are attached with a POST of tag references."""
        responses.add(
            responses.POST,
            f"{API_URL}transactions/{TRANSACTION_ID}/relationships/tags",
            status=204,
        )

        response = client.transactions.tag(TRANSACTION_ID, ["Holiday", "Queensland"])

        assert isinstance(response, Ok)
        assert response.data is None
        request = responses.calls[0].request
        assert request.headers["Content-Type"] == "application/json"
        assert json.loads(request.body) == {
            "data": [{"type": "tags", "id": "Holiday"}, {"type": "tags", "id": "Queensland"}]
        }

    @responses.activate
    def test_untag_transaction(self, client):
        responses.add(
            responses.DELETE,
            f"{API_URL}transactions/{TRANSACTION_ID}/relationships/tags",
            status=204,
        )

        response = client.transactions.untag(TRANSACTION_ID, ["Holiday"])

        assert response.is_ok()
        assert responses.calls[0].request.method == "DELETE"
        assert json.loads(responses.calls[0].request.body) == {
            "data": [{"type": "tags", "id": "Holiday"}]
        }

    @responses.activate
    def test_tag_unknown_transaction(self, client):
        body = {
            "errors": [
                {
                    "status": "404",
                    "title": "Not Found",
                    "detail": "The transaction could not be found.",
                }
            ]
        }
        responses.add(
            responses.POST,
            f"{API_URL}transactions/missing/relationships/tags",
            json=body,
            status=404,
        )

        response = client.transactions.tag("missing", ["Holiday"])

        assert isinstance(response, Err)
        assert response.error.statuses == ["404"]

    def test_tag_requires_tags(self, client):
        with pytest.raises(ValueError, match="At least one tag"):
            client.transactions.tag(TRANSACTION_ID, [])


class TestCategoryAndTagClients:
    """Test category and tag endpoints."""

    @responses.activate
    def test_get_category(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}categories/groceries",
            json=single(category_resource()),
            status=200,
        )

        response = client.categories.get("groceries")

        assert response.data.attributes.name == "Groceries"

    @responses.activate
    def test_list_categories_by_parent(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}categories/",
            json=page([category_resource()]),
            status=200,
        )

        client.categories.list().parent("home").execute()

        assert sent_query(responses.calls[0]) == {"filter[parent]": "home"}

    @responses.activate
    def test_list_tags(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}tags/",
            json=page([tag_resource("Holiday"), tag_resource("Pizza Night")]),
            status=200,
        )

        response = client.tags.list().size(50).execute()

        assert [tag.id for tag in response.data] == ["Holiday", "Pizza Night"]
        assert sent_query(responses.calls[0]) == {"page[size]": "50"}


class TestWebhookClient:
    """Test webhook endpoints."""

    @responses.activate
    def test_register(self, client):
        """Test registration returns the one-time secret key."""
        responses.add(
            responses.POST,
            f"{API_URL}webhooks/",
            json=single(webhook_resource(secret_key="s3cret")),
            status=201,
        )

        response = client.webhooks.register("https://example.com/hooks/up", "Budget sync")

        assert response.data.attributes.secret_key == "s3cret"
        assert json.loads(responses.calls[0].request.body) == {
            "data": {
                "attributes": {"url": "https://example.com/hooks/up", "description": "Budget sync"}
            }
        }

    @responses.activate
    def test_register_without_description(self, client):
        responses.add(
            responses.POST, f"{API_URL}webhooks/", json=single(webhook_resource()), status=201
        )

        client.webhooks.register("https://example.com/hooks/up")

        body = json.loads(responses.calls[0].request.body)
        assert body == {"data": {"attributes": {"url": "https://example.com/hooks/up"}}}

    @responses.activate
    def test_list_webhooks(self, client):
        responses.add(
            responses.GET, f"{API_URL}webhooks/", json=page([webhook_resource()]), status=200
        )

        response = client.webhooks.list().execute()

        assert [w.id for w in response.data] == [WEBHOOK_ID]

    @responses.activate
    def test_delete(self, client):
        responses.add(responses.DELETE, f"{API_URL}webhooks/{WEBHOOK_ID}", status=204)

        response = client.webhooks.delete(WEBHOOK_ID)

        assert isinstance(response, Ok)
        assert response.data is None

    @responses.activate
    def test_ping(self, client):
        responses.add(
            responses.POST,
            f"{API_URL}webhooks/{WEBHOOK_ID}/ping",
            json=single(webhook_event_resource()),
            status=201,
        )

        response = client.webhooks.ping(WEBHOOK_ID)

        assert response.data.attributes.event_type is WebhookEventType.PING
        assert response.data.relationships.webhook.id == WEBHOOK_ID

    @responses.activate
    def test_logs(self, client):
        responses.add(
            responses.GET,
            f"{API_URL}webhooks/{WEBHOOK_ID}/logs",
            json=page([webhook_log_resource("log-1"), webhook_log_resource("log-2", False)]),
            status=200,
        )

        response = client.webhooks.logs(WEBHOOK_ID).size(2).execute()

        statuses = [log.attributes.delivery_status for log in response.data]
        assert statuses == [DeliveryStatus.DELIVERED, DeliveryStatus.UNDELIVERABLE]
        assert sent_path(responses.calls[0]) == f"/api/v1/webhooks/{WEBHOOK_ID}/logs"


class TestRecordedUrls:
    """Test the exact URL strings handed to the transport."""

    def test_tag_url(self, recording_client, transport):
        transport.queue(status_code=204)

        recording_client.transactions.tag(TRANSACTION_ID, ["Holiday"])

        assert transport.last.method == "POST"
        assert transport.last.url == f"{API_URL}transactions/{TRANSACTION_ID}/relationships/tags"

    def test_id_is_quoted(self, recording_client, transport):
        transport.queue(single(tag_resource("Pizza Night")))

        recording_client.tags.get("Pizza Night")

        assert transport.last.url == f"{API_URL}tags/Pizza%20Night"

    def test_dot_segment_id_rejected(self, recording_client, transport):
        """Test a ".." id is refused instead of escaping the transactions collection."""
        with pytest.raises(UpURLError):
            recording_client.transactions.tag("..", ["Holiday"])
        with pytest.raises(UpURLError):
            recording_client.tags.get(".")

        assert transport.sent == []

    def test_list_query(self, recording_client, transport):
        transport.queue(page([]))

        recording_client.transactions.list().since("2024-01-01T00:00:00Z").execute()

        assert transport.last.url == (
            f"{API_URL}transactions/?filter[since]=2024-01-01T00%3A00%3A00Z"
        )

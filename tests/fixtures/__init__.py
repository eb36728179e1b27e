"""
Sample Up API payloads for testing.

Builders return fresh dicts so tests can mutate them freely. Amounts are
consistent (value vs valueInBaseUnits) so they pass Money validation.
"""

API_URL = "https://api.up.test/api/v1/"
TOKEN = "up:yeah:test-token-12345"

ACCOUNT_ID = "689e8b96-4f5e-4d3c-a1b0-3c0f2e8a9b11"
TRANSACTION_ID = "abc123"
WEBHOOK_ID = "0d5f3e8c-6f1d-4b8e-9d6a-2c7b8f4e1a90"


def money(value: str, base_units: int, currency: str = "AUD") -> dict:
    return {"currencyCode": currency, "value": value, "valueInBaseUnits": base_units}


def account_resource(account_id: str = ACCOUNT_ID, display_name: str = "Spending") -> dict:
    return {
        "type": "accounts",
        "id": account_id,
        "attributes": {
            "displayName": display_name,
            "accountType": "TRANSACTIONAL",
            "ownershipType": "INDIVIDUAL",
            "balance": money("1024.50", 102450),
            "createdAt": "2023-06-01T09:30:00+10:00",
        },
        "relationships": {
            "transactions": {
                "links": {"related": f"{API_URL}accounts/{account_id}/transactions"},
            },
        },
        "links": {"self": f"{API_URL}accounts/{account_id}"},
    }


def transaction_resource(
    transaction_id: str = TRANSACTION_ID,
    description: str = "Woolworths",
    status: str = "SETTLED",
) -> dict:
    return {
        "type": "transactions",
        "id": transaction_id,
        "attributes": {
            "status": status,
            "rawText": "WOOLWORTHS 1234 SYDNEY",
            "description": description,
            "message": None,
            "isCategorizable": True,
            "holdInfo": {"amount": money("-12.50", -1250), "foreignAmount": None},
            "roundUp": {"amount": money("-0.50", -50), "boostPortion": None},
            "cashback": None,
            "amount": money("-12.50", -1250),
            "foreignAmount": None,
            "settledAt": "2024-01-02T10:00:00+11:00" if status == "SETTLED" else None,
            "createdAt": "2024-01-01T18:30:00+11:00",
        },
        "relationships": {
            "account": {
                "data": {"type": "accounts", "id": ACCOUNT_ID},
                "links": {"related": f"{API_URL}accounts/{ACCOUNT_ID}"},
            },
            "transferAccount": {"data": None},
            "category": {
                "data": {"type": "categories", "id": "groceries"},
                "links": {
                    "self": f"{API_URL}transactions/{transaction_id}/relationships/category",
                    "related": f"{API_URL}categories/groceries",
                },
            },
            "parentCategory": {
                "data": {"type": "categories", "id": "home"},
                "links": {"related": f"{API_URL}categories/home"},
            },
            "tags": {
                "data": [{"type": "tags", "id": "Holiday"}, {"type": "tags", "id": "Queensland"}],
                "links": {"self": f"{API_URL}transactions/{transaction_id}/relationships/tags"},
            },
        },
        "links": {"self": f"{API_URL}transactions/{transaction_id}"},
    }


def category_resource(category_id: str = "groceries", name: str = "Groceries") -> dict:
    return {
        "type": "categories",
        "id": category_id,
        "attributes": {"name": name},
        "relationships": {
            "parent": {
                "data": {"type": "categories", "id": "home"},
                "links": {"related": f"{API_URL}categories/home"},
            },
            "children": {
                "data": [],
                "links": {"related": f"{API_URL}categories?filter%5Bparent%5D={category_id}"},
            },
        },
        "links": {"self": f"{API_URL}categories/{category_id}"},
    }


def tag_resource(label: str = "Holiday") -> dict:
    return {
        "type": "tags",
        "id": label,
        "relationships": {
            "transactions": {
                "links": {"related": f"{API_URL}transactions?filter%5Btag%5D={label}"},
            },
        },
    }


def webhook_resource(webhook_id: str = WEBHOOK_ID, secret_key: str | None = None) -> dict:
    attributes = {
        "url": "https://example.com/hooks/up",
        "description": "Budget sync",
        "createdAt": "2024-02-10T08:00:00+11:00",
    }
    if secret_key is not None:
        attributes["secretKey"] = secret_key
    return {
        "type": "webhooks",
        "id": webhook_id,
        "attributes": attributes,
        "relationships": {
            "logs": {"links": {"related": f"{API_URL}webhooks/{webhook_id}/logs"}},
        },
        "links": {"self": f"{API_URL}webhooks/{webhook_id}"},
    }


def webhook_event_resource(event_id: str = "evt-1", webhook_id: str = WEBHOOK_ID) -> dict:
    return {
        "type": "webhook-events",
        "id": event_id,
        "attributes": {"eventType": "PING", "createdAt": "2024-02-10T08:05:00+11:00"},
        "relationships": {
            "webhook": {
                "data": {"type": "webhooks", "id": webhook_id},
                "links": {"related": f"{API_URL}webhooks/{webhook_id}"},
            },
        },
    }


def webhook_log_resource(
    log_id: str = "log-1", delivered: bool = True, event_id: str = "evt-1"
) -> dict:
    return {
        "type": "webhook-delivery-logs",
        "id": log_id,
        "attributes": {
            "request": {"body": '{"data":{"type":"webhook-events"}}'},
            "response": {"statusCode": 200, "body": "ok"} if delivered else None,
            "deliveryStatus": "DELIVERED" if delivered else "UNDELIVERABLE",
            "createdAt": "2024-02-10T08:05:01+11:00",
        },
        "relationships": {
            "webhookEvent": {"data": {"type": "webhook-events", "id": event_id}},
        },
    }


def single(resource: dict) -> dict:
    """Wrap a resource in a single-resource success body."""
    return {"data": resource}


def page(resources: list[dict], next_url: str | None = None, prev_url: str | None = None) -> dict:
    """Wrap resources in a list success body with pagination links."""
    return {"data": resources, "links": {"prev": prev_url, "next": next_url}}


NOT_AUTHORIZED = {
    "errors": [
        {
            "status": "401",
            "title": "Not Authorized",
            "detail": (
                "The request was not authenticated because no valid credential was found "
                "in the Authorization header, or the Authorization header was not present."
            ),
        }
    ]
}

INVALID_FILTER = {
    "errors": [
        {
            "status": "400",
            "title": "Invalid Request Parameter",
            "detail": "The value provided for filter[status] is not valid.",
            "source": {"parameter": "filter[status]"},
        },
        {
            "status": "400",
            "title": "Invalid Request Parameter",
            "detail": "The value provided for page[size] must be at most 100.",
            "source": {"parameter": "page[size]"},
        },
    ]
}

PING = {"meta": {"id": "3b5d17a4-6778-48dc-ae7d-9f8aace2e2fc", "statusEmoji": "⚡️"}}

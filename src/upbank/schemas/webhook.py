"""
Webhook resource schemas.

Three kinds live here:
- Webhook: a registered delivery URL
- WebhookEvent: an event sent to a webhook (returned by the ping endpoint)
- WebhookLogRecord: one delivery attempt, with the request and response
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .resource import (
    Relationship,
    Resource,
    ResourceType,
    expect_object,
    list_parser,
    optional_field,
    parse_enum,
    parse_timestamp,
    require_field,
    resource_parser,
    to_one,
)


class WebhookEventType(str, Enum):
    TRANSACTION_CREATED = "TRANSACTION_CREATED"
    TRANSACTION_SETTLED = "TRANSACTION_SETTLED"
    TRANSACTION_DELETED = "TRANSACTION_DELETED"
    PING = "PING"

    def __str__(self) -> str:
        return self.value


class DeliveryStatus(str, Enum):
    """Outcome of one webhook delivery attempt."""

    DELIVERED = "DELIVERED"
    UNDELIVERABLE = "UNDELIVERABLE"
    BAD_RESPONSE_CODE = "BAD_RESPONSE_CODE"

    def __str__(self) -> str:
        return self.value


# Webhook


@dataclass
class WebhookAttributes:
    url: str
    created_at: datetime
    description: str | None = None
    # Only present in the response to registration
    secret_key: str | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebhookAttributes":
        path = "webhook.attributes"
        return cls(
            url=require_field(raw, "url", str, path),
            created_at=parse_timestamp(require_field(raw, "createdAt", str, path), f"{path}.createdAt"),
            description=optional_field(raw, "description", str, path),
            secret_key=optional_field(raw, "secretKey", str, path),
        )


@dataclass
class WebhookRelationships:
    logs: Relationship

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebhookRelationships":
        return cls(logs=to_one(raw, "logs", "webhook.relationships"))


Webhook = Resource[WebhookAttributes, WebhookRelationships]

parse_webhook = resource_parser(ResourceType.WEBHOOKS, WebhookAttributes, WebhookRelationships)
parse_webhook_list = list_parser(parse_webhook)


# Webhook event (ping)


@dataclass
class WebhookEventAttributes:
    event_type: WebhookEventType
    created_at: datetime

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebhookEventAttributes":
        path = "webhook-event.attributes"
        return cls(
            event_type=parse_enum(
                WebhookEventType, require_field(raw, "eventType", str, path), f"{path}.eventType"
            ),
            created_at=parse_timestamp(require_field(raw, "createdAt", str, path), f"{path}.createdAt"),
        )


@dataclass
class WebhookEventRelationships:
    webhook: Relationship
    # Absent for PING events
    transaction: Relationship | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebhookEventRelationships":
        path = "webhook-event.relationships"
        return cls(
            webhook=to_one(raw, "webhook", path),
            transaction=to_one(raw, "transaction", path, required=False),
        )


WebhookEvent = Resource[WebhookEventAttributes, WebhookEventRelationships]

parse_webhook_event = resource_parser(
    ResourceType.WEBHOOK_EVENTS, WebhookEventAttributes, WebhookEventRelationships
)


# Delivery log


@dataclass
class WebhookRequest:
    body: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "WebhookRequest":
        return cls(body=require_field(expect_object(raw, path), "body", str, path))


@dataclass
class WebhookResponse:
    status_code: int
    body: str

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "WebhookResponse":
        obj = expect_object(raw, path)
        return cls(
            status_code=require_field(obj, "statusCode", int, path),
            body=require_field(obj, "body", str, path),
        )


@dataclass
class WebhookLogRecordAttributes:
    request: WebhookRequest
    delivery_status: DeliveryStatus
    created_at: datetime
    # None when the receiver could not be reached
    response: WebhookResponse | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebhookLogRecordAttributes":
        path = "webhook-delivery-log.attributes"
        return cls(
            request=WebhookRequest.from_dict(require_field(raw, "request", dict, path), f"{path}.request"),
            delivery_status=parse_enum(
                DeliveryStatus,
                require_field(raw, "deliveryStatus", str, path),
                f"{path}.deliveryStatus",
            ),
            created_at=parse_timestamp(require_field(raw, "createdAt", str, path), f"{path}.createdAt"),
            response=(
                WebhookResponse.from_dict(raw["response"], f"{path}.response")
                if raw.get("response") is not None
                else None
            ),
        )


@dataclass
class WebhookLogRecordRelationships:
    webhook_event: Relationship

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "WebhookLogRecordRelationships":
        return cls(webhook_event=to_one(raw, "webhookEvent", "webhook-delivery-log.relationships"))


WebhookLogRecord = Resource[WebhookLogRecordAttributes, WebhookLogRecordRelationships]

parse_webhook_log = resource_parser(
    ResourceType.WEBHOOK_DELIVERY_LOGS, WebhookLogRecordAttributes, WebhookLogRecordRelationships
)
parse_webhook_log_list = list_parser(parse_webhook_log)

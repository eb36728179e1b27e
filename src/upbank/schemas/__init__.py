"""
Schemas for Up API payloads.

One generic envelope (Resource[A, R]) and one two-armed response
(Ok | Err) are shared by every resource kind; each kind supplies only its
own attribute and relationship dataclasses.
"""

from .account import (
    Account,
    AccountAttributes,
    AccountRelationships,
    AccountType,
    OwnershipType,
    parse_account,
    parse_account_list,
)
from .category import (
    Category,
    CategoryAttributes,
    CategoryRelationships,
    parse_category,
    parse_category_list,
)
from .currency import CurrencyCode, minor_unit_exponent
from .errors import ErrorModel, ErrorObject, ErrorSource
from .money import Money
from .resource import (
    DecodingError,
    Relationship,
    RelationshipData,
    Resource,
    ResourceType,
    ToManyRelationship,
    list_parser,
    resource_parser,
)
from .response import (
    ApiResponse,
    Err,
    Ok,
    PaginationLinks,
    decode_empty_response,
    decode_response,
)
from .tag import Tag, TagAttributes, TagRelationships, parse_tag, parse_tag_list
from .transaction import (
    Cashback,
    HoldInfo,
    RoundUp,
    Transaction,
    TransactionAttributes,
    TransactionRelationships,
    TransactionStatus,
    parse_transaction,
    parse_transaction_list,
)
from .util import PingMeta
from .webhook import (
    DeliveryStatus,
    Webhook,
    WebhookAttributes,
    WebhookEvent,
    WebhookEventType,
    WebhookLogRecord,
    WebhookRelationships,
    parse_webhook,
    parse_webhook_event,
    parse_webhook_list,
    parse_webhook_log,
    parse_webhook_log_list,
)

__all__ = [
    # Envelope and response (shared by every resource kind)
    "Resource",
    "ResourceType",
    "Relationship",
    "RelationshipData",
    "ToManyRelationship",
    "resource_parser",
    "list_parser",
    "ApiResponse",
    "Ok",
    "Err",
    "PaginationLinks",
    "decode_response",
    "decode_empty_response",
    "DecodingError",
    # Errors
    "ErrorModel",
    "ErrorObject",
    "ErrorSource",
    # Money
    "Money",
    "CurrencyCode",
    "minor_unit_exponent",
    # Accounts
    "Account",
    "AccountAttributes",
    "AccountRelationships",
    "AccountType",
    "OwnershipType",
    "parse_account",
    "parse_account_list",
    # Transactions
    "Transaction",
    "TransactionAttributes",
    "TransactionRelationships",
    "TransactionStatus",
    "HoldInfo",
    "RoundUp",
    "Cashback",
    "parse_transaction",
    "parse_transaction_list",
    # Categories
    "Category",
    "CategoryAttributes",
    "CategoryRelationships",
    "parse_category",
    "parse_category_list",
    # Tags
    "Tag",
    "TagAttributes",
    "TagRelationships",
    "parse_tag",
    "parse_tag_list",
    # Webhooks
    "Webhook",
    "WebhookAttributes",
    "WebhookRelationships",
    "WebhookEvent",
    "WebhookEventType",
    "WebhookLogRecord",
    "DeliveryStatus",
    "parse_webhook",
    "parse_webhook_list",
    "parse_webhook_event",
    "parse_webhook_log",
    "parse_webhook_log_list",
    # Util
    "PingMeta",
]

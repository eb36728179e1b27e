"""
Up API client.

Provides:
- Get accounts, transactions, categories, tags and webhooks by id
- Filtered list requests through chained builders
- Page link following
- Tag attach/detach on transactions
- Webhook registration, deletion, ping and delivery logs

API errors come back as values (the Err arm of ApiResponse); transport and
decoding failures are raised.
"""

from ..exceptions import (
    ConversionError,
    DecodingError,
    RequestBuilderError,
    UpConnectionError,
    UpError,
    UpTransportError,
    UpURLError,
)
from .builder import (
    CategoryListBuilder,
    ListFilters,
    PageSizeListBuilder,
    RequestBuilder,
    TransactionListBuilder,
    build_query_string,
    encode_filters,
    join_path,
)
from .client import UpClient
from .resources import (
    AccountClient,
    CategoryClient,
    TagClient,
    TransactionClient,
    UtilClient,
    WebhookClient,
)
from .transport import RequestsTransport, Transport, TransportResponse

__all__ = [
    "UpClient",
    "AccountClient",
    "TransactionClient",
    "CategoryClient",
    "TagClient",
    "WebhookClient",
    "UtilClient",
    "RequestBuilder",
    "PageSizeListBuilder",
    "TransactionListBuilder",
    "CategoryListBuilder",
    "ListFilters",
    "encode_filters",
    "build_query_string",
    "join_path",
    "Transport",
    "TransportResponse",
    "RequestsTransport",
    "UpError",
    "UpTransportError",
    "UpConnectionError",
    "UpURLError",
    "DecodingError",
    "ConversionError",
    "RequestBuilderError",
]

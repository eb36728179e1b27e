"""
Up API client.

    client = UpClient(token)
    client.accounts.list().size(5).execute()
    client.transactions.tag("abc123", ["Holiday"])
"""

import logging

from ..config import DEFAULT_BASE_URL, ConfigValidationError, UpConfig
from ..schemas.response import Ok
from .builder import join_path, normalize_base_url
from .resources import (
    AccountClient,
    CategoryClient,
    TagClient,
    TransactionClient,
    UtilClient,
    WebhookClient,
)
from .transport import RequestsTransport, Transport

logger = logging.getLogger(__name__)


class UpClient:
    """
    Client for the Up API.

    Bundles one client per resource collection, all sharing one transport
    and token:
    - accounts, transactions, categories, tags, webhooks
    - util (ping)
    """

    def __init__(
        self,
        token: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Transport | None = None,
        timeout: float = RequestsTransport.DEFAULT_TIMEOUT,
    ):
        """
        Initialize Up client.

        Args:
            token: Personal access token
            base_url: Versioned API root (e.g. "https://api.up.com.au/api/v1/")
            transport: HTTP transport (a RequestsTransport if omitted)
            timeout: Request timeout in seconds for the default transport
        """
        self.base_url = normalize_base_url(base_url)
        self.transport = transport or RequestsTransport(timeout=timeout)

        # Collection URLs must end in "/" so ids are appended, not substituted
        self.accounts = AccountClient(join_path(self.base_url, "accounts/"), token, self.transport)
        self.transactions = TransactionClient(
            join_path(self.base_url, "transactions/"), token, self.transport
        )
        self.categories = CategoryClient(
            join_path(self.base_url, "categories/"), token, self.transport
        )
        self.tags = TagClient(join_path(self.base_url, "tags/"), token, self.transport)
        self.webhooks = WebhookClient(join_path(self.base_url, "webhooks/"), token, self.transport)
        self.util = UtilClient(join_path(self.base_url, "util/"), token, self.transport)

    @classmethod
    def from_config(cls, config: UpConfig, transport: Transport | None = None) -> "UpClient":
        """Build a client from configuration.

        Raises:
            ConfigValidationError: If the configuration is invalid
        """
        errors = config.validate()
        if errors:
            raise ConfigValidationError(errors)
        return cls(
            token=config.token,
            base_url=config.base_url,
            transport=transport,
            timeout=config.timeout,
        )

    def test_connection(self) -> bool:
        """Test connection and token against the ping endpoint."""
        response = self.util.ping()
        if isinstance(response, Ok):
            logger.info("Up is reachable %s", response.data.status_emoji)
            return True
        logger.warning("Up ping failed:\n%s", response.error)
        return False

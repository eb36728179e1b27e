"""Account resource schema."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from .money import Money, required_money
from .resource import (
    Relationship,
    Resource,
    ResourceType,
    list_parser,
    optional_field,
    parse_enum,
    parse_timestamp,
    require_field,
    resource_parser,
    to_one,
)


class AccountType(str, Enum):
    """Kind of account."""

    SAVER = "SAVER"
    TRANSACTIONAL = "TRANSACTIONAL"
    HOME_LOAN = "HOME_LOAN"

    def __str__(self) -> str:
        return self.value


class OwnershipType(str, Enum):
    """Whether an account is held by one customer or shared."""

    INDIVIDUAL = "INDIVIDUAL"
    JOINT = "JOINT"

    def __str__(self) -> str:
        return self.value


@dataclass
class AccountAttributes:
    display_name: str
    account_type: AccountType
    balance: Money
    created_at: datetime
    ownership_type: OwnershipType | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "AccountAttributes":
        path = "account.attributes"
        ownership = optional_field(raw, "ownershipType", str, path)
        return cls(
            display_name=require_field(raw, "displayName", str, path),
            account_type=parse_enum(
                AccountType, require_field(raw, "accountType", str, path), f"{path}.accountType"
            ),
            balance=required_money(raw, "balance", path),
            created_at=parse_timestamp(require_field(raw, "createdAt", str, path), f"{path}.createdAt"),
            ownership_type=(
                parse_enum(OwnershipType, ownership, f"{path}.ownershipType") if ownership else None
            ),
        )


@dataclass
class AccountRelationships:
    # Links to the account's transactions collection; no data
    transactions: Relationship

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "AccountRelationships":
        return cls(transactions=to_one(raw, "transactions", "account.relationships"))


Account = Resource[AccountAttributes, AccountRelationships]

parse_account = resource_parser(ResourceType.ACCOUNTS, AccountAttributes, AccountRelationships)
parse_account_list = list_parser(parse_account)

"""
Transaction resource schema.

A transaction is HELD while pending and SETTLED once final. Amounts are
always in the account's currency; `foreign_amount` carries the original
amount for foreign-currency purchases.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any

from ..exceptions import ConversionError
from .money import Money, optional_money, required_money
from .resource import (
    Relationship,
    Resource,
    ResourceType,
    ToManyRelationship,
    expect_object,
    list_parser,
    optional_field,
    parse_enum,
    parse_timestamp,
    require_field,
    resource_parser,
    to_many,
    to_one,
)


class TransactionStatus(str, Enum):
    """Settlement status; also usable as the `filter[status]` list filter."""

    HELD = "HELD"
    SETTLED = "SETTLED"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> "TransactionStatus":
        """Parse a status token case-insensitively.

        Raises:
            ConversionError: If value is not a known status
        """
        try:
            return cls(value.strip().upper())
        except ValueError:
            allowed = ", ".join(m.value.lower() for m in cls)
            raise ConversionError(value, f"Must be one of [{allowed}] (case insensitive)") from None


@dataclass
class HoldInfo:
    """Amount originally held, before the transaction settled."""

    amount: Money
    foreign_amount: Money | None = None

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "HoldInfo":
        obj = expect_object(raw, path)
        return cls(
            amount=required_money(obj, "amount", path),
            foreign_amount=optional_money(obj, "foreignAmount", path),
        )


@dataclass
class RoundUp:
    amount: Money
    boost_portion: Money | None = None

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "RoundUp":
        obj = expect_object(raw, path)
        return cls(
            amount=required_money(obj, "amount", path),
            boost_portion=optional_money(obj, "boostPortion", path),
        )


@dataclass
class Cashback:
    description: str
    amount: Money

    @classmethod
    def from_dict(cls, raw: Any, path: str) -> "Cashback":
        obj = expect_object(raw, path)
        return cls(
            description=require_field(obj, "description", str, path),
            amount=required_money(obj, "amount", path),
        )


@dataclass
class TransactionAttributes:
    status: TransactionStatus
    description: str
    amount: Money
    created_at: datetime
    raw_text: str | None = None
    message: str | None = None
    is_categorizable: bool = True
    hold_info: HoldInfo | None = None
    round_up: RoundUp | None = None
    cashback: Cashback | None = None
    foreign_amount: Money | None = None
    settled_at: datetime | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TransactionAttributes":
        path = "transaction.attributes"
        settled_at = optional_field(raw, "settledAt", str, path)
        is_categorizable = optional_field(raw, "isCategorizable", bool, path)
        return cls(
            status=parse_enum(
                TransactionStatus, require_field(raw, "status", str, path), f"{path}.status"
            ),
            description=require_field(raw, "description", str, path),
            amount=required_money(raw, "amount", path),
            created_at=parse_timestamp(require_field(raw, "createdAt", str, path), f"{path}.createdAt"),
            raw_text=optional_field(raw, "rawText", str, path),
            message=optional_field(raw, "message", str, path),
            is_categorizable=True if is_categorizable is None else is_categorizable,
            hold_info=(
                HoldInfo.from_dict(raw["holdInfo"], f"{path}.holdInfo")
                if raw.get("holdInfo") is not None
                else None
            ),
            round_up=(
                RoundUp.from_dict(raw["roundUp"], f"{path}.roundUp")
                if raw.get("roundUp") is not None
                else None
            ),
            cashback=(
                Cashback.from_dict(raw["cashback"], f"{path}.cashback")
                if raw.get("cashback") is not None
                else None
            ),
            foreign_amount=optional_money(raw, "foreignAmount", path),
            settled_at=parse_timestamp(settled_at, f"{path}.settledAt") if settled_at else None,
        )


@dataclass
class TransactionRelationships:
    account: Relationship
    category: Relationship
    parent_category: Relationship
    tags: ToManyRelationship
    transfer_account: Relationship | None = None

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TransactionRelationships":
        path = "transaction.relationships"
        return cls(
            account=to_one(raw, "account", path),
            category=to_one(raw, "category", path),
            parent_category=to_one(raw, "parentCategory", path),
            tags=to_many(raw, "tags", path),
            transfer_account=to_one(raw, "transferAccount", path, required=False),
        )


Transaction = Resource[TransactionAttributes, TransactionRelationships]

parse_transaction = resource_parser(
    ResourceType.TRANSACTIONS, TransactionAttributes, TransactionRelationships
)
parse_transaction_list = list_parser(parse_transaction)

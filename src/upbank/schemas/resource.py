"""
Generic JSON:API resource envelope.

Every Up resource arrives in the same outer shape:

    {"type": ..., "id": ..., "attributes": {...}, "relationships": {...},
     "links": {"self": ...}}

The envelope is decoded here once; the `attributes` and `relationships`
payloads are handed to the schema classes supplied for the resource kind.
Relationships are references (type + id) only, never embedded resources.
"""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Generic, Protocol, Self, TypeVar

from ..exceptions import DecodingError


class ResourceType(str, Enum):
    """Resource-type discriminant (the envelope's `type` field)."""

    ACCOUNTS = "accounts"
    TRANSACTIONS = "transactions"
    CATEGORIES = "categories"
    TAGS = "tags"
    WEBHOOKS = "webhooks"
    WEBHOOK_EVENTS = "webhook-events"
    WEBHOOK_DELIVERY_LOGS = "webhook-delivery-logs"

    def __str__(self) -> str:
        return self.value


# Field helpers shared by every schema module.


def expect_object(raw: Any, path: str) -> dict[str, Any]:
    """Return raw if it is a JSON object, else raise DecodingError."""
    if not isinstance(raw, dict):
        raise DecodingError(f"expected an object, got {type(raw).__name__}", path)
    return raw


def require_field(raw: dict[str, Any], key: str, kind: type | tuple[type, ...], path: str) -> Any:
    """Return raw[key], which must be present, non-null and of the given type."""
    if key not in raw or raw[key] is None:
        raise DecodingError(f"missing required field '{key}'", path)
    return _check_kind(raw[key], key, kind, path)


def optional_field(
    raw: dict[str, Any], key: str, kind: type | tuple[type, ...], path: str
) -> Any | None:
    """Return raw[key] or None when the key is absent or null."""
    value = raw.get(key)
    if value is None:
        return None
    return _check_kind(value, key, kind, path)


def _check_kind(value: Any, key: str, kind: type | tuple[type, ...], path: str) -> Any:
    # bool is an int subclass; never accept it where a number is expected
    if isinstance(value, bool) and kind is not bool:
        raise DecodingError(f"field '{key}' has unexpected type bool", path)
    if not isinstance(value, kind):
        raise DecodingError(
            f"field '{key}' has unexpected type {type(value).__name__}", path
        )
    return value


def parse_timestamp(value: str, path: str) -> datetime:
    """Parse an RFC 3339 timestamp into a timezone-aware datetime."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise DecodingError(f"invalid RFC 3339 timestamp {value!r}", path) from e
    if parsed.tzinfo is None:
        raise DecodingError(f"timestamp {value!r} has no timezone", path)
    return parsed


EnumT = TypeVar("EnumT", bound=Enum)


def parse_enum(enum_cls: type[EnumT], value: Any, path: str) -> EnumT:
    """Map a wire token onto a member of enum_cls."""
    try:
        return enum_cls(value)
    except ValueError as e:
        allowed = ", ".join(str(m.value) for m in enum_cls)
        raise DecodingError(
            f"unknown {enum_cls.__name__} {value!r} (expected one of: {allowed})", path
        ) from e


# Relationships


@dataclass
class RelationshipData:
    """A (type, id) reference to another resource."""

    type: ResourceType
    id: str

    @classmethod
    def from_dict(cls, raw: Any, path: str = "data") -> "RelationshipData":
        obj = expect_object(raw, path)
        return cls(
            type=parse_enum(ResourceType, require_field(obj, "type", str, path), path),
            id=require_field(obj, "id", str, path),
        )

    def to_dict(self) -> dict[str, str]:
        return {"type": self.type.value, "id": self.id}


def _links(raw: dict[str, Any], path: str) -> tuple[str | None, str | None]:
    links = raw.get("links")
    if links is None:
        return None, None
    links = expect_object(links, f"{path}.links")
    return (
        optional_field(links, "related", str, f"{path}.links"),
        optional_field(links, "self", str, f"{path}.links"),
    )


@dataclass
class Relationship:
    """To-one relationship: an optional reference plus optional links.

    `data` is None when nothing is related (an uncategorised transaction) or
    when the API only publishes a link to follow (an account's transactions).
    """

    data: RelationshipData | None = None
    related: str | None = None
    self_link: str | None = None

    @classmethod
    def from_dict(cls, raw: Any, path: str = "relationship") -> "Relationship":
        obj = expect_object(raw, path)
        data = obj.get("data")
        if isinstance(data, list):
            raise DecodingError("expected a to-one relationship, got a list", path)
        related, self_link = _links(obj, path)
        return cls(
            data=RelationshipData.from_dict(data, f"{path}.data") if data is not None else None,
            related=related,
            self_link=self_link,
        )

    @property
    def id(self) -> str | None:
        return self.data.id if self.data else None


@dataclass
class ToManyRelationship:
    """To-many relationship: a list of references plus optional links."""

    data: list[RelationshipData] = field(default_factory=list)
    related: str | None = None
    self_link: str | None = None

    @classmethod
    def from_dict(cls, raw: Any, path: str = "relationship") -> "ToManyRelationship":
        obj = expect_object(raw, path)
        items = obj.get("data") or []
        if not isinstance(items, list):
            raise DecodingError("expected a to-many relationship list", path)
        related, self_link = _links(obj, path)
        return cls(
            data=[
                RelationshipData.from_dict(item, f"{path}.data[{i}]")
                for i, item in enumerate(items)
            ],
            related=related,
            self_link=self_link,
        )

    @property
    def ids(self) -> list[str]:
        return [ref.id for ref in self.data]


def to_one(raw: dict[str, Any], key: str, path: str, required: bool = True) -> Relationship | None:
    """Decode relationships[key] as a to-one relationship."""
    if raw.get(key) is None:
        if required:
            raise DecodingError(f"missing relationship '{key}'", path)
        return None
    return Relationship.from_dict(raw[key], f"{path}.{key}")


def to_many(raw: dict[str, Any], key: str, path: str) -> ToManyRelationship:
    """Decode relationships[key] as a to-many relationship."""
    if raw.get(key) is None:
        raise DecodingError(f"missing relationship '{key}'", path)
    return ToManyRelationship.from_dict(raw[key], f"{path}.{key}")


# Envelope


class Schema(Protocol):
    """Attribute and relationship payloads decode themselves from a JSON object."""

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> Self: ...


A = TypeVar("A", bound=Schema)
R = TypeVar("R", bound=Schema)


@dataclass
class Resource(Generic[A, R]):
    """One addressable entity: discriminant, id, attributes, relationships."""

    type: ResourceType
    id: str
    attributes: A
    relationships: R
    self_link: str | None = None

    @classmethod
    def from_dict(
        cls,
        raw: Any,
        attributes_cls: type[A],
        relationships_cls: type[R],
        expected_type: ResourceType | None = None,
    ) -> "Resource[A, R]":
        """Decode a resource object, delegating payloads to the given schemas.

        Raises:
            DecodingError: required fields are missing, the discriminant is
                unknown or differs from expected_type, or a payload is invalid
        """
        obj = expect_object(raw, "resource")
        resource_type = parse_enum(ResourceType, require_field(obj, "type", str, "resource"), "type")
        if expected_type is not None and resource_type is not expected_type:
            raise DecodingError(
                f"expected resource type '{expected_type.value}', got '{resource_type.value}'",
                "type",
            )
        resource_id = require_field(obj, "id", str, "resource")
        path = f"{resource_type.value}[{resource_id}]"

        attributes = expect_object(obj.get("attributes") or {}, f"{path}.attributes")
        relationships = expect_object(obj.get("relationships") or {}, f"{path}.relationships")
        links = expect_object(obj.get("links") or {}, f"{path}.links")

        return cls(
            type=resource_type,
            id=resource_id,
            attributes=attributes_cls.from_dict(attributes),
            relationships=relationships_cls.from_dict(relationships),
            self_link=optional_field(links, "self", str, f"{path}.links"),
        )


def resource_parser(
    expected_type: ResourceType,
    attributes_cls: type[A],
    relationships_cls: type[R],
) -> Callable[[Any], Resource[A, R]]:
    """Build the decoder for one resource kind."""

    def parse(raw: Any) -> Resource[A, R]:
        return Resource.from_dict(raw, attributes_cls, relationships_cls, expected_type)

    parse.__name__ = f"parse_{expected_type.name.lower()}"
    return parse


def list_parser(parse_item: Callable[[Any], Any]) -> Callable[[Any], list[Any]]:
    """Lift a single-resource decoder to a decoder for a list of resources."""

    def parse(raw: Any) -> list[Any]:
        if not isinstance(raw, list):
            raise DecodingError(f"expected a list of resources, got {type(raw).__name__}", "data")
        return [parse_item(item) for item in raw]

    return parse

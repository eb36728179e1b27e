"""Tag resource schema. A tag's id is its label; tags carry no attributes."""

from dataclasses import dataclass
from typing import Any

from .resource import Relationship, Resource, ResourceType, list_parser, resource_parser, to_one


@dataclass
class TagAttributes:
    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TagAttributes":
        return cls()


@dataclass
class TagRelationships:
    transactions: Relationship

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "TagRelationships":
        return cls(transactions=to_one(raw, "transactions", "tag.relationships"))


Tag = Resource[TagAttributes, TagRelationships]

parse_tag = resource_parser(ResourceType.TAGS, TagAttributes, TagRelationships)
parse_tag_list = list_parser(parse_tag)

"""Category resource schema. Categories form a two-level parent/child tree."""

from dataclasses import dataclass
from typing import Any

from .resource import (
    Relationship,
    Resource,
    ResourceType,
    ToManyRelationship,
    list_parser,
    require_field,
    resource_parser,
    to_many,
    to_one,
)


@dataclass
class CategoryAttributes:
    name: str

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CategoryAttributes":
        return cls(name=require_field(raw, "name", str, "category.attributes"))


@dataclass
class CategoryRelationships:
    parent: Relationship
    children: ToManyRelationship

    @classmethod
    def from_dict(cls, raw: dict[str, Any]) -> "CategoryRelationships":
        path = "category.relationships"
        return cls(
            parent=to_one(raw, "parent", path),
            children=to_many(raw, "children", path),
        )


Category = Resource[CategoryAttributes, CategoryRelationships]

parse_category = resource_parser(ResourceType.CATEGORIES, CategoryAttributes, CategoryRelationships)
parse_category_list = list_parser(parse_category)

"""Utility endpoint payloads."""

from dataclasses import dataclass
from typing import Any

from .resource import expect_object, require_field


@dataclass
class PingMeta:
    """Body of `GET util/ping`, which answers `{"meta": {...}}` rather than `{"data": ...}`."""

    id: str
    status_emoji: str

    @classmethod
    def from_dict(cls, raw: Any) -> "PingMeta":
        obj = expect_object(raw, "meta")
        return cls(
            id=require_field(obj, "id", str, "meta"),
            status_emoji=require_field(obj, "statusEmoji", str, "meta"),
        )

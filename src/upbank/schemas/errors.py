"""
API error envelope.

    {"errors": [{"status": "401", "title": "Not Authorized",
                 "detail": "...", "source": {"parameter": ..., "pointer": ...}}]}

Errors are kept in the order the API reported them.
"""

from dataclasses import dataclass, field
from typing import Any

from .resource import DecodingError, expect_object, optional_field, require_field


@dataclass
class ErrorSource:
    """Where in the request the problem was found."""

    parameter: str | None = None
    pointer: str | None = None

    @classmethod
    def from_raw(cls, raw: Any, path: str) -> "ErrorSource":
        # Older API revisions sent the source as a bare pointer string
        if isinstance(raw, str):
            return cls(pointer=raw)
        obj = expect_object(raw, path)
        return cls(
            parameter=optional_field(obj, "parameter", str, path),
            pointer=optional_field(obj, "pointer", str, path),
        )

    def __str__(self) -> str:
        return f"({self.parameter}, {self.pointer})"


@dataclass
class ErrorObject:
    """One problem reported by the API."""

    status: str
    title: str
    detail: str
    source: ErrorSource | None = None

    @classmethod
    def from_dict(cls, raw: Any, path: str = "errors[0]") -> "ErrorObject":
        obj = expect_object(raw, path)
        source = obj.get("source")
        return cls(
            status=require_field(obj, "status", str, path),
            title=require_field(obj, "title", str, path),
            detail=require_field(obj, "detail", str, path),
            source=ErrorSource.from_raw(source, f"{path}.source") if source is not None else None,
        )

    def __str__(self) -> str:
        text = f"{self.status} - {self.title} - {self.detail}"
        if self.source:
            text += f" - {self.source}"
        return text


@dataclass
class ErrorModel:
    """Ordered, non-empty list of errors returned by the API."""

    errors: list[ErrorObject] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Any) -> "ErrorModel":
        obj = expect_object(raw, "body")
        items = require_field(obj, "errors", list, "body")
        if not items:
            raise DecodingError("error envelope contains no errors", "errors")
        return cls(errors=[ErrorObject.from_dict(item, f"errors[{i}]") for i, item in enumerate(items)])

    @property
    def first(self) -> ErrorObject:
        return self.errors[0]

    @property
    def statuses(self) -> list[str]:
        return [error.status for error in self.errors]

    def __str__(self) -> str:
        return "\n".join(f"- {error}" for error in self.errors)

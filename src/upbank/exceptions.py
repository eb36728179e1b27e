"""
Exception hierarchy for the Up client.

API-level failures (a well-formed `{"errors": [...]}` body) are not
exceptions: they come back as the `Err` arm of an ApiResponse. Everything
here is a failure to get that far.
"""


class UpError(Exception):
    """Base exception for Up client errors."""

    pass


class UpTransportError(UpError):
    """The HTTP exchange itself failed."""

    pass


class UpConnectionError(UpTransportError):
    """Failed to connect to Up, or the request timed out."""

    pass


class UpURLError(UpError, ValueError):
    """A base URL or sub-resource path could not be built."""

    pass


class DecodingError(UpError, ValueError):
    """A response body matches neither the success nor the error shape."""

    def __init__(self, message: str, path: str = ""):
        self.path = path
        super().__init__(f"{path}: {message}" if path else message)


class ConversionError(UpError, ValueError):
    """A caller-supplied value is not a member of an enumerated filter."""

    def __init__(self, value: str, reason: str):
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value {value!r}: {reason}")


class RequestBuilderError(UpError):
    """A request builder was used after it had already been executed."""

    pass

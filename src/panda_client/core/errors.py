"""Custom exception classes for the Panda client."""

import json
from typing import Any, Optional


class PandaClientError(Exception):
    """Base exception for all Panda client errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}

    def __str__(self) -> str:
        if self.error_code:
            return f"[{self.error_code}] {self.message}"
        return self.message


class InvalidConfiguration(PandaClientError):
    """Account or cloud configuration is incomplete or inconsistent."""

    def __init__(
        self,
        message: str,
        section: Optional[str] = None,
        name: Optional[str] = None,
        option: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="INVALID_CONFIGURATION", **kwargs)
        self.section = section
        self.name = name
        self.option = option
        self.details.update({
            "section": section,
            "name": name,
            "option": option,
        })


class SigningError(PandaClientError):
    """Request parameters could not be signed."""

    def __init__(
        self,
        message: str,
        key: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="SIGNING", **kwargs)
        self.key = key
        self.details.update({"key": key})


class TransportError(PandaClientError):
    """Network failure before any HTTP status was received."""

    def __init__(
        self,
        message: str,
        method: Optional[str] = None,
        url: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="TRANSPORT", **kwargs)
        self.method = method
        self.url = url
        self.details.update({
            "method": method,
            "url": url,
        })


class InvalidEntity(PandaClientError):
    """An entity lacks what the requested operation needs, e.g. an id to update."""

    def __init__(
        self,
        message: str,
        kind: Optional[str] = None,
        field: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="INVALID_ENTITY", **kwargs)
        self.kind = kind
        self.field = field
        self.details.update({
            "kind": kind,
            "field": field,
        })


class ApiError(PandaClientError):
    """The service answered with an HTTP status >= 400."""

    def __init__(
        self,
        message: str,
        status_code: int,
        body: str = "",
        error_class: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="API", **kwargs)
        self.status_code = status_code
        self.body = body
        self.error_class = error_class
        self.details.update({
            "status_code": status_code,
            "error_class": error_class,
        })

    @classmethod
    def from_response(cls, status_code: int, body: str) -> "ApiError":
        """Build an error from a raw response, using the service message when present."""
        error_class = None
        message = body.strip() or f"HTTP {status_code}"
        try:
            data: Any = json.loads(body)
        except ValueError:
            data = None
        if isinstance(data, dict):
            error_class = data.get("error")
            message = data.get("message") or error_class or message
        return cls(str(message), status_code=status_code, body=body, error_class=error_class)


class MalformedResponse(PandaClientError):
    """A successful response that could not be turned into an entity."""

    def __init__(
        self,
        message: str,
        kind: Optional[str] = None,
        field: Optional[str] = None,
        **kwargs,
    ):
        super().__init__(message, error_code="MALFORMED_RESPONSE", **kwargs)
        self.kind = kind
        self.field = field
        self.details.update({
            "kind": kind,
            "field": field,
        })

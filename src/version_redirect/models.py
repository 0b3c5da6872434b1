"""Core type definitions for the version redirect service.

This module provides the data structures that flow between the path
matcher, the resolver and the HTTP layer: the framework-agnostic request
and response containers and the tagged resolution result.

Examples:
    A successful resolution::

        from version_redirect.models import Resolved, VersionSource

        result = Resolved(version="4.0.1", source=VersionSource.CACHE)

    A failed resolution::

        from version_redirect.models import Unresolved, UnresolvedReason

        result = Unresolved(
            reason=UnresolvedReason.UPSTREAM_ERROR,
            detail="registry returned 503",
        )
"""

from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field, field_validator

from version_redirect.utils.headers import HeadersLike, get_header_value, header_pairs


class VersionSource(str, Enum):
    """Where a resolved version came from.

    Attributes:
        CACHE: The version was read from the key-value store.
        UPSTREAM: The version was fetched from the registry.
    """

    CACHE = "cache"
    UPSTREAM = "upstream"


class UnresolvedReason(str, Enum):
    """Why a package name could not be resolved to a version.

    Attributes:
        UPSTREAM_ERROR: The registry was unreachable, returned a non-success
            status, or returned an unparsable body.
        VERSION_MISSING: The registry answered successfully but without a
            usable version field.
        UNEXPECTED_ERROR: Any other failure raised while resolving.
    """

    UPSTREAM_ERROR = "upstream_error"
    VERSION_MISSING = "version_missing"
    UNEXPECTED_ERROR = "unexpected_error"


class Resolved(BaseModel):
    """A package name was resolved to a version.

    Attributes:
        version: The resolved version string. Never empty.
        source: Whether the version came from the cache or the registry.
    """

    kind: Literal["resolved"] = "resolved"
    version: str = Field(
        ...,
        description="Resolved version string",
        min_length=1,
        examples=["4.0.1", "5.0.0-beta.2"],
    )
    source: VersionSource = Field(
        ...,
        description="Where the version was obtained",
    )

    model_config = {"frozen": True}

    @field_validator("version")
    @classmethod
    def validate_version(cls, v: str) -> str:
        """Reject versions that are blank after stripping whitespace.

        Args:
            v: The version string to validate.

        Returns:
            The validated version string, unchanged.

        Raises:
            ValueError: If the version is empty or whitespace only.
        """
        if not v.strip():
            raise ValueError("version must not be blank")
        return v


class Unresolved(BaseModel):
    """A package name could not be resolved.

    Attributes:
        reason: Category of the failure.
        detail: Optional human-readable explanation for logs.
    """

    kind: Literal["unresolved"] = "unresolved"
    reason: UnresolvedReason = Field(
        ...,
        description="Category of the resolution failure",
    )
    detail: str | None = Field(
        default=None,
        description="Human-readable explanation of the failure",
    )

    model_config = {"frozen": True}


Resolution = Resolved | Unresolved


class EdgeRequest:
    """Abstract request representation.

    Framework adapters convert their request objects into this format.

    Attributes:
        method: HTTP method (GET, POST, etc.)
        path: URL path as received, still percent-encoded
        query_string: Query string without leading '?'
        headers: Request headers as ordered (name, value) pairs
        body: Request body as bytes
    """

    def __init__(
        self,
        method: str,
        path: str,
        query_string: str = "",
        headers: HeadersLike | None = None,
        body: bytes = b"",
    ) -> None:
        self.method = method
        self.path = path
        self.query_string = query_string
        self.headers = header_pairs(headers or [])
        self.body = body


class EdgeResponse:
    """Framework-agnostic HTTP response.

    Attributes:
        status: HTTP status code
        headers: Response headers as ordered (name, value) pairs; a header
            may appear more than once
        body: Response body as bytes
    """

    def __init__(self, status: int, headers: HeadersLike, body: bytes = b"") -> None:
        self.status = status
        self.headers = header_pairs(headers)
        self.body = body

    def header(self, name: str, default: str | None = None) -> str | None:
        """First value of a header, looked up case-insensitively."""
        return get_header_value(self.headers, name, default)

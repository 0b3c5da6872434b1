"""Configuration module for the version redirect service.

This module provides the RedirectConfig class describing where redirects
point, which registry is queried on a cache miss, where unresolvable
requests are forwarded, and how long resolved versions stay cached.

Example:
    Basic usage with defaults:

        >>> config = RedirectConfig()
        >>> config.cache_ttl_seconds
        600

    Custom configuration:

        >>> config = RedirectConfig(
        ...     service_origin="https://docs.example.com",
        ...     registry_url_template="https://registry.npmjs.org/{package}/latest",
        ...     fallback_origin="http://origin.internal:8080",
        ... )

    Loading from environment:

        >>> import os
        >>> os.environ['VERSION_REDIRECT_CACHE_TTL_SECONDS'] = '120'
        >>> config = RedirectConfig.from_env()
"""

import logging
import os
from typing import Any

from pydantic import BaseModel, Field, field_validator

DEFAULT_SERVICE_ORIGIN = "https://packages.electronjs.org"
DEFAULT_REGISTRY_URL_TEMPLATE = "https://registry.npmjs.org/@electron/{package}/latest"
DEFAULT_FALLBACK_ORIGIN = "http://localhost:8080"

# Placeholder substituted with the package name in the registry URL
PACKAGE_PLACEHOLDER = "{package}"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


def _require_http_url(value: str, field_name: str) -> str:
    if not value.startswith(("http://", "https://")):
        raise ValueError(f"{field_name} must be an http(s) URL, got {value!r}")
    return value


class RedirectConfig(BaseModel):
    """Configuration for the version redirect service.

    Attributes:
        service_origin: Origin that redirects point at, without trailing slash.
            Unmatched paths are bounced to ``service_origin + "/"``.
        registry_url_template: URL queried for the latest version of a
            package on a cache miss. Must contain ``{package}``.
        fallback_origin: Origin receiving requests whose version could not
            be resolved.
        cache_ttl_seconds: Time-to-live for cache entries written after an
            upstream resolution. Must be between 1 and 604800 (7 days).
        index_document: Trailing document appended to versioned redirects.
        upstream_timeout_seconds: Client-side deadline for registry and
            origin calls. None disables it and leaves the deadline to the
            hosting environment.
        cleanup_interval_seconds: Interval of the optional expired-entry sweep
            for stores that keep entries in process.
        log_level: Standard library log level name.
        json_logs: Emit JSON logs when True, console logs otherwise.

    Note:
        This class is immutable (frozen=True). Create a new instance if you
        need different settings.
    """

    service_origin: str = Field(
        default=DEFAULT_SERVICE_ORIGIN,
        description="Origin that versioned redirects point at",
    )
    registry_url_template: str = Field(
        default=DEFAULT_REGISTRY_URL_TEMPLATE,
        description="Registry URL with a {package} placeholder",
    )
    fallback_origin: str = Field(
        default=DEFAULT_FALLBACK_ORIGIN,
        description="Origin receiving pass-through requests",
    )
    cache_ttl_seconds: int = Field(
        default=600,
        description="TTL in seconds for versions written to the cache (1-604800)",
    )
    index_document: str = Field(
        default="index.html",
        description="Document path appended to versioned redirects",
    )
    upstream_timeout_seconds: float | None = Field(
        default=None,
        description="Client-side timeout for outbound calls, None for no timeout",
    )
    cleanup_interval_seconds: int = Field(
        default=300,
        description="Seconds between expired-entry sweeps of in-process stores",
    )
    log_level: str = Field(
        default="INFO",
        description="Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)",
    )
    json_logs: bool = Field(
        default=True,
        description="Emit JSON logs instead of console output",
    )

    model_config = {"frozen": True}

    @field_validator("service_origin", "fallback_origin")
    @classmethod
    def validate_origin(cls, v: str, info: Any) -> str:
        """Validate an origin URL and strip trailing slashes.

        Example:
            >>> RedirectConfig(service_origin="https://example.com/").service_origin
            'https://example.com'
        """
        return _require_http_url(v, info.field_name).rstrip("/")

    @field_validator("registry_url_template")
    @classmethod
    def validate_registry_url_template(cls, v: str) -> str:
        """Validate that the registry template is a URL with a package placeholder.

        Raises:
            ValueError: If the template is not http(s) or lacks ``{package}``.
        """
        _require_http_url(v, "registry_url_template")
        if PACKAGE_PLACEHOLDER not in v:
            raise ValueError(
                f"registry_url_template must contain {PACKAGE_PLACEHOLDER}, got {v!r}"
            )
        return v

    @field_validator("cache_ttl_seconds")
    @classmethod
    def validate_cache_ttl_seconds(cls, v: int) -> int:
        if not (1 <= v <= 604800):
            raise ValueError(f"cache_ttl_seconds must be between 1 and 604800 (7 days), got {v}")
        return v

    @field_validator("index_document")
    @classmethod
    def validate_index_document(cls, v: str) -> str:
        if not v or v.startswith("/"):
            raise ValueError(f"index_document must be a non-empty relative path, got {v!r}")
        return v

    @field_validator("upstream_timeout_seconds")
    @classmethod
    def validate_upstream_timeout_seconds(cls, v: float | None) -> float | None:
        if v is not None and v <= 0:
            raise ValueError(f"upstream_timeout_seconds must be > 0, got {v}")
        return v

    @field_validator("cleanup_interval_seconds")
    @classmethod
    def validate_cleanup_interval_seconds(cls, v: int) -> int:
        if v < 1:
            raise ValueError(f"cleanup_interval_seconds must be >= 1, got {v}")
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: Any) -> str:
        """Normalize the log level to upper case and check it is known.

        Example:
            >>> RedirectConfig(log_level="debug").log_level
            'DEBUG'
        """
        level = str(v).upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {v!r}")
        return level

    @field_validator("json_logs", mode="before")
    @classmethod
    def validate_json_logs(cls, v: Any) -> bool:
        if isinstance(v, str):
            lowered = v.strip().lower()
            if lowered in _TRUE_VALUES:
                return True
            if lowered in _FALSE_VALUES:
                return False
            raise ValueError(f"json_logs must be a boolean, got {v!r}")
        return bool(v)

    @property
    def service_root(self) -> str:
        """URL unmatched paths are redirected to."""
        return f"{self.service_origin}/"

    def registry_url(self, package_name: str) -> str:
        """Build the registry URL for a package.

        Example:
            >>> RedirectConfig().registry_url("asar")
            'https://registry.npmjs.org/@electron/asar/latest'
        """
        return self.registry_url_template.replace(PACKAGE_PLACEHOLDER, package_name)

    @classmethod
    def from_env(cls, prefix: str = "VERSION_REDIRECT_") -> "RedirectConfig":
        """Create configuration from environment variables.

        Variable names are the upper-cased field names with the prefix, for
        example ``VERSION_REDIRECT_SERVICE_ORIGIN``.

        Args:
            prefix: Prefix for environment variable names.

        Returns:
            RedirectConfig instance populated from environment variables.

        Note:
            Missing variables use the defaults defined in the model.
        """
        config_dict: dict[str, Any] = {}

        field_types = {
            "service_origin": str,
            "registry_url_template": str,
            "fallback_origin": str,
            "cache_ttl_seconds": int,
            "index_document": str,
            "upstream_timeout_seconds": float,
            "cleanup_interval_seconds": int,
            "log_level": str,
            "json_logs": str,
        }

        for field_name, field_type in field_types.items():
            env_var = f"{prefix}{field_name.upper()}"
            env_value = os.environ.get(env_var)

            if env_value is not None:
                if field_type is int:
                    config_dict[field_name] = int(env_value)
                elif field_type is float:
                    config_dict[field_name] = float(env_value) if env_value.strip() else None
                else:
                    config_dict[field_name] = env_value

        return cls(**config_dict)

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "RedirectConfig":
        """Create configuration from a dictionary.

        Raises:
            ValidationError: If the dictionary contains invalid values.
        """
        return cls(**config_dict)

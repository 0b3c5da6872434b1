"""Custom exceptions for the version redirect service.

This module defines the exception hierarchy used to signal genuine failures
of the external collaborators: the key-value store and the upstream
registry. Absence of a value (cache miss, registry response without a
version) is not an error and is represented by ``None`` instead.

Examples:
    Handling a storage error::

        from version_redirect.exceptions import StorageError

        try:
            version = await store.get(package_name)
        except StorageError as e:
            logger.warning("resolve.cache_read_failed", error=str(e))
            version = None

    Handling an upstream error::

        from version_redirect.exceptions import UpstreamError

        try:
            version = await registry.fetch_latest_version(package_name)
        except UpstreamError as e:
            logger.warning("resolve.upstream_failed", status_code=e.status_code)
            return Unresolved(reason=UnresolvedReason.UPSTREAM_ERROR)
"""


class VersionRedirectError(Exception):
    """Base exception for all version redirect errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        """Initialize the exception with a message.

        Args:
            message: Human-readable error description.
        """
        self.message = message
        super().__init__(message)


class StorageError(VersionRedirectError):
    """Key-value store operation failed.

    Raised by store implementations when the backend cannot complete a read
    or write. The resolver treats a failed read as a cache miss and a failed
    write as no write at all; neither aborts the request.

    Attributes:
        message: Human-readable error description.
        cause: The underlying exception that caused the storage error.

    Examples:
        Raising a storage error::

            try:
                value = await backend.get(key)
            except BackendError as e:
                raise StorageError(
                    message=f"Failed to read key {key}: {e}",
                    cause=e,
                ) from e
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        """Initialize the storage error with details.

        Args:
            message: Human-readable error description.
            cause: The underlying exception that caused the storage error.
        """
        super().__init__(message)
        self.cause = cause


class UpstreamError(VersionRedirectError):
    """The upstream registry could not be queried.

    Raised when the registry is unreachable, answers with a non-success
    status, or returns a body that is not valid JSON. A successful response
    that simply lacks a version is not an UpstreamError.

    Attributes:
        message: Human-readable error description.
        package_name: The package whose version was being looked up.
        status_code: HTTP status returned by the registry, if any.
        cause: The underlying exception, if any.
    """

    def __init__(
        self,
        message: str,
        package_name: str,
        status_code: int | None = None,
        cause: Exception | None = None,
    ) -> None:
        """Initialize the upstream error with details.

        Args:
            message: Human-readable error description.
            package_name: The package whose version was being looked up.
            status_code: HTTP status returned by the registry, if any.
            cause: The underlying exception, if any.
        """
        super().__init__(message)
        self.package_name = package_name
        self.status_code = status_code
        self.cause = cause

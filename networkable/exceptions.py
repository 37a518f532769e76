"""
Custom exceptions for networkable
"""

import os

PathLike = str | os.PathLike[str]


class NetworkableError(Exception):
    """Base exception for all networkable errors"""

    pass


class InvalidURLError(NetworkableError):
    """
    Raised when an endpoint URL cannot be resolved into a valid request URL.

    Carries both the endpoint's URL string and the base URL it was resolved against.
    """

    def __init__(self, url: str, base_url: str | None = None):
        self.url = url
        self.base_url = base_url

        if base_url:
            super().__init__(f"Invalid URL '{url}' (relative to '{base_url}')")
        else:
            super().__init__(f"Invalid URL '{url}'")


class MultipartFormError(NetworkableError):
    """Base class for failures while constructing a multipart/form-data body"""

    reason = "multipart form error"

    def __init__(self, path: PathLike, message: str | None = None):
        self.path = path
        super().__init__(message or f"{self.reason}: {os.fspath(path)}")


class InvalidFileSourceError(MultipartFormError):
    """
    Raised when a file source cannot be used as a body part.

    This includes:
    - Paths that do not exist or point to a directory
    - References that are not local files (e.g. https:// URLs)
    - File names or MIME types that cannot be derived from the path
    """

    reason = "invalid file source"


class UnreachableFileSourceError(MultipartFormError):
    """Raised when a placeholder/offloaded file cannot be materialized"""

    reason = "unreachable file source"


class UnknownFileSizeError(MultipartFormError):
    """Raised when the size of a file source cannot be read"""

    reason = "unknown file size"


class StreamInitializationError(MultipartFormError):
    """Raised when a read stream over a file source cannot be opened"""

    reason = "failed to open read stream"


class StreamReadError(MultipartFormError):
    """
    Raised when a content stream reports an error while the body is being built.

    The whole build is aborted; no partial body is returned.
    """

    reason = "failed to read stream"


class ConfigurationError(NetworkableError):
    """
    Raised when required configuration values are missing or invalid.
    """

    def __init__(self, message: str, config_key: str | None = None):
        self.config_key = config_key
        if config_key:
            super().__init__(f"Configuration error for '{config_key}': {message}")
        else:
            super().__init__(f"Configuration error: {message}")

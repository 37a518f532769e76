"""HTTP client abstraction for dependency injection and testability."""

import requests

from .logging_config import get_module_logger
from .request_builder import Request

logger = get_module_logger("http_client")


class HttpClient:
    """
    HTTP client wrapper sending built requests.

    This abstraction enables:
    - Dependency injection for testing
    - Easy mocking in unit tests
    - Centralized HTTP configuration
    """

    def __init__(self, session: requests.Session | None = None):
        """
        Initialize the client

        Args:
            session: requests.Session used for sending (a new one if None)
        """
        self.session = session or requests.Session()

    def send(self, request: Request, **kwargs) -> requests.Response:
        """
        Send a built request.

        Args:
            request: Request produced by RequestBuilder.build()
            **kwargs: Additional arguments to pass to requests.Session.send()

        Returns:
            requests.Response object
        """
        prepared = request.prepare()
        kwargs.setdefault("timeout", request.timeout)
        logger.debug(f"Sending {prepared.method} {prepared.url}")
        return self.session.send(prepared, **kwargs)


# Create a default instance for convenience
default_http_client = HttpClient()

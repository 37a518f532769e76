"""
Request builder - turns endpoints into ready-to-send requests

Resolves the endpoint URL against a base URL, applies cache policy and timeout,
and copies headers, method and body into a Request handed to the transport.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from urllib.parse import urljoin, urlparse

import requests

from .config import Config, config
from .endpoint import Endpoint
from .exceptions import ConfigurationError, InvalidURLError
from .logging_config import get_module_logger

logger = get_module_logger("request_builder")

DEFAULT_TIMEOUT = 60.0


class CachePolicy(str, Enum):
    """Cache policies a transport may honour. Opaque to the request builder."""

    USE_PROTOCOL_CACHE_POLICY = "use_protocol_cache_policy"
    RELOAD_IGNORING_LOCAL_CACHE_DATA = "reload_ignoring_local_cache_data"
    RELOAD_IGNORING_LOCAL_AND_REMOTE_CACHE_DATA = "reload_ignoring_local_and_remote_cache_data"
    RETURN_CACHE_DATA_ELSE_LOAD = "return_cache_data_else_load"
    RETURN_CACHE_DATA_DONT_LOAD = "return_cache_data_dont_load"
    RELOAD_REVALIDATING_CACHE_DATA = "reload_revalidating_cache_data"


@dataclass
class Request:
    """A fully formed request, ready for the transport"""

    url: str
    method: str
    headers: dict[str, str] | None = None
    body: bytes | None = None
    cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY
    timeout: float = DEFAULT_TIMEOUT

    def prepare(self) -> requests.PreparedRequest:
        """Convert into a requests.PreparedRequest"""
        return requests.Request(
            method=self.method,
            url=self.url,
            headers=dict(self.headers) if self.headers else None,
            data=self.body,
        ).prepare()


def method_token(method: object) -> str:
    """Canonical upper-cased method token ("get" and Method.GET both give "GET")"""
    if isinstance(method, Enum):
        method = method.value
    return str(method).upper()


HTTP_SCHEMES = {"http", "https"}


def validate_url(url: str) -> bool:
    """Whether the URL is an absolute http(s) URL that requests accepts"""
    parsed = urlparse(url)
    if parsed.scheme.lower() not in HTTP_SCHEMES or not parsed.netloc:
        return False

    try:
        requests.PreparedRequest().prepare_url(url, None)
    except requests.exceptions.RequestException:
        return False
    return True


class RequestBuilder:
    """
    Constructs requests from endpoints.

    If the URL of an endpoint is absolute, the base URL takes no effect.
    """

    def __init__(
        self,
        base_url: str | None = None,
        cache_policy: CachePolicy = CachePolicy.USE_PROTOCOL_CACHE_POLICY,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the request builder

        Args:
            base_url: Base URL relative endpoint URLs are resolved against
            cache_policy: Cache policy for built requests
            timeout: Timeout interval for built requests, in seconds
        """
        self.base_url = base_url
        self.cache_policy = cache_policy
        self.timeout = timeout

    @classmethod
    def from_config(cls, config_obj: Config | None = None) -> "RequestBuilder":
        """
        Create a builder from the http.request_builder config section

        Raises:
            ConfigurationError: If cache_policy or timeout hold invalid values
        """
        if config_obj is None:
            config_obj = config

        policy_name = config_obj.get(
            "http.request_builder.cache_policy", CachePolicy.USE_PROTOCOL_CACHE_POLICY.value
        )
        try:
            cache_policy = CachePolicy(str(policy_name).lower())
        except ValueError as e:
            raise ConfigurationError(
                f"unknown cache policy '{policy_name}'",
                config_key="http.request_builder.cache_policy",
            ) from e

        timeout = config_obj.get("http.request_builder.timeout", DEFAULT_TIMEOUT)
        try:
            timeout = float(timeout)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"timeout must be a number, got {timeout!r}",
                config_key="http.request_builder.timeout",
            ) from e

        return cls(
            base_url=config_obj.get("http.request_builder.base_url"),
            cache_policy=cache_policy,
            timeout=timeout,
        )

    def resolve_url(self, url: str) -> str:
        """
        Resolve an endpoint URL against the base URL.

        Raises:
            InvalidURLError: If the result is not a valid absolute URL
        """
        resolved = urljoin(self.base_url, url) if self.base_url else url
        if not resolved or not validate_url(resolved):
            raise InvalidURLError(url, base_url=self.base_url)
        return resolved

    def build(self, endpoint: Endpoint) -> Request:
        """
        Create a request from an endpoint.

        Args:
            endpoint: The endpoint of the request

        Returns:
            The built request

        Raises:
            InvalidURLError: If the endpoint URL does not resolve to a valid URL
            Any exception raised by endpoint.body() (e.g. StreamReadError)
        """
        url = self.resolve_url(endpoint.url)

        headers: Mapping[str, str] | None = endpoint.headers
        request = Request(
            url=url,
            method=method_token(endpoint.method),
            headers=dict(headers) if headers is not None else None,
            body=endpoint.body(),
            cache_policy=self.cache_policy,
            timeout=self.timeout,
        )

        logger.debug(f"Built request: {request.method} {request.url}")
        return request

"""
Endpoints - declarative descriptions of HTTP requests

Anything exposing headers, url, method and body() can be built into a request;
the dataclasses below cover plain and multipart/form-data requests.
"""

from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum
from typing import Protocol

from .multipart import MultipartFormDataBuilder


class Method(str, Enum):
    """HTTP request methods"""

    GET = "get"
    POST = "post"
    PUT = "put"
    DELETE = "delete"
    PATCH = "patch"
    HEAD = "head"
    OPTIONS = "options"
    TRACE = "trace"
    CONNECT = "connect"


class Endpoint(Protocol):
    """
    An object that represents an HTTP request.

    Attributes:
        headers: Header fields of the request (optional)
        url: Absolute URL, or URL relative to the request builder's base URL
        method: Method of the request
    """

    @property
    def headers(self) -> Mapping[str, str] | None: ...

    @property
    def url(self) -> str: ...

    @property
    def method(self) -> Method | str: ...

    def body(self) -> bytes | None:
        """The data sent as the message body of the request."""
        ...


@dataclass(frozen=True)
class HTTPEndpoint:
    """Endpoint with a fixed (or no) body"""

    url: str
    method: Method | str = Method.GET
    headers: Mapping[str, str] | None = None
    content: bytes | None = None

    def body(self) -> bytes | None:
        return self.content


@dataclass
class MultipartEndpoint:
    """
    Endpoint whose body is a multipart/form-data form.

    The Content-Type header (with boundary) is added to the caller's headers,
    and body() builds the form on every call.
    """

    url: str
    form: MultipartFormDataBuilder = field(default_factory=MultipartFormDataBuilder)
    method: Method | str = Method.POST
    extra_headers: Mapping[str, str] | None = None

    @property
    def headers(self) -> dict[str, str]:
        headers = dict(self.extra_headers or {})
        headers["Content-Type"] = self.form.content_type
        return headers

    def body(self) -> bytes | None:
        return self.form.build()

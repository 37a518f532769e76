"""
networkable - build HTTP requests and multipart/form-data bodies
"""

from .endpoint import Endpoint, HTTPEndpoint, Method, MultipartEndpoint
from .exceptions import (
    ConfigurationError,
    InvalidFileSourceError,
    InvalidURLError,
    MultipartFormError,
    NetworkableError,
    StreamInitializationError,
    StreamReadError,
    UnknownFileSizeError,
    UnreachableFileSourceError,
)
from .http_client import HttpClient, default_http_client
from .multipart import MultipartFormDataBuilder, Part
from .request_builder import CachePolicy, Request, RequestBuilder

__all__ = [
    "CachePolicy",
    "ConfigurationError",
    "Endpoint",
    "HTTPEndpoint",
    "HttpClient",
    "InvalidFileSourceError",
    "InvalidURLError",
    "Method",
    "MultipartEndpoint",
    "MultipartFormDataBuilder",
    "MultipartFormError",
    "NetworkableError",
    "Part",
    "Request",
    "RequestBuilder",
    "StreamInitializationError",
    "StreamReadError",
    "UnknownFileSizeError",
    "UnreachableFileSourceError",
    "default_http_client",
]

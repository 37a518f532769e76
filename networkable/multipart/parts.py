"""
Body parts of a multipart/form-data request

A part owns a re-openable content source, the number of bytes that source
produces and the headers written in front of it. Sources are opened only while
a body is being built, so file content never sits in memory at append time.
"""

import io
import os
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import BinaryIO

from ..exceptions import StreamReadError
from ..file_system import FileSystem, StrPath, default_file_system


class BytesSource:
    """Content source over an in-memory buffer"""

    def __init__(self, data: bytes):
        self.data = bytes(data)

    def open(self) -> BinaryIO:
        return io.BytesIO(self.data)

    def describe(self) -> str:
        return f"<{len(self.data)} bytes in memory>"


class FileSource:
    """Content source that streams a local file lazily"""

    def __init__(self, path: StrPath, file_system: FileSystem | None = None):
        self.path = path
        self.file_system = file_system or default_file_system

    def open(self) -> BinaryIO:
        return self.file_system.open_read_stream(self.path)

    def describe(self) -> str:
        return os.fspath(self.path)


ContentSource = BytesSource | FileSource


@dataclass(frozen=True)
class Part:
    """One section of a multipart/form-data body"""

    source: ContentSource
    content_length: int
    headers: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self):
        if self.content_length < 0:
            raise ValueError(f"content_length must be non-negative, got {self.content_length}")
        # Headers are frozen together with the part
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))


def part_headers(
    name: str, file_name: str | None = None, mime_type: str | None = None
) -> dict[str, str]:
    """
    Create the headers of a body part.

    - `Content-Disposition: form-data; name={name}; filename={file_name}`
    - `Content-Type: {mime_type}` (only when a MIME type is given)

    Args:
        name: Form field name
        file_name: Optional file name added to the disposition
        mime_type: Optional MIME type of the content

    Returns:
        Ordered header mapping, disposition first
    """
    disposition = f"form-data; name={name}"
    if file_name is not None:
        disposition += f"; filename={file_name}"

    headers = {"Content-Disposition": disposition}
    if mime_type is not None:
        headers["Content-Type"] = mime_type
    return headers


def encode_headers(headers: Mapping[str, str], end_of_line: str = "\r\n") -> bytes:
    """Encode headers as `key: value` lines, each terminated by end_of_line."""
    lines = end_of_line.join(f"{key}: {value}" for key, value in headers.items())
    return (lines + end_of_line).encode("utf-8")


@contextmanager
def open_source(part: Part) -> Iterator[BinaryIO]:
    """Open a part's content source, closing it on every exit path."""
    try:
        stream = part.source.open()
    except OSError as e:
        raise StreamReadError(part.source.describe()) from e

    try:
        yield stream
    finally:
        stream.close()


def iter_content(part: Part, buffer_size: int) -> Iterator[bytes]:
    """
    Stream a part's content in chunks of at most buffer_size bytes.

    Raises:
        StreamReadError: If the source cannot be opened or fails mid-read
    """
    if buffer_size <= 0:
        raise ValueError(f"buffer_size must be positive, got {buffer_size}")

    with open_source(part) as stream:
        while True:
            try:
                chunk = stream.read(buffer_size)
            except OSError as e:
                raise StreamReadError(part.source.describe()) from e
            if not chunk:
                break
            yield chunk

"""
multipart/form-data body construction

The "multipart/form-data" body contains a series of parts. Each part carries a
Content-Disposition header (RFC 2183) with the disposition type "form-data" and
a "name" parameter holding the field name in the form:

    --{boundary}\\r\\n
    Content-Disposition: form-data; name={name}; filename={file_name}\\r\\n
    Content-Type: {mime_type}\\r\\n
    \\r\\n
    {content}\\r\\n
    --{boundary}--\\r\\n
"""

import mimetypes
import os
import uuid
from collections.abc import Iterator
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from ..config import Config, config
from ..exceptions import (
    InvalidFileSourceError,
    StreamInitializationError,
    UnknownFileSizeError,
    UnreachableFileSourceError,
)
from ..file_system import FileSystem, StrPath, default_file_system
from ..logging_config import get_module_logger
from .parts import BytesSource, FileSource, Part, encode_headers, iter_content, part_headers

logger = get_module_logger("multipart")

DEFAULT_END_OF_LINE = "\r\n"
DEFAULT_STREAM_BUFFER_SIZE = 1024


def generate_boundary() -> str:
    """Random boundary token without separator characters."""
    return uuid.uuid4().hex


def local_path(file_source: StrPath) -> Path | None:
    """
    Resolve a file reference to a local path.

    Accepts plain paths and file: URLs. Returns None for references that are
    not local files (http://, s3://, ...). A colon alone does not make a URL,
    so names like "notes:v2.txt" stay local paths.
    """
    if isinstance(file_source, os.PathLike):
        return Path(file_source)

    parsed = urlparse(file_source)
    if parsed.scheme == "file":
        if parsed.netloc not in ("", "localhost"):
            return None
        return Path(url2pathname(parsed.path))
    if "://" in file_source:
        return None
    return Path(file_source)


class MultipartFormDataBuilder:
    """
    Builds the body of a multipart/form-data request.

    Parts are kept in append order and written in that order. File parts are
    validated when appended but only read while the body is being built, in
    chunks of at most stream_buffer_size bytes.

    A builder is not thread-safe: serialize append() and build() calls.
    """

    def __init__(
        self,
        boundary: str | None = None,
        end_of_line: str | None = None,
        stream_buffer_size: int | None = None,
        file_system: FileSystem | None = None,
        config_obj: Config | None = None,
    ):
        """
        Initialize the builder

        Args:
            boundary: Boundary separating the parts (random token if None)
            end_of_line: Line terminator (defaults to config value, then CRLF)
            stream_buffer_size: Maximum bytes read from a stream at a time
                (defaults to config value, then 1024)
            file_system: File system provider (uses the local file system if None)
            config_obj: Config object (uses global config if None)
        """
        if config_obj is None:
            config_obj = config

        if end_of_line is None:
            end_of_line = config_obj.get("multipart.end_of_line", DEFAULT_END_OF_LINE)
        if stream_buffer_size is None:
            stream_buffer_size = int(
                config_obj.get("multipart.stream_buffer_size", DEFAULT_STREAM_BUFFER_SIZE)
            )
        if stream_buffer_size <= 0:
            raise ValueError(f"stream_buffer_size must be positive, got {stream_buffer_size}")

        self.boundary = boundary or generate_boundary()
        self.end_of_line = end_of_line
        self.stream_buffer_size = stream_buffer_size
        self.file_system = file_system or default_file_system
        self._parts: list[Part] = []

        self._start_boundary = f"--{self.boundary}{end_of_line}".encode("utf-8")
        self._end_boundary = f"--{self.boundary}--{end_of_line}".encode("utf-8")
        self._end_of_line = end_of_line.encode("utf-8")

    @property
    def parts(self) -> tuple[Part, ...]:
        """Appended parts, in append order"""
        return tuple(self._parts)

    @property
    def content_type(self) -> str:
        """Value for the request's Content-Type header"""
        return f"multipart/form-data; boundary={self.boundary}"

    @property
    def content_length(self) -> int:
        """Length of the built body, computed without reading any content"""
        if not self._parts:
            return 0

        framing = len(self._start_boundary) + 2 * len(self._end_of_line)
        total = len(self._end_boundary)
        for part in self._parts:
            total += framing + len(encode_headers(part.headers, self.end_of_line))
            total += part.content_length
        return total

    # Appending

    def append(
        self,
        data: bytes | str,
        name: str,
        file_name: str | None = None,
        mime_type: str | None = None,
    ) -> Part:
        """
        Create a body part from in-memory data and append it.

        Args:
            data: Content of the part (str is UTF-8 encoded)
            name: Form field name for the Content-Disposition header
            file_name: Optional file name for the Content-Disposition header
            mime_type: Optional MIME type for the Content-Type header

        Returns:
            The appended part
        """
        if isinstance(data, str):
            data = data.encode("utf-8")

        part = Part(
            source=BytesSource(data),
            content_length=len(data),
            headers=part_headers(name, file_name=file_name, mime_type=mime_type),
        )
        self._parts.append(part)
        logger.debug(f"Appended part '{name}' ({part.content_length} bytes in memory)")
        return part

    def append_file(
        self,
        file_source: StrPath,
        name: str,
        file_name: str | None = None,
        mime_type: str | None = None,
    ) -> Part:
        """
        Create a body part from a local file and append it.

        The file name defaults to the path's last component and the MIME type
        is guessed from its extension. Content is not read until build().

        Args:
            file_source: Local path or file:// URL
            name: Form field name for the Content-Disposition header
            file_name: File name for the Content-Disposition header
            mime_type: MIME type for the Content-Type header

        Returns:
            The appended part

        Raises:
            InvalidFileSourceError: Not a local regular file, or the file name
                or MIME type cannot be derived
            UnreachableFileSourceError: The file is a placeholder that cannot be materialized
            UnknownFileSizeError: The file size cannot be read
            StreamInitializationError: A read stream over the file cannot be opened
        """
        if file_name is None or mime_type is None:
            derived_name, derived_type = self._describe_file(file_source)
            if file_name is None:
                file_name = derived_name
            if mime_type is None:
                mime_type = derived_type
            if not file_name or mime_type is None:
                raise InvalidFileSourceError(
                    file_source,
                    f"cannot derive file name and MIME type from {os.fspath(file_source)}",
                )

        path = self._validate_file(file_source)
        content_length = self._file_size(path)

        part = Part(
            source=FileSource(path, self.file_system),
            content_length=content_length,
            headers=part_headers(name, file_name=file_name, mime_type=mime_type),
        )
        self._parts.append(part)
        logger.debug(f"Appended part '{name}' from {path} ({content_length} bytes)")
        return part

    def _describe_file(self, file_source: StrPath) -> tuple[str, str | None]:
        path = local_path(file_source)
        if path is None:
            path = Path(urlparse(os.fspath(file_source)).path)
        mime_type, _ = mimetypes.guess_type(path.name)
        return path.name, mime_type

    def _validate_file(self, file_source: StrPath) -> Path:
        path = local_path(file_source)
        if path is None:
            raise InvalidFileSourceError(
                file_source, f"not a local file reference: {os.fspath(file_source)}"
            )

        exists, is_directory = self.file_system.exists(path)
        if not exists:
            raise InvalidFileSourceError(file_source, f"file does not exist: {path}")
        if is_directory:
            raise InvalidFileSourceError(file_source, f"path is a directory: {path}")

        try:
            reachable = self.file_system.check_reachable(path)
        except OSError as e:
            raise UnreachableFileSourceError(file_source) from e
        if not reachable:
            raise UnreachableFileSourceError(file_source)

        return path

    def _file_size(self, path: Path) -> int:
        try:
            size = self.file_system.size(path)
        except OSError as e:
            raise UnknownFileSizeError(path) from e
        if size is None:
            raise UnknownFileSizeError(path)

        # Open the stream once up front; it is reopened for every build
        try:
            stream = self.file_system.open_read_stream(path)
        except OSError as e:
            raise StreamInitializationError(path) from e
        stream.close()

        return int(size)

    # Building

    def iter_chunks(self) -> Iterator[bytes]:
        """
        Produce the body lazily, chunk by chunk.

        Suitable as a streaming request body. A stream error raises
        StreamReadError after the chunks already yielded; use build() when
        no partial output is acceptable.
        """
        if not self._parts:
            return

        for part in list(self._parts):
            yield self._start_boundary
            yield encode_headers(part.headers, self.end_of_line)
            yield self._end_of_line

            streamed = 0
            for chunk in iter_content(part, self.stream_buffer_size):
                streamed += len(chunk)
                yield chunk
            if streamed != part.content_length:
                logger.warning(
                    f"Part {part.source.describe()} streamed {streamed} bytes, "
                    f"expected {part.content_length}"
                )

            yield self._end_of_line

        yield self._end_boundary

    def build(self) -> bytes:
        """
        Build the whole multipart/form-data body.

        Returns:
            The framed body, or b"" when no parts were appended

        Raises:
            StreamReadError: If any content stream fails; no partial body is returned
        """
        body = b"".join(self.iter_chunks())
        logger.debug(f"Built multipart body: {len(self._parts)} part(s), {len(body)} bytes")
        return body

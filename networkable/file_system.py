"""File system abstraction for dependency injection and testability."""

import os
from pathlib import Path
from typing import BinaryIO, Protocol

StrPath = str | os.PathLike[str]


class FileSystem(Protocol):
    """Operations the multipart builder needs from a file system provider."""

    def exists(self, path: StrPath) -> tuple[bool, bool]: ...

    def size(self, path: StrPath) -> int: ...

    def open_read_stream(self, path: StrPath) -> BinaryIO: ...

    def check_reachable(self, path: StrPath) -> bool: ...


class LocalFileSystem:
    """
    Local file system wrapper used by the multipart builder.

    This abstraction enables:
    - Dependency injection for testing
    - Simulating placeholder files and I/O failures in unit tests
    - Swapping in providers for offloaded or virtual storage
    """

    def exists(self, path: StrPath) -> tuple[bool, bool]:
        """
        Check whether a path exists.

        Args:
            path: Local file system path

        Returns:
            tuple of (exists, is_directory)
        """
        target = Path(path)
        if not target.exists():
            return False, False
        return True, target.is_dir()

    def size(self, path: StrPath) -> int:
        """
        Read the size of a file in bytes.

        Raises:
            OSError: If the size attribute cannot be read
        """
        return os.stat(path).st_size

    def open_read_stream(self, path: StrPath) -> BinaryIO:
        """
        Open a binary read stream over a file.

        Raises:
            OSError: If the file cannot be opened for reading
        """
        return open(path, "rb")

    def check_reachable(self, path: StrPath) -> bool:
        """
        Check whether the file's bytes can be materialized locally.

        Local files are always reachable once they exist. Providers backed by
        offloaded storage report placeholders here instead.

        Raises:
            OSError: If reachability cannot be determined
        """
        return Path(path).is_file()


# Create a default instance shared by builders that don't inject their own
default_file_system = LocalFileSystem()

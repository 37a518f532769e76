"""
Tests for multipart/parts.py - part headers, header encoding and content streaming
"""

import pytest

from networkable.exceptions import StreamReadError
from networkable.multipart.parts import (
    BytesSource,
    FileSource,
    Part,
    encode_headers,
    iter_content,
    part_headers,
)
from tests.test_helpers import FakeFileSystem, TrackingStream


class TestPartHeaders:
    """Test the header construction rule for body parts"""

    def test_name_only(self):
        """Should produce only a Content-Disposition header"""
        headers = part_headers("field")

        assert headers == {"Content-Disposition": "form-data; name=field"}

    def test_with_file_name(self):
        """Should append the filename parameter to the disposition"""
        headers = part_headers("upload", file_name="report.pdf")

        assert headers["Content-Disposition"] == "form-data; name=upload; filename=report.pdf"
        assert "Content-Type" not in headers

    def test_with_mime_type_keeps_both_headers(self):
        """Disposition must not overwrite the Content-Type header"""
        headers = part_headers("upload", file_name="a.png", mime_type="image/png")

        assert headers["Content-Type"] == "image/png"
        assert headers["Content-Disposition"] == "form-data; name=upload; filename=a.png"

    def test_disposition_comes_first(self):
        """Content-Disposition should be the first header written"""
        headers = part_headers("upload", file_name="a.png", mime_type="image/png")

        assert list(headers) == ["Content-Disposition", "Content-Type"]


class TestEncodeHeaders:
    """Test header block encoding"""

    def test_single_header(self):
        encoded = encode_headers({"Content-Disposition": "form-data; name=a"})

        assert encoded == b"Content-Disposition: form-data; name=a\r\n"

    def test_multiple_headers_joined_by_end_of_line(self):
        encoded = encode_headers({"A": "1", "B": "2"})

        assert encoded == b"A: 1\r\nB: 2\r\n"

    def test_custom_end_of_line(self):
        encoded = encode_headers({"A": "1", "B": "2"}, end_of_line="\n")

        assert encoded == b"A: 1\nB: 2\n"

    def test_non_ascii_values_are_utf8(self):
        encoded = encode_headers({"Content-Disposition": "form-data; name=größe"})

        assert "größe".encode() in encoded


class TestPart:
    """Test the Part value"""

    def test_negative_content_length_rejected(self):
        with pytest.raises(ValueError):
            Part(source=BytesSource(b""), content_length=-1)

    def test_part_is_immutable(self):
        part = Part(source=BytesSource(b"x"), content_length=1)

        with pytest.raises(AttributeError):
            part.content_length = 2  # type: ignore[misc]

    def test_headers_are_read_only(self):
        part = Part(source=BytesSource(b"x"), content_length=1, headers=part_headers("a"))

        with pytest.raises(TypeError):
            part.headers["Content-Disposition"] = "form-data; name=evil"  # type: ignore[index]

        assert part.headers["Content-Disposition"] == "form-data; name=a"

    def test_headers_are_copied_on_construction(self):
        headers = part_headers("a")
        part = Part(source=BytesSource(b"x"), content_length=1, headers=headers)

        headers["Content-Type"] = "text/plain"

        assert "Content-Type" not in part.headers


class TestIterContent:
    """Test bounded streaming of part content"""

    def test_chunks_never_exceed_buffer_size(self):
        data = b"0123456789" * 10
        part = Part(source=BytesSource(data), content_length=len(data))

        chunks = list(iter_content(part, 7))

        assert b"".join(chunks) == data
        assert all(len(chunk) <= 7 for chunk in chunks)

    def test_empty_content_yields_nothing(self):
        part = Part(source=BytesSource(b""), content_length=0)

        assert list(iter_content(part, 16)) == []

    def test_source_can_be_read_twice(self):
        part = Part(source=BytesSource(b"again"), content_length=5)

        assert b"".join(iter_content(part, 2)) == b"again"
        assert b"".join(iter_content(part, 2)) == b"again"

    def test_invalid_buffer_size(self):
        part = Part(source=BytesSource(b"x"), content_length=1)

        with pytest.raises(ValueError):
            list(iter_content(part, 0))

    def test_file_stream_closed_after_exhausting(self, text_file):
        file_system = FakeFileSystem()
        part = Part(source=FileSource(text_file, file_system), content_length=18)

        assert b"".join(iter_content(part, 4)) == b"hello from a file\n"
        assert file_system.opened_streams[0].was_closed

    def test_read_error_raises_and_closes_stream(self, text_file):
        """A failing read should surface as StreamReadError and release the stream"""
        file_system = FakeFileSystem(
            stream_factory=lambda path: TrackingStream(b"abcdefgh", fail_after_reads=1)
        )
        part = Part(source=FileSource(text_file, file_system), content_length=8)

        with pytest.raises(StreamReadError) as exc_info:
            list(iter_content(part, 2))

        assert isinstance(exc_info.value.__cause__, OSError)
        assert file_system.opened_streams[0].was_closed

    def test_open_error_raises_stream_read_error(self, text_file):
        file_system = FakeFileSystem(open_error=FileNotFoundError("gone"))
        part = Part(source=FileSource(text_file, file_system), content_length=18)

        with pytest.raises(StreamReadError):
            list(iter_content(part, 4))

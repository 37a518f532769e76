"""
Tests for endpoint.py - Method, HTTPEndpoint and MultipartEndpoint
"""

from networkable.config import Config
from networkable.endpoint import HTTPEndpoint, Method, MultipartEndpoint
from networkable.multipart import MultipartFormDataBuilder


class TestMethod:
    """Test the Method enum"""

    def test_values_are_lowercase_tokens(self):
        assert Method.GET.value == "get"
        assert Method.PATCH.value == "patch"

    def test_compares_to_strings(self):
        assert Method.POST == "post"


class TestHTTPEndpoint:
    """Test the plain endpoint variant"""

    def test_defaults(self):
        endpoint = HTTPEndpoint(url="/users")

        assert endpoint.method is Method.GET
        assert endpoint.headers is None
        assert endpoint.body() is None

    def test_body_returns_content(self):
        endpoint = HTTPEndpoint(url="/users", method=Method.POST, content=b'{"a": 1}')

        assert endpoint.body() == b'{"a": 1}'


class TestMultipartEndpoint:
    """Test the multipart/form-data endpoint variant"""

    def test_content_type_header_carries_boundary(self):
        form = MultipartFormDataBuilder(boundary="abc", config_obj=Config({}))
        endpoint = MultipartEndpoint(url="/upload", form=form)

        assert endpoint.headers == {"Content-Type": "multipart/form-data; boundary=abc"}
        assert endpoint.method is Method.POST

    def test_extra_headers_merged(self):
        form = MultipartFormDataBuilder(boundary="abc", config_obj=Config({}))
        endpoint = MultipartEndpoint(
            url="/upload", form=form, extra_headers={"Authorization": "Bearer token"}
        )

        assert endpoint.headers == {
            "Authorization": "Bearer token",
            "Content-Type": "multipart/form-data; boundary=abc",
        }

    def test_extra_headers_not_mutated(self):
        extra = {"Authorization": "Bearer token"}
        endpoint = MultipartEndpoint(url="/upload", extra_headers=extra)

        assert "Content-Type" in endpoint.headers

        assert extra == {"Authorization": "Bearer token"}

    def test_body_builds_form(self):
        form = MultipartFormDataBuilder(boundary="abc", config_obj=Config({}))
        form.append(b"value", name="field")
        endpoint = MultipartEndpoint(url="/upload", form=form)

        assert endpoint.body() == form.build()

    def test_default_form_is_empty(self):
        endpoint = MultipartEndpoint(url="/upload")

        assert endpoint.body() == b""

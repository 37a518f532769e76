"""
Pytest configuration and shared fixtures
"""

import pytest

from networkable.config import Config
from networkable.multipart import MultipartFormDataBuilder
from tests.test_helpers import create_test_config


@pytest.fixture
def test_config():
    """Config object built from the test configuration dictionary"""
    return Config(create_test_config())


@pytest.fixture
def builder(test_config):
    """Multipart builder with a fixed boundary and a small read buffer"""
    return MultipartFormDataBuilder(boundary="testboundary", config_obj=test_config)


@pytest.fixture
def text_file(tmp_path):
    """A small text file on disk"""
    path = tmp_path / "notes.txt"
    path.write_bytes(b"hello from a file\n")
    return path


@pytest.fixture
def large_file(tmp_path):
    """A binary file much larger than the test read buffer"""
    path = tmp_path / "blob.bin"
    path.write_bytes(bytes(range(256)) * 40)
    return path

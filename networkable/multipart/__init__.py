"""
multipart/form-data module - builds request bodies from data and files
"""

from .builder import MultipartFormDataBuilder, generate_boundary
from .parts import BytesSource, FileSource, Part, encode_headers, part_headers

__all__ = [
    "BytesSource",
    "FileSource",
    "MultipartFormDataBuilder",
    "Part",
    "encode_headers",
    "generate_boundary",
    "part_headers",
]

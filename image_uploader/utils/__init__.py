"""Utility modules for object keys."""

from .keys import build_object_key, build_public_url, file_base_name

__all__ = [
    "build_object_key",
    "build_public_url",
    "file_base_name",
]

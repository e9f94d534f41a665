"""Content type lookup for uploaded files."""

from pathlib import Path

DEFAULT_CONTENT_TYPE = "application/octet-stream"

IMAGE_CONTENT_TYPES = {
    ".png": "image/png",
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".gif": "image/gif",
    ".webp": "image/webp",
    ".bmp": "image/bmp",
    ".svg": "image/svg+xml",
    ".ico": "image/x-icon",
    ".tif": "image/tiff",
    ".tiff": "image/tiff",
    ".avif": "image/avif",
    ".heic": "image/heic",
}


def content_type_for(display_name: str) -> str:
    """Pick the Content-Type to store with a file, by extension."""
    return IMAGE_CONTENT_TYPES.get(Path(display_name).suffix.lower(), DEFAULT_CONTENT_TYPE)

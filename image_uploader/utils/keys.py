"""Object key and public URL construction."""

from datetime import datetime
from pathlib import Path

KEY_PREFIX = "image"
FALLBACK_FILE_NAME = "fallback.png"


def file_base_name(file_path: str | Path, fallback: str = FALLBACK_FILE_NAME) -> str:
    """Return the final path segment, or fallback when there is none
    or it is not valid UTF-8.

    Example: "/tmp/shots/photo.png" -> "photo.png", "/" -> "fallback.png"
    """
    name = Path(file_path).name
    if name in ("", ".", ".."):
        return fallback
    try:
        name.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable bytes from the filesystem, surrogate-escaped by os.fsdecode
        return fallback
    return name


def build_object_key(file_path: str | Path, now: datetime | None = None) -> str:
    """Build the date-partitioned object key for an upload.

    Args:
        file_path: Local file being uploaded
        now: Moment of the upload. Defaults to the current local time.

    Returns:
        A key of the form image/<year>/<MM>/<DD>/<base name>
    """
    if now is None:
        now = datetime.now()
    return (
        f"{KEY_PREFIX}/{now.year}/{now.month:02d}/{now.day:02d}/"
        f"{file_base_name(file_path)}"
    )


def build_public_url(base_url: str, key: str) -> str:
    """Join the public base URL and an object key with a single slash."""
    return f"{base_url.rstrip('/')}/{key}"

"""Data models for uploads."""

from .upload import BackupOutcome, Credentials, UploadRequest, UploadResult

__all__ = [
    "BackupOutcome",
    "Credentials",
    "UploadRequest",
    "UploadResult",
]

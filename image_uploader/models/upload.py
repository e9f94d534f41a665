"""Upload data models."""

from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class Credentials:
    """Storage provider access credentials."""

    access_key: str
    secret_key: str


@dataclass
class UploadRequest:
    """A single upload, derived from the CLI argument and the local date."""

    source: Path
    object_key: str
    display_name: str
    backup_path: Path | None = None


@dataclass(frozen=True)
class UploadResult:
    """What the storage provider reported for a finished upload."""

    key: str


@dataclass(frozen=True)
class BackupOutcome:
    """Result of the optional local backup copy."""

    SKIPPED = "skipped"
    SUCCEEDED = "succeeded"
    FAILED = "failed"

    status: str
    path: Path | None = None
    reason: str | None = None

    @classmethod
    def skipped(cls) -> "BackupOutcome":
        return cls(status=cls.SKIPPED)

    @classmethod
    def succeeded(cls, path: Path) -> "BackupOutcome":
        return cls(status=cls.SUCCEEDED, path=path)

    @classmethod
    def failed(cls, reason: str) -> "BackupOutcome":
        return cls(status=cls.FAILED, reason=reason)

    def describe(self) -> str:
        """Human-readable summary used in the log record."""
        if self.status == self.SUCCEEDED:
            return f"succeeded ({self.path})"
        if self.status == self.FAILED:
            return f"failed ({self.reason})"
        return "skipped (base_dir not configured)"

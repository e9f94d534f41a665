"""Local backup copies of uploaded files."""

import logging
import shutil
from pathlib import Path

from ..errors import BackupCopyFailed
from ..models import BackupOutcome

logger = logging.getLogger(__name__)


def copy_file(src: Path, dst: Path) -> Path:
    """Copy src to dst byte for byte, leaving src in place.

    Raises OSError if the copy fails.
    """
    shutil.copy(src, dst)
    return dst


class BackupCopier:
    """Mirrors uploaded files into the configured backup directory."""

    def __init__(self, base_dir: str | Path | None, log: logging.Logger | None = None) -> None:
        self._base_dir = Path(base_dir) if base_dir else None
        self._log = log or logger

    @property
    def enabled(self) -> bool:
        return self._base_dir is not None

    def destination_for(self, file_name: str) -> Path:
        """Backup path for a file name. Only valid when enabled."""
        return self._base_dir / file_name

    def copy(self, src: Path, dst: Path) -> Path:
        """Copy src to dst, raising BackupCopyFailed on any I/O error."""
        try:
            return copy_file(src, dst)
        except OSError as e:
            raise BackupCopyFailed(f"{dst}: {e}") from e

    def backup(self, src: Path, dst: Path | None) -> BackupOutcome:
        """Copy src to dst. Failures are logged and returned, never raised."""
        if dst is None:
            self._log.info("base_dir not configured, file stored in the cloud only")
            return BackupOutcome.skipped()

        try:
            self.copy(src, dst)
        except BackupCopyFailed as e:
            self._log.warning(f"Local backup failed: {e}")
            return BackupOutcome.failed(str(e))

        self._log.info(f"Local backup succeeded: {dst}")
        return BackupOutcome.succeeded(dst)

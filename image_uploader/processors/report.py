"""Reporting of the final upload outcome."""

import logging
import sys
from typing import TextIO

from ..errors import UploadFailed, UploaderError
from ..models import BackupOutcome

logger = logging.getLogger(__name__)


class ResultReporter:
    """Writes the outcome to the log and the final URL to stdout.

    Calling scripts capture the last stdout line, so the URL is printed
    undecorated and after everything else.
    """

    def __init__(self, log: logging.Logger | None = None, stream: TextIO | None = None) -> None:
        self._log = log or logger
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        # Resolved per call so a redirected sys.stdout is honoured
        return self._stream if self._stream is not None else sys.stdout

    def diagnostic(self, message: str) -> None:
        """Informational stdout line, only valid before report()."""
        print(message, file=self.stream)

    def report(self, final_url: str, backup_outcome: BackupOutcome) -> None:
        self._log.info(
            f"Upload succeeded, file url: {final_url}; backup {backup_outcome.describe()}"
        )
        print(final_url, file=self.stream, flush=True)

    def report_failure(self, error: UploaderError) -> None:
        """Log a fatal error. Only provider errors count as a failed upload."""
        prefix = "Upload failed" if isinstance(error, UploadFailed) else "Failed"
        self._log.error(f"{prefix}: {error}")

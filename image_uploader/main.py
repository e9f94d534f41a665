#!/usr/bin/env python3
"""
Image Upload Script for cloud object storage

Uploads a single file under a date-partitioned key, optionally mirrors it
into a local backup directory, and prints the public URL as the last line
of output for calling scripts to capture.
"""

import argparse
import logging
import sys
from datetime import datetime
from pathlib import Path

from .config import (
    TOKEN_EXPIRY_SECS,
    Config,
    configure_logging,
    default_log_path,
    load_config,
)
from .errors import InvalidInputPath, UploaderError, UsageError
from .models import Credentials, UploadRequest
from .processors.backup import BackupCopier
from .processors.report import ResultReporter
from .services.storage import UploadClient, create_upload_client
from .utils.keys import build_object_key, build_public_url, file_base_name

logger = logging.getLogger(__name__)

USAGE = "usage: image-uploader <file-path>"


class ImageUploader:
    """Orchestrates a single upload."""

    def __init__(
        self,
        config: Config,
        client: UploadClient,
        log: logging.Logger | None = None,
        reporter: ResultReporter | None = None,
        token_ttl: int = TOKEN_EXPIRY_SECS,
    ) -> None:
        self._config = config
        self._client = client
        self._log = log or logger
        self._reporter = reporter or ResultReporter(self._log)
        self._backup = BackupCopier(config.base_dir, self._log)
        self._token_ttl = token_ttl

    def prepare(self, file_arg: str | Path, now: datetime | None = None) -> UploadRequest:
        """Validate the file argument and derive the object key and backup path."""
        source = Path(file_arg)
        if not source.is_file():
            raise InvalidInputPath(f"{str(file_arg)!r} is not a file")

        display_name = file_base_name(source)
        return UploadRequest(
            source=source,
            object_key=build_object_key(source, now),
            display_name=display_name,
            backup_path=(
                self._backup.destination_for(display_name) if self._backup.enabled else None
            ),
        )

    def run(self, file_arg: str | Path, now: datetime | None = None) -> str:
        """Upload the file and report the public URL.

        Returns the final URL. Raises InvalidInputPath or UploadFailed;
        backup failures are logged and never raised.
        """
        request = self.prepare(file_arg, now)
        self._reporter.diagnostic(f"dir:{request.object_key!r}")

        credentials = Credentials(self._config.access_key, self._config.secret_key)
        handle = self._client.sign_and_prepare(
            credentials, self._config.bucket_name, self._token_ttl
        )
        self._log.debug(f"Uploading {request.source} as {request.object_key}")
        result = self._client.upload(
            handle, request.source, request.object_key, request.display_name
        )
        final_url = build_public_url(self._config.base_url, result.key)

        # Backup runs before reporting so the URL stays the last stdout line
        outcome = self._backup.backup(request.source, request.backup_path)
        self._reporter.report(final_url, outcome)
        return final_url


def require_file_argument(file_arg: str | None) -> str:
    if file_arg is None:
        raise UsageError(USAGE)
    return file_arg


def parse_args(argv: list[str] | None = None) -> tuple[argparse.ArgumentParser, argparse.Namespace]:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="image-uploader",
        description="Upload a file to cloud object storage and print its public URL",
    )
    parser.add_argument(
        "file",
        nargs="?",
        help="Path of the local file to upload",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Config file (default: config.json beside the executable)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Verbose output",
    )
    return parser, parser.parse_args(argv)


def main(argv: list[str] | None = None) -> int:
    """Main entry point. Returns the process exit code."""
    parser, args = parse_args(argv)

    try:
        file_arg = require_file_argument(args.file)
    except UsageError as e:
        parser.print_usage(sys.stderr)
        print(f"Error: {e}", file=sys.stderr)
        return 2

    try:
        log = configure_logging(default_log_path(), verbose=args.verbose)
    except OSError as e:
        print(f"Error: Failed to initialize logging: {e}", file=sys.stderr)
        return 1

    reporter = ResultReporter(log)
    try:
        config = load_config(args.config)
        uploader = ImageUploader(config, create_upload_client(config), log, reporter)
        uploader.run(file_arg)
    except UploaderError as e:
        reporter.report_failure(e)
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())

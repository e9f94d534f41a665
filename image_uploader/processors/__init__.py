"""Processors for backup copies and outcome reporting."""

from .backup import BackupCopier, copy_file
from .report import ResultReporter

__all__ = ["BackupCopier", "ResultReporter", "copy_file"]

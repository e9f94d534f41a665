"""Exceptions raised by the image uploader."""


class UploaderError(Exception):
    """Base class for all uploader errors."""


class UsageError(UploaderError):
    """No file argument was supplied."""


class InvalidInputPath(UploaderError):
    """The file argument does not reference an existing regular file."""


class ConfigError(UploaderError):
    """Configuration could not be loaded."""


class ConfigReadError(ConfigError):
    """The configuration file is missing or unreadable."""


class ConfigParseError(ConfigError):
    """The configuration file is not valid JSON of the expected shape."""


class ConfigValidationError(ConfigError):
    """A configuration field failed validation."""


class UploadFailed(UploaderError):
    """The storage provider rejected or failed the upload."""


class BackupCopyFailed(UploaderError):
    """The local backup copy failed. Never fatal."""

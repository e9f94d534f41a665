"""Configuration management for the image uploader."""

import json
import logging
import os
import sys
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from .errors import ConfigParseError, ConfigReadError, ConfigValidationError


CONFIG_FILE = "config.json"
LOG_FILE = "log.log"
TOKEN_EXPIRY_SECS = 3600

# Environment overrides for the default file locations
CONFIG_ENV_VAR = "IMAGE_UPLOADER_CONFIG"
LOG_FILE_ENV_VAR = "IMAGE_UPLOADER_LOG_FILE"

SUPPORTED_PROVIDERS = {"qiniu", "s3"}

LOG_FORMAT = "[%(asctime)s] %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Required fields in validation order, with the label used in error messages
_REQUIRED_FIELDS = (
    ("access_key", "Access key"),
    ("secret_key", "Secret key"),
    ("bucket_name", "Bucket name"),
    ("base_url", "Base url"),
)
_OPTIONAL_FIELDS = ("base_dir", "provider", "endpoint", "region")


@dataclass(frozen=True)
class Config:
    """Uploader configuration, read once per invocation."""

    access_key: str
    secret_key: str
    bucket_name: str
    base_url: str
    base_dir: str | None = None
    provider: str = "qiniu"
    endpoint: str | None = None  # S3-compatible endpoint URL
    region: str | None = None

    @classmethod
    def from_dict(cls, data: dict) -> "Config":
        """Build a Config from parsed JSON, checking shape then values."""
        if not isinstance(data, dict):
            raise ConfigParseError("Configuration must be a JSON object")

        values = {}
        for name, _ in _REQUIRED_FIELDS:
            if name not in data:
                raise ConfigParseError(f"missing field `{name}`")
            values[name] = _expect_str(data, name)

        for name in _OPTIONAL_FIELDS:
            if data.get(name) is not None:
                values[name] = _expect_str(data, name)

        config = cls(**values)
        config.validate()
        return config

    def validate(self) -> None:
        """Validate the configuration."""
        for name, label in _REQUIRED_FIELDS:
            if not getattr(self, name):
                raise ConfigValidationError(f"{label} cannot be empty")

        if self.provider not in SUPPORTED_PROVIDERS:
            raise ConfigValidationError(
                f"Unsupported provider '{self.provider}'. "
                f"Supported providers: {', '.join(sorted(SUPPORTED_PROVIDERS))}"
            )


def _expect_str(data: dict, name: str) -> str:
    value = data[name]
    if not isinstance(value, str):
        raise ConfigParseError(
            f"invalid type for `{name}`: expected a string, got {type(value).__name__}"
        )
    return value


def executable_dir() -> Path:
    """Directory containing the running executable, not the working directory."""
    if getattr(sys, "frozen", False):
        return Path(sys.executable).resolve().parent
    return Path(sys.argv[0]).resolve().parent


def default_config_path() -> Path:
    """Location of config.json, honouring the environment override."""
    load_dotenv()
    override = os.getenv(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return executable_dir() / CONFIG_FILE


def default_log_path() -> Path:
    """Location of log.log, honouring the environment override."""
    load_dotenv()
    override = os.getenv(LOG_FILE_ENV_VAR)
    if override:
        return Path(override)
    return executable_dir() / LOG_FILE


def load_config(config_path: Path | None = None) -> Config:
    """Load and validate the configuration file.

    Args:
        config_path: Explicit config file. Defaults to config.json beside
            the running executable.

    Raises:
        ConfigReadError: The file is missing or cannot be read.
        ConfigParseError: The content is not JSON of the expected shape.
        ConfigValidationError: A required field is empty.
    """
    if config_path is None:
        config_path = default_config_path()

    try:
        raw = config_path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigReadError(f"cannot read {config_path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ConfigParseError(f"invalid JSON in {config_path}: {e}") from e

    return Config.from_dict(data)


def configure_logging(log_file: Path, verbose: bool = False) -> logging.Logger:
    """Build the application logger.

    Events are appended to log_file, one timestamped line each. Warnings
    (everything with verbose) are echoed to stderr; stdout is never used.
    """
    logger = logging.getLogger("image_uploader")
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    logger.propagate = False

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    file_handler = logging.FileHandler(log_file, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    return logger

"""Storage provider interface and provider selection."""

import logging
from pathlib import Path
from typing import Any, Protocol

from ..config import Config
from ..models import Credentials, UploadResult
from .qiniu_storage import QiniuUploadClient
from .s3_storage import S3UploadClient

logger = logging.getLogger(__name__)


class UploadClient(Protocol):
    """The capability the uploader needs from a storage provider.

    Signing, multipart transfer and any retrying stay inside the provider
    SDK. Implementations raise UploadFailed for every provider error.
    """

    def sign_and_prepare(
        self, credentials: Credentials, bucket: str, token_ttl: int
    ) -> Any:
        """Sign an upload credential valid for token_ttl seconds."""
        ...

    def upload(
        self, handle: Any, local_path: Path, object_key: str, display_name: str
    ) -> UploadResult:
        """Upload local_path under object_key using a prepared handle."""
        ...


def create_upload_client(config: Config) -> UploadClient:
    """Create the upload client for the configured provider."""
    if config.provider == "s3":
        logger.debug(f"Using S3-compatible provider (endpoint={config.endpoint})")
        return S3UploadClient(endpoint=config.endpoint, region=config.region)
    logger.debug("Using Qiniu provider")
    return QiniuUploadClient()

"""S3-compatible storage provider."""

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import boto3
import requests
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError
from tqdm import tqdm

from ..errors import UploadFailed
from ..models import Credentials, UploadResult
from ..utils.media import content_type_for

logger = logging.getLogger(__name__)

# Seconds to wait for the PUT request; the transfer itself is unbounded
CONNECT_TIMEOUT = 60
READ_TIMEOUT = 300


@dataclass(frozen=True)
class S3UploadHandle:
    """A credentialed S3 client plus the TTL for presigned URLs."""

    client: Any
    bucket: str
    token_ttl: int


class S3UploadClient:
    """Upload client for S3-compatible object storage.

    The upload credential is a presigned PUT URL valid for the token TTL;
    the file is streamed to it with requests.
    """

    def __init__(self, endpoint: str | None = None, region: str | None = None) -> None:
        self._endpoint = endpoint
        self._region = region

    def sign_and_prepare(
        self, credentials: Credentials, bucket: str, token_ttl: int
    ) -> S3UploadHandle:
        client_kwargs = {
            "config": BotoConfig(signature_version="s3v4"),
            "region_name": self._region or "us-east-1",
            "aws_access_key_id": credentials.access_key,
            "aws_secret_access_key": credentials.secret_key,
        }
        if self._endpoint:
            client_kwargs["endpoint_url"] = self._endpoint
        try:
            client = boto3.client("s3", **client_kwargs)
        except (BotoCoreError, ValueError) as e:
            raise UploadFailed(f"Failed to create S3 client: {e}") from e
        return S3UploadHandle(client=client, bucket=bucket, token_ttl=token_ttl)

    def upload(
        self,
        handle: S3UploadHandle,
        local_path: Path,
        object_key: str,
        display_name: str,
    ) -> UploadResult:
        content_type = content_type_for(display_name)

        try:
            url = handle.client.generate_presigned_url(
                "put_object",
                Params={
                    "Bucket": handle.bucket,
                    "Key": object_key,
                    "ContentType": content_type,
                },
                ExpiresIn=handle.token_ttl,
            )
        except (ClientError, BotoCoreError) as e:
            raise UploadFailed(f"Failed to sign upload for {object_key}: {e}") from e

        try:
            size = local_path.stat().st_size
            with open(local_path, "rb") as f:
                with tqdm.wrapattr(
                    f,
                    "read",
                    total=size,
                    desc=display_name,
                    unit="B",
                    unit_scale=True,
                    unit_divisor=1024,
                    disable=None,
                ) as body:
                    response = requests.put(
                        url,
                        data=body if size else b"",
                        headers={
                            "Content-Type": content_type,
                            "Content-Length": str(size),
                        },
                        timeout=(CONNECT_TIMEOUT, READ_TIMEOUT),
                    )
            response.raise_for_status()
        except requests.RequestException as e:
            raise UploadFailed(f"Failed to upload file: {e}") from e
        except OSError as e:
            raise UploadFailed(f"Failed to read {local_path}: {e}") from e

        logger.debug(f"S3 accepted {object_key} (etag={response.headers.get('ETag')})")
        return UploadResult(key=object_key)

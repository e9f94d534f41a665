"""Qiniu Kodo storage provider."""

import logging
from dataclasses import dataclass
from pathlib import Path

from qiniu import Auth, put_file
from tqdm import tqdm

from ..errors import UploadFailed
from ..models import Credentials, UploadResult
from ..utils.media import content_type_for

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QiniuUploadHandle:
    """A signed, bucket-scoped upload token."""

    token: str
    bucket: str


class QiniuUploadClient:
    """Upload client backed by the Qiniu SDK."""

    def sign_and_prepare(
        self, credentials: Credentials, bucket: str, token_ttl: int
    ) -> QiniuUploadHandle:
        auth = Auth(credentials.access_key, credentials.secret_key)
        # key=None scopes the token to the whole bucket
        token = auth.upload_token(bucket, None, token_ttl)
        return QiniuUploadHandle(token=token, bucket=bucket)

    def upload(
        self,
        handle: QiniuUploadHandle,
        local_path: Path,
        object_key: str,
        display_name: str,
    ) -> UploadResult:
        """Upload a file with put_file.

        Returns the key reported by Qiniu. Raises UploadFailed when the SDK
        raises or reports a non-OK response.
        """
        total = local_path.stat().st_size
        with tqdm(
            total=total,
            desc=display_name,
            unit="B",
            unit_scale=True,
            unit_divisor=1024,
            disable=None,
        ) as progress:

            def on_progress(uploaded: int, _total: int) -> None:
                progress.update(uploaded - progress.n)

            try:
                ret, info = put_file(
                    handle.token,
                    object_key,
                    str(local_path),
                    mime_type=content_type_for(display_name),
                    progress_handler=on_progress,
                )
            except Exception as e:
                raise UploadFailed(f"Failed to upload file: {e}") from e

        if ret is None or info is None or not info.ok():
            status = getattr(info, "status_code", None)
            error = getattr(info, "error", None)
            raise UploadFailed(f"Failed to upload file: status={status} error={error}")

        logger.debug(f"Qiniu accepted {object_key} (hash={ret.get('hash')})")
        return UploadResult(key=ret.get("key") or object_key)

"""Service modules for storage providers."""

from .qiniu_storage import QiniuUploadClient
from .s3_storage import S3UploadClient
from .storage import UploadClient, create_upload_client

__all__ = ["QiniuUploadClient", "S3UploadClient", "UploadClient", "create_upload_client"]

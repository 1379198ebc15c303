"""
Blob store for resume files.

Resume PDFs are kept in an S3-compatible bucket (AWS S3, MinIO, Supabase
storage's S3 endpoint) under ``<user_id>/<file_id>.pdf``. Clients never see
the storage path; they get short-lived presigned URLs instead.
"""

import logging
from functools import lru_cache
from io import BytesIO
from typing import Protocol

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from stash.config import settings

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the blob store rejects or fails an operation."""


class BlobStore(Protocol):
    def upload(self, path: str, data: bytes, content_type: str) -> None: ...

    def remove(self, paths: list[str]) -> None: ...

    def create_signed_url(self, path: str, expires_in: int) -> str: ...


class S3BlobStore:
    """S3-backed blob store using boto3."""

    def __init__(
        self,
        bucket: str,
        region: str = "us-east-1",
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
    ):
        self.bucket = bucket
        extra = {} if endpoint_url is None else {"endpoint_url": endpoint_url}
        self._client = boto3.client(
            "s3",
            region_name=region,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            **extra,
        )

    def upload(self, path: str, data: bytes, content_type: str) -> None:
        """Upload a new object. Existing objects are never overwritten."""
        try:
            self._client.head_object(Bucket=self.bucket, Key=path)
        except ClientError as e:
            if e.response.get("Error", {}).get("Code") not in ("404", "NoSuchKey", "NotFound"):
                raise StorageError(f"Failed to check {path}: {e}") from e
        else:
            raise StorageError(f"Object already exists: {path}")

        try:
            self._client.upload_fileobj(
                BytesIO(data),
                self.bucket,
                path,
                ExtraArgs={"ContentType": content_type},
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(str(e)) from e
        logger.info(f"Uploaded {len(data)} bytes to {self.bucket}/{path}")

    def remove(self, paths: list[str]) -> None:
        if not paths:
            return
        try:
            self._client.delete_objects(
                Bucket=self.bucket,
                Delete={"Objects": [{"Key": p} for p in paths], "Quiet": True},
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(str(e)) from e
        logger.info(f"Removed {len(paths)} object(s) from {self.bucket}")

    def create_signed_url(self, path: str, expires_in: int) -> str:
        """Presigned GET URL valid for ``expires_in`` seconds."""
        try:
            return self._client.generate_presigned_url(
                "get_object",
                Params={"Bucket": self.bucket, "Key": path},
                ExpiresIn=expires_in,
            )
        except (BotoCoreError, ClientError) as e:
            raise StorageError(str(e)) from e


@lru_cache
def get_blob_store() -> BlobStore:
    """FastAPI dependency returning the configured blob store."""
    return S3BlobStore(
        bucket=settings.s3_bucket,
        region=settings.s3_region,
        endpoint_url=settings.s3_endpoint_url,
        access_key=settings.aws_access_key_id,
        secret_key=settings.aws_secret_access_key,
    )

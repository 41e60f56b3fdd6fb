from __future__ import annotations
"""Object store driver for S3 compatible services."""
import io
import logging
from typing import Callable, Optional

import boto3
from botocore.client import Config
from botocore.exceptions import BotoCoreError, ClientError

from .backend import ObjectStoreBackend
from .errors import BackendIOError
from .models import ListingChunk, ObjectStatus
from .paths import PATH_SEPARATOR

LOGGER = logging.getLogger(__name__)

FOLDER_SUFFIX = "_$folder$"
NOT_FOUND_CODES = frozenset({"404", "NoSuchKey", "NotFound"})


class S3UploadStream(io.BytesIO):
    """In-memory buffer that uploads its content to S3 when closed."""

    def __init__(self, client, bucket_name: str, key: str):
        super().__init__()
        self._client = client
        self._bucket_name = bucket_name
        self._key = key

    def close(self) -> None:
        if self.closed:
            return
        try:
            self._client.put_object(Bucket=self._bucket_name, Key=self._key, Body=self.getvalue())
        except (ClientError, BotoCoreError) as exc:
            raise BackendIOError(f"Failed to upload {self._key}: {exc}") from exc
        finally:
            super().close()


class S3ObjectStore(ObjectStoreBackend):
    """Implements the object store primitives on top of a boto3 S3 client."""

    def __init__(
        self,
        bucket_name: str,
        *,
        endpoint_url: str | None = None,
        access_key: str | None = None,
        secret_key: str | None = None,
        client=None,
        client_factory: Callable[..., object] | None = None,
        folder_suffix: str = FOLDER_SUFFIX,
    ):
        if not bucket_name:
            raise ValueError("bucket_name must not be empty")
        self._bucket_name = bucket_name
        self._folder_suffix = folder_suffix
        self._client_factory = client_factory or boto3.client
        self._client = client or self._create_client(endpoint_url, access_key, secret_key)

    @property
    def bucket_name(self) -> str:
        return self._bucket_name

    @property
    def root_key(self) -> str:
        return f"s3://{self._bucket_name}"

    @property
    def folder_suffix(self) -> str:
        return self._folder_suffix

    def _create_client(self, endpoint_url: str | None, access_key: str | None, secret_key: str | None):
        config = Config(signature_version="s3v4")
        return self._client_factory(
            "s3",
            endpoint_url=endpoint_url,
            aws_access_key_id=access_key,
            aws_secret_access_key=secret_key,
            config=config,
        )

    def create_empty_object(self, key: str) -> bool:
        try:
            self._client.put_object(Bucket=self._bucket_name, Key=key, Body=b"", ContentLength=0)
        except (ClientError, BotoCoreError) as exc:
            LOGGER.error("Failed to create object %s: %s", key, exc)
            return False
        return True

    def create_object(self, key: str) -> S3UploadStream:
        return S3UploadStream(self._client, self._bucket_name, key)

    def copy_object(self, src_key: str, dst_key: str) -> bool:
        try:
            self._client.copy_object(
                Bucket=self._bucket_name,
                Key=dst_key,
                CopySource={"Bucket": self._bucket_name, "Key": src_key},
            )
        except (ClientError, BotoCoreError) as exc:
            LOGGER.error("Failed to copy %s to %s: %s", src_key, dst_key, exc)
            return False
        return True

    def delete_object(self, key: str) -> bool:
        try:
            self._client.delete_object(Bucket=self._bucket_name, Key=key)
        except (ClientError, BotoCoreError) as exc:
            LOGGER.error("Failed to delete %s: %s", key, exc)
            return False
        return True

    def get_object_status(self, key: str) -> Optional[ObjectStatus]:
        try:
            response = self._client.head_object(Bucket=self._bucket_name, Key=key)
        except ClientError as exc:
            if _error_code(exc) not in NOT_FOUND_CODES:
                LOGGER.warning("Failed to fetch metadata for %s: %s", key, exc)
            return None
        except BotoCoreError as exc:
            LOGGER.warning("Failed to fetch metadata for %s: %s", key, exc)
            return None
        last_modified = response.get("LastModified")
        return ObjectStatus(
            size_bytes=int(response.get("ContentLength") or 0),
            last_modified_ms=int(last_modified.timestamp() * 1000) if last_modified else 0,
        )

    def get_object_listing(
        self, prefix: str, recursive: bool, *, page_size: int
    ) -> Optional[ListingChunk]:
        return self._fetch_chunk(prefix, recursive, page_size, continuation_token=None)

    def _fetch_chunk(
        self,
        prefix: str,
        recursive: bool,
        page_size: int,
        continuation_token: str | None,
    ) -> ListingChunk:
        list_params = {"Bucket": self._bucket_name, "MaxKeys": page_size}
        if prefix:
            list_params["Prefix"] = prefix
        if not recursive:
            list_params["Delimiter"] = PATH_SEPARATOR
        if continuation_token:
            list_params["ContinuationToken"] = continuation_token

        try:
            response = self._client.list_objects_v2(**list_params)
        except (ClientError, BotoCoreError) as exc:
            raise BackendIOError(f"Failed to list {prefix!r} in {self._bucket_name}: {exc}") from exc

        keys = [obj["Key"] for obj in response.get("Contents", [])]
        prefixes = [common["Prefix"] for common in response.get("CommonPrefixes", [])]
        next_token = response.get("NextContinuationToken")
        fetch_next = None
        if response.get("IsTruncated", False) and next_token:
            def fetch_next() -> ListingChunk:
                return self._fetch_chunk(prefix, recursive, page_size, next_token)

        return ListingChunk(object_names=keys, common_prefixes=prefixes, fetch_next=fetch_next)


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))

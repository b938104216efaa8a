"""Synchronization of a local directory with the objects of an S3 bucket.

Files are compared by content: the MD5 of the local file against the object's ETag.
Objects uploaded in several parts have a composite ETag that never matches; they are
uploaded again as a single part and match on every following run.

File operations run concurrently, bounded by ``max_workers``. A sync only returns
once every operation has settled; failures are raised after that, so a partially
applied sync never reports success and the next run converges.
"""

import asyncio
import hashlib
import logging
import mimetypes
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from itertools import batched
from pathlib import Path
from typing import Any, final

from botocore.exceptions import BotoCoreError, ClientError

from sitelift.aws.session import DEFAULT_CONCURRENCY
from sitelift.exceptions import ConfigurationError, OperationError

logger = logging.getLogger(__name__)

# DeleteObjects accepts at most 1000 keys per request
DELETE_BATCH_SIZE = 1000
DEFAULT_CONTENT_TYPE = "application/octet-stream"
HASH_CHUNK_SIZE = 1024 * 1024


@final
@dataclass(frozen=True)
class SyncResult:
    uploaded: tuple[str, ...] = ()
    deleted: tuple[str, ...] = ()

    @property
    def file_change_count(self) -> int:
        return len(self.uploaded) + len(self.deleted)

    @property
    def has_changes(self) -> bool:
        return self.file_change_count > 0


def local_files(directory: Path) -> dict[str, Path]:
    """Map S3 keys to the files found recursively in directory."""
    if not directory.is_dir():
        raise ConfigurationError(f"The directory '{directory}' does not exist.")
    return {
        file_path.relative_to(directory).as_posix(): file_path
        for file_path in sorted(directory.rglob("*"))
        if file_path.is_file()
    }


def file_etag(file_path: Path) -> str:
    md5 = hashlib.md5(usedforsecurity=False)
    with file_path.open("rb") as f:
        for chunk in iter(lambda: f.read(HASH_CHUNK_SIZE), b""):
            md5.update(chunk)
    return md5.hexdigest()


def content_type(file_path: Path) -> str:
    mimetype, _ = mimetypes.guess_type(file_path.name)
    return mimetype or DEFAULT_CONTENT_TYPE


def changed_files(local: dict[str, Path], remote: dict[str, str]) -> list[str]:
    return [key for key, file_path in local.items() if remote.get(key) != file_etag(file_path)]


async def _run_limited(semaphore: asyncio.Semaphore, func: Callable[..., Any], *args: Any) -> Any:  # noqa: ANN401
    async with semaphore:
        return await asyncio.to_thread(func, *args)


def _raise_failures(results: Iterable[object]) -> None:
    failures = [r for r in results if isinstance(r, BaseException)]
    if not failures:
        return
    for failure in failures:
        logger.error("%s", failure)
    if len(failures) > 1:
        logger.error("%d file operations failed", len(failures))
    raise failures[0]


class S3Sync:
    def __init__(self, s3_client, max_workers: int = DEFAULT_CONCURRENCY):  # noqa: ANN001
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self._s3 = s3_client
        self._max_workers = max_workers

    async def sync(self, local_path: str | Path, bucket_name: str) -> SyncResult:
        """Upload new and modified files, delete objects that no longer exist locally."""
        directory = Path(local_path)
        local = await asyncio.to_thread(local_files, directory)
        remote = await asyncio.to_thread(self._list_objects, bucket_name)

        to_upload = await asyncio.to_thread(changed_files, local, remote)
        to_delete = [key for key in remote if key not in local]
        logger.info(
            "Syncing '%s' to bucket '%s': %d to upload, %d to delete, %d unchanged",
            directory,
            bucket_name,
            len(to_upload),
            len(to_delete),
            len(local) - len(to_upload),
        )

        semaphore = asyncio.Semaphore(self._max_workers)
        results = await asyncio.gather(
            *(
                _run_limited(semaphore, self._upload, bucket_name, key, local[key])
                for key in to_upload
            ),
            *(
                _run_limited(semaphore, self._delete, bucket_name, list(keys))
                for keys in batched(to_delete, DELETE_BATCH_SIZE)
            ),
            return_exceptions=True,
        )
        _raise_failures(results)

        return SyncResult(uploaded=tuple(to_upload), deleted=tuple(to_delete))

    async def empty_bucket(self, bucket_name: str) -> int:
        """Delete every object of the bucket. Returns the number of deleted objects."""
        keys = list(await asyncio.to_thread(self._list_objects, bucket_name))
        logger.info("Deleting %d objects from bucket '%s'", len(keys), bucket_name)

        semaphore = asyncio.Semaphore(self._max_workers)
        results = await asyncio.gather(
            *(
                _run_limited(semaphore, self._delete, bucket_name, list(batch))
                for batch in batched(keys, DELETE_BATCH_SIZE)
            ),
            return_exceptions=True,
        )
        _raise_failures(results)
        return len(keys)

    def _list_objects(self, bucket_name: str) -> dict[str, str]:
        """Map every key of the bucket to its ETag (without quotes)."""
        objects = {}
        paginator = self._s3.get_paginator("list_objects_v2")
        try:
            for page in paginator.paginate(Bucket=bucket_name):
                for obj in page.get("Contents", []):
                    objects[obj["Key"]] = obj["ETag"].strip('"')
        except (BotoCoreError, ClientError) as e:
            raise OperationError("list objects of bucket", bucket_name, str(e)) from e
        return objects

    def _upload(self, bucket_name: str, key: str, file_path: Path) -> None:
        logger.debug("Uploading '%s'", key)
        try:
            with file_path.open("rb") as body:
                self._s3.put_object(
                    Bucket=bucket_name,
                    Key=key,
                    Body=body,
                    ContentType=content_type(file_path),
                )
        except (BotoCoreError, ClientError, OSError) as e:
            raise OperationError("upload", key, str(e)) from e

    def _delete(self, bucket_name: str, keys: list[str]) -> None:
        logger.debug("Deleting %s", keys)
        target = keys[0] if len(keys) == 1 else f"{keys[0]} (+{len(keys) - 1} more)"
        try:
            response = self._s3.delete_objects(
                Bucket=bucket_name,
                Delete={"Objects": [{"Key": key} for key in keys], "Quiet": True},
            )
        except (BotoCoreError, ClientError) as e:
            raise OperationError("delete", target, str(e)) from e

        errors = response.get("Errors", [])
        if errors:
            error = errors[0]
            raise OperationError(
                "delete", error["Key"], f"{error.get('Code')}: {error.get('Message')}"
            )

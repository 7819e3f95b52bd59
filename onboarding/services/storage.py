"""Object storage for vendor photos.

Buckets are directories under a configured root. A bucket that does not
exist is a deployment defect and is reported as ``NOT_CONFIGURED``; buckets
are never created on demand. Uploads never overwrite an existing object.
"""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path

from onboarding.core.exceptions import StorageError, StorageErrorKind

logger = logging.getLogger(__name__)

VERIFIED_PHOTOS_BUCKET = "verified-photos"
BUSINESS_PHOTOS_BUCKET = "business-photos"


def object_path(owner_id: str, filename: str, now_ms: int | None = None) -> str:
    """``<owner_id>/<epoch_ms>.<ext>``; the extension is taken from the original filename."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{owner_id}/{now_ms}.{ext}"


class LocalObjectStorage:
    def __init__(self, root: str | Path, max_object_bytes: int):
        self._root = Path(root)
        self._max_object_bytes = max_object_bytes

    def bucket_exists(self, bucket: str) -> bool:
        return (self._root / bucket).is_dir()

    async def upload(self, bucket: str, path: str, data: bytes) -> str:
        """Store *data* at *path* inside *bucket* and return the stored path."""
        return await asyncio.to_thread(self._write, bucket, path, data)

    def _write(self, bucket: str, path: str, data: bytes) -> str:
        bucket_dir = self._root / bucket
        if not bucket_dir.is_dir():
            raise StorageError(StorageErrorKind.NOT_CONFIGURED, f"Bucket not found: {bucket}")

        if len(data) > self._max_object_bytes:
            raise StorageError(
                StorageErrorKind.PAYLOAD_TOO_LARGE,
                "The object exceeded the maximum allowed size",
            )

        target = (bucket_dir / path).resolve()
        if bucket_dir.resolve() not in target.parents:
            raise StorageError(StorageErrorKind.POLICY_DENIED, f"Path '{path}' is outside the bucket")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("xb") as fh:
                fh.write(data)
        except FileExistsError as exc:
            raise StorageError(StorageErrorKind.CONFLICT, "The resource already exists") from exc
        except PermissionError as exc:
            raise StorageError(StorageErrorKind.POLICY_DENIED, str(exc)) from exc
        except OSError as exc:
            raise StorageError(StorageErrorKind.UNKNOWN, str(exc)) from exc

        logger.info("Stored %s/%s (%d bytes)", bucket, path, len(data))
        return path

    async def remove(self, bucket: str, path: str) -> None:
        """Delete an object; a missing object is not an error."""
        await asyncio.to_thread(self._unlink, bucket, path)

    def _unlink(self, bucket: str, path: str) -> None:
        bucket_dir = self._root / bucket
        target = (bucket_dir / path).resolve()
        if bucket_dir.resolve() not in target.parents:
            raise StorageError(StorageErrorKind.POLICY_DENIED, f"Path '{path}' is outside the bucket")
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(StorageErrorKind.UNKNOWN, str(exc)) from exc
        logger.info("Removed %s/%s", bucket, path)

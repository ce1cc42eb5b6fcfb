"""Object storage: bucket/path blobs on local disk, served under public URLs."""
import logging
from datetime import date
from pathlib import Path, PurePosixPath
from typing import Optional

import aiofiles

from src.core.errors import StorageError

logger = logging.getLogger(__name__)

AVATARS_BUCKET = "avatars"
COMPANY_ASSETS_BUCKET = "company-assets"


class ObjectStorage:
    """Stores uploads under ``root/<bucket>/<path>``.

    Public URLs mirror the hosted-storage layout so clients can keep
    building links the same way: ``{base_url}/storage/v1/object/public/{bucket}/{path}``.
    """

    def __init__(self, root: Path, base_url: str):
        self._root = Path(root)
        self._base_url = base_url.rstrip("/")

    @property
    def root(self) -> Path:
        return self._root

    def _resolve(self, bucket: str, path: str) -> Path:
        clean = PurePosixPath(path)
        if not bucket or "/" in bucket or bucket in (".", ".."):
            raise StorageError(f"Invalid bucket name: {bucket!r}")
        if clean.is_absolute() or ".." in clean.parts or not clean.parts:
            raise StorageError(f"Invalid object path: {path!r}")
        return self._root / bucket / Path(*clean.parts)

    async def upload(self, bucket: str, path: str, data: bytes, upsert: bool = True) -> dict:
        """Write an object. With ``upsert=False`` an existing object is an error."""
        target = self._resolve(bucket, path)
        if target.exists() and not upsert:
            raise StorageError(f"Object already exists: {bucket}/{path}")

        target.parent.mkdir(parents=True, exist_ok=True)
        async with aiofiles.open(target, "wb") as out_file:
            await out_file.write(data)

        logger.info(f"Stored {len(data)} bytes at {bucket}/{path}")
        return {"bucket": bucket, "path": path, "size": len(data)}

    async def download(self, bucket: str, path: str) -> bytes:
        target = self._resolve(bucket, path)
        if not target.exists():
            raise StorageError(f"Object not found: {bucket}/{path}")
        async with aiofiles.open(target, "rb") as in_file:
            return await in_file.read()

    def public_url(self, bucket: str, path: str) -> str:
        self._resolve(bucket, path)
        return f"{self._base_url}/storage/v1/object/public/{bucket}/{path}"


def avatar_path(user_id: str, filename: str) -> str:
    ext = filename.rsplit(".", 1)[-1].lower() if "." in filename else "bin"
    return f"{user_id}/{user_id}.{ext}"


def company_logo_path(company_id: int, filename: str) -> str:
    return f"company-logos/{company_id}-{Path(filename).name}"


def company_document_path(
    company_id: int,
    filename: str,
    document_type: str = "regulatory",
    today: Optional[date] = None,
) -> str:
    stamp = (today or date.today()).isoformat()
    return f"{document_type}/{company_id}/{stamp}-{Path(filename).name}"

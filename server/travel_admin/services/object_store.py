"""Remote object store access: uploads, public-id extraction and batch deletion."""

import asyncio
import logging
import os
import re
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Iterable, Optional, Protocol, Sequence

import cloudinary
import cloudinary.uploader
from fastapi import UploadFile

from ..core.config import settings
from ..core.exceptions import UpstreamServiceError, ValidationError
from ..core.observability import metrics_collector

logger = logging.getLogger(__name__)

ALLOWED_FORMATS = ("jpg", "jpeg", "png", "webp")

# Folder-qualified id between "/upload/" (plus optional version) and the extension
_PUBLIC_ID_PATTERN = re.compile(r"/upload/(?:v\d+/)?(.+)\.\w+$")


@dataclass(frozen=True)
class StoredAsset:
    """An asset accepted by the object store."""

    url: str
    public_id: str


class ObjectStore(Protocol):
    """Minimal surface of the remote asset host."""

    async def upload(self, content: bytes, filename: str, folder: str) -> StoredAsset:
        ...

    async def destroy(self, public_id: str) -> None:
        ...


class CloudinaryObjectStore:
    """ObjectStore backed by the Cloudinary SDK; blocking calls run in a worker thread."""

    def __init__(self, cloud_name: str, api_key: str, api_secret: str):
        self._config = {
            "cloud_name": cloud_name,
            "api_key": api_key,
            "api_secret": api_secret,
            "secure": True,
        }
        cloudinary.config(**self._config)

    async def upload(self, content: bytes, filename: str, folder: str) -> StoredAsset:
        result = await asyncio.to_thread(
            cloudinary.uploader.upload,
            content,
            folder=folder,
            resource_type="image",
            allowed_formats=list(ALLOWED_FORMATS),
            filename_override=filename,
        )
        return StoredAsset(url=result["secure_url"], public_id=result["public_id"])

    async def destroy(self, public_id: str) -> None:
        result = await asyncio.to_thread(cloudinary.uploader.destroy, public_id, invalidate=True)
        # "not found" means already gone, which is fine
        if result.get("result") not in ("ok", "not found"):
            raise RuntimeError(f"Cloudinary refused to delete {public_id}: {result}")


@lru_cache
def get_object_store() -> ObjectStore:
    """FastAPI dependency returning the process-wide object store client."""
    return CloudinaryObjectStore(
        cloud_name=settings.cloudinary_cloud_name,
        api_key=settings.cloudinary_api_key,
        api_secret=settings.cloudinary_api_secret,
    )


def extract_public_id(url: Optional[str]) -> Optional[str]:
    """
    Recover the store identifier from an asset URL.

    ``https://res.cloudinary.com/x/image/upload/v123/hotels/abc.jpg?x=1``
    yields ``hotels/abc``. Returns None for anything not shaped like that.
    """
    if not url or not isinstance(url, str):
        return None
    match = _PUBLIC_ID_PATTERN.search(url.split("?", 1)[0])
    return match.group(1) if match else None


def folder_for(kind: str) -> str:
    """Folder holding every asset of one entity kind."""
    root = settings.asset_root_folder.strip("/")
    return f"{root}/{kind}" if root else kind


def _check_format(upload: UploadFile) -> None:
    extension = os.path.splitext(upload.filename or "")[1].lstrip(".").lower()
    if extension not in ALLOWED_FORMATS:
        raise ValidationError(
            detail=f"File '{upload.filename}' must be one of: {', '.join(ALLOWED_FORMATS)}"
        )


async def upload_files(store: ObjectStore, files: Sequence[UploadFile], kind: str) -> list[str]:
    """
    Store every file under the kind's folder and return their URLs in input order.

    Raises:
        ValidationError: If a file is not an allowed image format
        UpstreamServiceError: If the object store rejects an upload; assets
            already stored by this call are removed again first
    """
    if not files:
        return []
    for upload in files:
        _check_format(upload)

    folder = folder_for(kind)

    async def _store(upload: UploadFile) -> StoredAsset:
        content = await upload.read()
        return await store.upload(content, upload.filename or "upload", folder)

    results = await asyncio.gather(*(_store(f) for f in files), return_exceptions=True)
    failures = [r for r in results if isinstance(r, BaseException)]
    stored = [r for r in results if isinstance(r, StoredAsset)]

    if failures:
        logger.error(
            "Asset upload failed",
            extra={"kind": kind, "failed": len(failures), "stored": len(stored), "error": str(failures[0])},
        )
        await delete_assets(store, (asset.url for asset in stored))
        raise UpstreamServiceError(service="object store", detail="Image upload failed")

    metrics_collector.record_uploads(kind, len(stored))
    return [asset.url for asset in stored]


@dataclass
class DeletionReport:
    """Per-asset outcome of one batch of remote deletions."""

    deleted: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    # URLs whose public id could not be recovered; nothing was sent for them
    skipped: list[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failed


async def delete_assets(store: ObjectStore, urls: Iterable[Optional[str]]) -> DeletionReport:
    """
    Delete every referenced asset, concurrently and independently.

    A failure on one asset never stops the others and is never raised; it is
    logged and listed in the report.
    """
    report = DeletionReport()
    public_ids: list[str] = []
    for url in urls:
        if not url:
            continue
        public_id = extract_public_id(url)
        if public_id is None:
            report.skipped.append(url)
        elif public_id not in public_ids:
            public_ids.append(public_id)

    if not public_ids:
        return report

    results = await asyncio.gather(
        *(store.destroy(public_id) for public_id in public_ids),
        return_exceptions=True,
    )
    for public_id, result in zip(public_ids, results):
        if isinstance(result, BaseException):
            report.failed.append(public_id)
            logger.warning(
                "Remote asset deletion failed",
                extra={"public_id": public_id, "error": str(result)},
            )
        else:
            report.deleted.append(public_id)

    metrics_collector.record_deletions(len(public_ids), len(report.failed))
    return report


def limit_uploads(files: Optional[Sequence[UploadFile]], field_name: str, max_count: int) -> list[UploadFile]:
    """
    Normalise an optional multipart file field and enforce its count limit.

    Raises:
        ValidationError: If more than ``max_count`` files were sent
    """
    files = [f for f in (files or []) if f is not None and f.filename]
    if len(files) > max_count:
        raise ValidationError(detail=f"At most {max_count} file(s) allowed for '{field_name}'")
    return files

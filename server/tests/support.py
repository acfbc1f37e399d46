"""Test doubles and builders shared by the test modules."""

import io
import itertools

from fastapi import UploadFile

from travel_admin.services.object_store import StoredAsset


class RecordingObjectStore:
    """In-memory object store that records every call."""

    def __init__(self):
        self._counter = itertools.count(1)
        self.uploads: list[StoredAsset] = []
        self.destroyed: list[str] = []
        self.fail_destroy: set[str] = set()
        self.fail_upload = False
        self.fail_filenames: set[str] = set()

    async def upload(self, content: bytes, filename: str, folder: str) -> StoredAsset:
        if self.fail_upload or filename in self.fail_filenames:
            raise RuntimeError("upload rejected")
        n = next(self._counter)
        public_id = f"{folder}/asset{n}"
        asset = StoredAsset(
            url=f"https://res.cloudinary.com/demo/image/upload/v1700000000/{public_id}.jpg",
            public_id=public_id,
        )
        self.uploads.append(asset)
        return asset

    async def destroy(self, public_id: str) -> None:
        if public_id in self.fail_destroy:
            raise RuntimeError(f"cannot delete {public_id}")
        self.destroyed.append(public_id)


def asset_url(public_id: str) -> str:
    """URL shaped like the ones the object store hands out."""
    return f"https://res.cloudinary.com/demo/image/upload/v1/{public_id}.jpg"


def make_upload(filename: str = "photo.jpg", content: bytes = b"\xff\xd8\xff") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=filename)

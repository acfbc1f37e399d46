"""Shared read/write plumbing for document-shaped entities."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Generic, Mapping, Optional, Sequence, Type, TypeVar
from uuid import UUID

from fastapi import UploadFile
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import Base
from ..core.exceptions import NotFoundError, UpstreamServiceError, ValidationError
from .object_store import DeletionReport, ObjectStore, delete_assets, upload_files

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=Base)


def parse_document_id(raw_id: str | UUID, resource_type: str) -> UUID:
    """Turn a path id into a UUID; anything unparseable cannot match a record."""
    if isinstance(raw_id, UUID):
        return raw_id
    try:
        return UUID(str(raw_id))
    except ValueError:
        raise NotFoundError(resource_type=resource_type, resource_id=str(raw_id))


def require_fields(values: Mapping[str, Any], required: Sequence[str], labels: Mapping[str, str]) -> None:
    """
    Raise ValidationError naming every required field that is missing.

    Args:
        values: Parsed column values
        required: Column names that must be present and non-empty
        labels: Column name -> name the client knows the field by
    """
    missing = [labels.get(name, name) for name in required if values.get(name) in (None, "", [], {})]
    if missing:
        raise ValidationError(
            detail=f"Missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )


class DocumentService(ABC, Generic[ModelT]):
    """Base for entity services: lookups, commits and asset cleanup."""

    model: Type[ModelT]
    resource_type: str
    # Object-store folder for this entity's images
    asset_kind: str

    def __init__(self, db: AsyncSession, store: Optional[ObjectStore] = None):
        self.db = db
        self.store = store

    async def list_all(self) -> list[ModelT]:
        stmt = select(self.model).order_by(self.model.created_at)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

    async def get_by_id(self, document_id: str | UUID) -> Optional[ModelT]:
        key = parse_document_id(document_id, self.resource_type)
        return await self.db.get(self.model, key)

    async def get_by_id_or_raise(self, document_id: str | UUID) -> ModelT:
        """
        Get a document by ID or raise NotFoundError.

        Raises:
            NotFoundError: If no document has this ID
        """
        document = await self.get_by_id(document_id)
        if document is None:
            logger.warning(
                f"{self.resource_type.capitalize()} not found",
                extra={"resource_id": str(document_id)},
            )
            raise NotFoundError(resource_type=self.resource_type, resource_id=str(document_id))
        return document

    async def _save(self, document: ModelT) -> ModelT:
        try:
            self.db.add(document)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Failed to save {self.resource_type}",
                extra={"error": str(e)},
            )
            raise UpstreamServiceError(service="database", detail=f"Failed to save {self.resource_type}")
        await self.db.refresh(document)
        return document

    async def _remove(self, document: ModelT) -> None:
        try:
            await self.db.delete(document)
            await self.db.commit()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error(
                f"Failed to delete {self.resource_type}",
                extra={"resource_id": str(document.id), "error": str(e)},
            )
            raise UpstreamServiceError(service="database", detail=f"Failed to delete {self.resource_type}")

    async def _upload(self, files: Sequence[UploadFile], uploaded: list[str]) -> list[str]:
        """Store one upload batch, recording its URLs in ``uploaded`` for ``_discard_uploads``."""
        urls = await upload_files(self.store, files, self.asset_kind)
        uploaded.extend(urls)
        return urls

    async def _discard_uploads(self, uploaded: Sequence[str]) -> None:
        """Remove every asset stored by a create or update that then failed."""
        if not uploaded:
            return
        logger.warning(
            f"Discarding assets uploaded for failed {self.resource_type} write",
            extra={"resource_type": self.resource_type, "urls": list(uploaded)},
        )
        await delete_assets(self.store, uploaded)

    async def _release_assets(self, urls: Sequence[Optional[str]], document_id: UUID) -> DeletionReport:
        """Run the fail-open deletion batch for assets no longer referenced."""
        report = await delete_assets(self.store, urls)
        if report.failed:
            logger.warning(
                "Some assets could not be removed from the object store",
                extra={
                    "resource_type": self.resource_type,
                    "resource_id": str(document_id),
                    "failed": report.failed,
                },
            )
        return report

    async def delete(self, document_id: str | UUID) -> DeletionReport:
        """
        Delete a document and every asset it references.

        Remote deletions run first and never block removal of the record;
        their per-asset outcome is returned.
        """
        document = await self.get_by_id_or_raise(document_id)
        report = await self._release_assets(self.image_urls(document), document.id)
        await self._remove(document)

        logger.info(
            f"{self.resource_type.capitalize()} deleted",
            extra={
                "resource_id": str(document.id),
                "deleted_assets": len(report.deleted),
                "failed_assets": len(report.failed),
                "skipped_assets": len(report.skipped),
            },
        )
        return report

    @abstractmethod
    def image_urls(self, document: ModelT) -> list[Optional[str]]:
        """Every image URL across all of the document's image sets."""

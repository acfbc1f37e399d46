"""Visa service: CRUD with one optional image."""

import logging
from typing import Optional, Sequence

from fastapi import UploadFile

from ..models.visa import Visa
from ..schemas.visa import VisaForm
from .documents import DocumentService, require_fields
from .image_sets import first_or_none, reconcile, single_slot_retained

logger = logging.getLogger(__name__)

IMAGE_CAPACITY = 1


class VisaService(DocumentService[Visa]):
    """Service for visa operations."""

    model = Visa
    resource_type = "visa"
    asset_kind = "visas"

    async def create(self, form: VisaForm, image: Sequence[UploadFile] = ()) -> Visa:
        """
        Create a visa.

        Without an upload, a declared ``existingImage`` URL is stored as given.

        Raises:
            ValidationError: If the name is missing or the upload is not an image
        """
        values = form.values()
        require_fields(values, ["name"], {"name": "name"})

        uploaded: list[str] = []
        try:
            new_urls = await self._upload(image, uploaded)
            slot = reconcile(
                [],
                single_slot_retained(None, form.existing_image, bool(new_urls)),
                new_urls,
                IMAGE_CAPACITY,
            )

            visa = await self._save(Visa(**values, image=first_or_none(slot.images)))
        except Exception:
            await self._discard_uploads(uploaded)
            raise
        logger.info("Visa created successfully", extra={"visa_id": str(visa.id), "visa_name": visa.name})
        return visa

    async def update(self, visa_id: str, form: VisaForm, image: Sequence[UploadFile] = ()) -> Visa:
        """
        Update a visa; a new upload replaces the stored image, which is then deleted.

        Raises:
            NotFoundError: If the visa does not exist
        """
        visa = await self.get_by_id_or_raise(visa_id)
        values = form.values()
        if "name" in values:
            require_fields(values, ["name"], {"name": "name"})

        uploaded: list[str] = []
        try:
            new_urls = await self._upload(image, uploaded)
            stored = [visa.image] if visa.image else []
            slot = reconcile(
                stored,
                single_slot_retained(visa.image, form.existing_image, bool(new_urls)),
                new_urls,
                IMAGE_CAPACITY,
            )

            for column, value in values.items():
                setattr(visa, column, value)
            visa.image = first_or_none(slot.images)
            visa = await self._save(visa)
        except Exception:
            await self._discard_uploads(uploaded)
            raise

        await self._release_assets(slot.orphaned, visa.id)

        logger.info("Visa updated successfully", extra={"visa_id": str(visa.id), "fields": sorted(values)})
        return visa

    def image_urls(self, visa: Visa) -> list[Optional[str]]:
        return [visa.image]

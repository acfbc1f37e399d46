"""Hotel service: CRUD with a single bounded gallery."""

import logging
from typing import Optional, Sequence

from fastapi import UploadFile

from ..models.hotel import Hotel
from ..schemas.hotel import HotelForm
from .documents import DocumentService, require_fields
from .image_sets import reconcile

logger = logging.getLogger(__name__)

GALLERY_CAPACITY = 10


class HotelService(DocumentService[Hotel]):
    """Service for hotel operations."""

    model = Hotel
    resource_type = "hotel"
    asset_kind = "hotels"

    async def create(self, form: HotelForm, images: Sequence[UploadFile] = ()) -> Hotel:
        """
        Create a hotel whose gallery is the uploaded images.

        Raises:
            ValidationError: If the title is missing or an upload is not an image
        """
        values = form.values()
        require_fields(values, ["title"], {"title": "title"})

        uploaded: list[str] = []
        try:
            new_urls = await self._upload(images, uploaded)
            gallery = reconcile([], [], new_urls, GALLERY_CAPACITY)
            if gallery.dropped:
                logger.warning("Hotel images over capacity left unreferenced", extra={"urls": gallery.dropped})

            hotel = await self._save(Hotel(**values, images=gallery.images))
        except Exception:
            await self._discard_uploads(uploaded)
            raise
        logger.info(
            "Hotel created successfully",
            extra={"hotel_id": str(hotel.id), "title": hotel.title, "images": len(hotel.images)},
        )
        return hotel

    async def update(self, hotel_id: str, form: HotelForm, images: Sequence[UploadFile] = ()) -> Hotel:
        """
        Update the fields the client sent and reconcile the gallery.

        ``existingImages`` lists the stored images to keep, in display order;
        new uploads follow them. When it is absent every stored image is kept.

        Raises:
            NotFoundError: If the hotel does not exist
        """
        hotel = await self.get_by_id_or_raise(hotel_id)
        values = form.values()

        uploaded: list[str] = []
        try:
            new_urls = await self._upload(images, uploaded)
            stored = list(hotel.images or [])
            retained = stored if form.existing_images is None else form.existing_images
            gallery = reconcile(stored, retained, new_urls, GALLERY_CAPACITY)
            if gallery.dropped:
                logger.warning("Hotel images over capacity left unreferenced", extra={"urls": gallery.dropped})

            for column, value in values.items():
                setattr(hotel, column, value)
            hotel.images = gallery.images
            hotel = await self._save(hotel)
        except Exception:
            await self._discard_uploads(uploaded)
            raise

        await self._release_assets(gallery.orphaned, hotel.id)

        logger.info(
            "Hotel updated successfully",
            extra={"hotel_id": str(hotel.id), "fields": sorted(values), "orphaned": len(gallery.orphaned)},
        )
        return hotel

    def image_urls(self, hotel: Hotel) -> list[Optional[str]]:
        return list(hotel.images or [])

"""Package service: CRUD with thumbnail, gallery and per-activity image sets."""

import logging
from typing import Any, Optional, Sequence

from fastapi import UploadFile
from sqlalchemy import distinct, select

from ..models.package import Package
from ..schemas.package import PackageForm
from ..utils.forms import coerce_count
from .documents import DocumentService, require_fields
from .image_sets import first_or_none, reconcile, single_slot_retained, slice_uploads

logger = logging.getLogger(__name__)

THUMBNAIL_CAPACITY = 1
GALLERY_CAPACITY = 10


def _activity_images(activity: Any) -> list[str]:
    if isinstance(activity, dict) and isinstance(activity.get("images"), list):
        return [str(url) for url in activity["images"] if url]
    return []


def _strip_upload_hints(activity: dict) -> dict:
    return {key: value for key, value in activity.items() if key != "imageCount"}


class PackageService(DocumentService[Package]):
    """Service for travel package operations."""

    model = Package
    resource_type = "package"
    asset_kind = "packages"

    async def create(
        self,
        form: PackageForm,
        thumbnail: Sequence[UploadFile] = (),
        images: Sequence[UploadFile] = (),
        activity_images: Sequence[UploadFile] = (),
    ) -> Package:
        """
        Create a package, storing its uploads as the initial image sets.

        Activity uploads arrive as one flat batch and are handed out to the
        declared activities in order, ``imageCount`` files each (default 1).

        Raises:
            ValidationError: If the title is missing or an upload is not an image
        """
        values = form.values()
        require_fields(values, ["title"], {"title": "title"})

        uploaded: list[str] = []
        try:
            thumbnail_urls = await self._upload(thumbnail, uploaded)
            gallery_urls = await self._upload(images, uploaded)
            activity_urls = await self._upload(activity_images, uploaded)

            thumb = reconcile([], [], thumbnail_urls, THUMBNAIL_CAPACITY)
            gallery = reconcile([], [], gallery_urls, GALLERY_CAPACITY)
            # Nothing is stored yet, so no activity can retain images
            declared = [
                {key: value for key, value in activity.items() if key != "images"}
                for activity in form.activities() or []
            ]
            activities, _, leaked = self._merge_activities([], declared, activity_urls)
            self._log_unreferenced([*thumb.dropped, *gallery.dropped, *leaked])

            package = Package(
                **values,
                thumbnail=first_or_none(thumb.images),
                images=gallery.images,
                activities=activities,
            )
            package = await self._save(package)
        except Exception:
            await self._discard_uploads(uploaded)
            raise

        logger.info(
            "Package created successfully",
            extra={
                "package_id": str(package.id),
                "title": package.title,
                "images": len(package.images),
                "activities": len(package.activities),
            },
        )
        return package

    async def update(
        self,
        package_id: str,
        form: PackageForm,
        thumbnail: Sequence[UploadFile] = (),
        images: Sequence[UploadFile] = (),
        activity_images: Sequence[UploadFile] = (),
    ) -> Package:
        """
        Update a package and reconcile each of its image sets.

        Retained gallery images come from ``existingImages`` (all stored images
        when absent); a new thumbnail replaces the stored one. Orphaned assets
        are removed from the object store after the record is saved.

        Raises:
            NotFoundError: If the package does not exist
        """
        package = await self.get_by_id_or_raise(package_id)
        values = form.values()
        if "title" in values:
            require_fields(values, ["title"], {"title": "title"})

        uploaded: list[str] = []
        try:
            thumbnail_urls = await self._upload(thumbnail, uploaded)
            gallery_urls = await self._upload(images, uploaded)
            activity_urls = await self._upload(activity_images, uploaded)

            stored_thumbnail = [package.thumbnail] if package.thumbnail else []
            thumb = reconcile(
                stored_thumbnail,
                single_slot_retained(package.thumbnail, form.existing_thumbnail, bool(thumbnail_urls)),
                thumbnail_urls,
                THUMBNAIL_CAPACITY,
            )

            stored_gallery = list(package.images or [])
            retained_gallery = stored_gallery if form.existing_images is None else form.existing_images
            gallery = reconcile(stored_gallery, retained_gallery, gallery_urls, GALLERY_CAPACITY)

            stored_activities = list(package.activities or [])
            declared = form.activities()
            if declared is None:
                declared = [dict(activity) for activity in stored_activities if isinstance(activity, dict)]
            activities, activity_orphans, leaked = self._merge_activities(stored_activities, declared, activity_urls)
            self._log_unreferenced([*thumb.dropped, *gallery.dropped, *leaked])

            for column, value in values.items():
                setattr(package, column, value)
            package.thumbnail = first_or_none(thumb.images)
            package.images = gallery.images
            package.activities = activities
            package = await self._save(package)
        except Exception:
            await self._discard_uploads(uploaded)
            raise

        await self._release_assets([*thumb.orphaned, *gallery.orphaned, *activity_orphans], package.id)

        logger.info(
            "Package updated successfully",
            extra={
                "package_id": str(package.id),
                "fields": sorted(values),
                "new_assets": len(thumbnail_urls) + len(gallery_urls) + len(activity_urls),
            },
        )
        return package

    def _merge_activities(
        self,
        stored: Sequence[Any],
        declared: Sequence[dict],
        uploaded: Sequence[str],
    ) -> tuple[list[dict], list[str], list[str]]:
        """
        Reconcile the image set of every declared activity.

        Activity ``i`` keeps the images it declares (its stored images when it
        declares none) plus its slice of the upload batch. Stored activities
        beyond the declared list are gone, so all their images are orphaned.

        Returns:
            Tuple of (merged activities, orphaned URLs, uploaded URLs left unreferenced)
        """
        counts = [coerce_count(activity.get("imageCount")) for activity in declared]
        slices, leftover = slice_uploads(counts, uploaded)

        merged: list[dict] = []
        orphaned: list[str] = []
        unreferenced: list[str] = list(leftover)
        for index, (activity, batch) in enumerate(zip(declared, slices)):
            previous = stored[index] if index < len(stored) and isinstance(stored[index], dict) else {}
            previous_images = _activity_images(previous)
            retained = _activity_images(activity) if "images" in activity else previous_images

            change = reconcile(previous_images, retained, batch)
            orphaned.extend(change.orphaned)
            unreferenced.extend(change.dropped)
            merged.append({**previous, **_strip_upload_hints(activity), "images": change.images})

        for removed in stored[len(declared):]:
            orphaned.extend(_activity_images(removed))

        return merged, orphaned, unreferenced

    def _log_unreferenced(self, urls: Sequence[str]) -> None:
        # Kept in the store on purpose: capacity overflow is not treated as orphaning
        if urls:
            logger.warning(
                "Uploaded assets left unreferenced",
                extra={"resource_type": self.resource_type, "urls": list(urls)},
            )

    def image_urls(self, package: Package) -> list[Optional[str]]:
        urls: list[Optional[str]] = [package.thumbnail]
        urls.extend(package.images or [])
        for activity in package.activities or []:
            urls.extend(_activity_images(activity))
        return urls

    async def search(
        self,
        title: Optional[str],
        min_price: Optional[float] = None,
        max_price: Optional[float] = None,
        days: Optional[str] = None,
    ) -> list[Package]:
        """
        Case-insensitive title search, optionally narrowed by price range and days.

        When the narrowed search finds nothing, the title-only matches are
        returned instead. No title means no results.
        """
        if not title:
            return []

        title_match = Package.title.icontains(title, autoescape=True)
        stmt = select(Package).where(title_match)
        narrowed = False
        if min_price is not None and max_price is not None:
            stmt = stmt.where(Package.price >= min_price, Package.price <= max_price)
            narrowed = True
        if days:
            stmt = stmt.where(Package.days == days)
            narrowed = True

        result = await self.db.execute(stmt.order_by(Package.created_at))
        packages = list(result.scalars().all())

        if not packages and narrowed:
            logger.info(
                "Package search fell back to title-only match",
                extra={"title": title, "min_price": min_price, "max_price": max_price, "days": days},
            )
            result = await self.db.execute(select(Package).where(title_match).order_by(Package.created_at))
            packages = list(result.scalars().all())

        return packages

    async def distinct_prices(self) -> list[float]:
        """Every distinct package price, ascending."""
        stmt = select(distinct(Package.price)).where(Package.price.is_not(None)).order_by(Package.price)
        result = await self.db.execute(stmt)
        return list(result.scalars().all())

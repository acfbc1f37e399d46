"""Package routers: admin CRUD plus the public search and price list."""

import logging
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import ObjectStoreClient, RequiredAuth, get_db
from ..schemas.common import DeleteResponse
from ..schemas.package import Package, PackageForm, PackageMutationResponse
from ..services.object_store import ObjectStore, limit_uploads
from ..services.package_service import PackageService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin/packages", tags=["packages"], dependencies=[RequiredAuth])
public_router = APIRouter(prefix="/api", tags=["packages"])

UploadField = Annotated[Optional[list[UploadFile]], File()]


@router.get("", response_model=list[Package])
async def list_packages(db: AsyncSession = Depends(get_db)):
    """List every package."""
    return await PackageService(db).list_all()


@router.get("/{package_id}", response_model=Package)
async def get_package(package_id: str, db: AsyncSession = Depends(get_db)):
    """Get one package by ID."""
    return await PackageService(db).get_by_id_or_raise(package_id)


@router.post("", response_model=PackageMutationResponse)
async def create_package(
    form: PackageForm = Depends(),
    thumbnail: UploadField = None,
    images: UploadField = None,
    activity_images: Annotated[Optional[list[UploadFile]], File(alias="activityImages")] = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    """
    Create a package from a multipart form.

    Files: ``thumbnail`` (1), ``images`` (up to 10), ``activityImages`` (up to 50,
    shared out to activities by their ``imageCount``).
    """
    package = await PackageService(db, store).create(
        form,
        thumbnail=limit_uploads(thumbnail, "thumbnail", 1),
        images=limit_uploads(images, "images", 10),
        activity_images=limit_uploads(activity_images, "activityImages", 50),
    )
    return PackageMutationResponse(message="Package added successfully", package=Package.model_validate(package))


@router.put("/{package_id}", response_model=PackageMutationResponse)
async def update_package(
    package_id: str,
    form: PackageForm = Depends(),
    thumbnail: UploadField = None,
    images: UploadField = None,
    activity_images: Annotated[Optional[list[UploadFile]], File(alias="activityImages")] = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    """Update a package; unsent fields keep their stored values."""
    package = await PackageService(db, store).update(
        package_id,
        form,
        thumbnail=limit_uploads(thumbnail, "thumbnail", 1),
        images=limit_uploads(images, "images", 10),
        activity_images=limit_uploads(activity_images, "activityImages", 50),
    )
    return PackageMutationResponse(message="Package updated successfully", package=Package.model_validate(package))


@router.delete("/{package_id}", response_model=DeleteResponse)
async def delete_package(
    package_id: str,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    """Delete a package and its images. Succeeds even if some image deletions fail."""
    report = await PackageService(db, store).delete(package_id)
    return DeleteResponse(
        message="Package and images deleted",
        deleted_assets=report.deleted,
        failed_assets=report.failed,
    )


@public_router.get("/packagesearch", response_model=list[Package])
async def search_packages(
    title: Optional[str] = None,
    min_price: Annotated[Optional[float], Query(alias="minPrice")] = None,
    max_price: Annotated[Optional[float], Query(alias="maxPrice")] = None,
    days: Optional[str] = None,
    db: AsyncSession = Depends(get_db),
):
    """
    Search packages by title, narrowed by price range and days when given.

    Falls back to title-only matches when the narrowed search finds nothing.
    """
    return await PackageService(db).search(title, min_price=min_price, max_price=max_price, days=days)


@public_router.get("/packageprices", response_model=list[float])
async def package_prices(db: AsyncSession = Depends(get_db)):
    """Distinct package prices, ascending."""
    return await PackageService(db).distinct_prices()

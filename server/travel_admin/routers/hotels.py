"""Hotel admin router."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import ObjectStoreClient, RequiredAuth, get_db
from ..schemas.common import DeleteResponse
from ..schemas.hotel import Hotel, HotelForm, HotelMutationResponse
from ..services.hotel_service import HotelService
from ..services.object_store import ObjectStore, limit_uploads

router = APIRouter(prefix="/api/admin/hotels", tags=["hotels"], dependencies=[RequiredAuth])

ImagesField = Annotated[Optional[list[UploadFile]], File()]


@router.get("", response_model=list[Hotel])
async def list_hotels(db: AsyncSession = Depends(get_db)):
    return await HotelService(db).list_all()


@router.get("/{hotel_id}", response_model=Hotel)
async def get_hotel(hotel_id: str, db: AsyncSession = Depends(get_db)):
    return await HotelService(db).get_by_id_or_raise(hotel_id)


@router.post("", response_model=HotelMutationResponse)
async def create_hotel(
    form: HotelForm = Depends(),
    images: ImagesField = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    """Create a hotel with up to 10 ``images``."""
    hotel = await HotelService(db, store).create(form, limit_uploads(images, "images", 10))
    return HotelMutationResponse(message="Hotel added", hotel=Hotel.model_validate(hotel))


@router.put("/{hotel_id}", response_model=HotelMutationResponse)
async def update_hotel(
    hotel_id: str,
    form: HotelForm = Depends(),
    images: ImagesField = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    """
    Update a hotel.

    ``existingImages`` (JSON list) names the stored images to keep; images it
    leaves out are deleted from the object store.
    """
    hotel = await HotelService(db, store).update(hotel_id, form, limit_uploads(images, "images", 10))
    return HotelMutationResponse(message="Hotel updated", hotel=Hotel.model_validate(hotel))


@router.delete("/{hotel_id}", response_model=DeleteResponse)
async def delete_hotel(
    hotel_id: str,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    report = await HotelService(db, store).delete(hotel_id)
    return DeleteResponse(
        message="Hotel and images deleted",
        deleted_assets=report.deleted,
        failed_assets=report.failed,
    )

"""Visa admin router."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import ObjectStoreClient, RequiredAuth, get_db
from ..schemas.common import DeleteResponse
from ..schemas.visa import Visa, VisaForm, VisaMutationResponse
from ..services.object_store import ObjectStore, limit_uploads
from ..services.visa_service import VisaService

router = APIRouter(prefix="/api/admin/visas", tags=["visas"], dependencies=[RequiredAuth])

ImageField = Annotated[Optional[list[UploadFile]], File()]


@router.get("", response_model=list[Visa])
async def list_visas(db: AsyncSession = Depends(get_db)):
    return await VisaService(db).list_all()


@router.get("/{visa_id}", response_model=Visa)
async def get_visa(visa_id: str, db: AsyncSession = Depends(get_db)):
    """Get one visa; ``image`` is always a string and ``requiredDocuments`` a list."""
    return await VisaService(db).get_by_id_or_raise(visa_id)


@router.post("", response_model=VisaMutationResponse)
async def create_visa(
    form: VisaForm = Depends(),
    image: ImageField = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    visa = await VisaService(db, store).create(form, limit_uploads(image, "image", 1))
    return VisaMutationResponse(message="Visa added successfully", visa=Visa.model_validate(visa))


@router.put("/{visa_id}", response_model=VisaMutationResponse)
async def update_visa(
    visa_id: str,
    form: VisaForm = Depends(),
    image: ImageField = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    visa = await VisaService(db, store).update(visa_id, form, limit_uploads(image, "image", 1))
    return VisaMutationResponse(message="Visa updated successfully", visa=Visa.model_validate(visa))


@router.delete("/{visa_id}", response_model=DeleteResponse)
async def delete_visa(
    visa_id: str,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    report = await VisaService(db, store).delete(visa_id)
    return DeleteResponse(
        message="Visa deleted successfully",
        deleted_assets=report.deleted,
        failed_assets=report.failed,
    )

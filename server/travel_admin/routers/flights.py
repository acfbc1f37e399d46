"""Flight routers: admin CRUD and the public route search."""

from typing import Annotated, Optional

from fastapi import APIRouter, Depends, File, Query, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.dependencies import ObjectStoreClient, RequiredAuth, get_db
from ..schemas.common import DeleteResponse
from ..schemas.flight import Flight, FlightForm, FlightMutationResponse, FlightSearchResponse
from ..services.flight_service import FlightService
from ..services.object_store import ObjectStore, limit_uploads

router = APIRouter(prefix="/api/admin/flights", tags=["flights"], dependencies=[RequiredAuth])
public_router = APIRouter(prefix="/api/flights", tags=["flights"])

LogoField = Annotated[Optional[list[UploadFile]], File()]


@router.get("", response_model=list[Flight])
async def list_flights(db: AsyncSession = Depends(get_db)):
    return await FlightService(db).list_all()


@router.get("/{flight_id}", response_model=Flight)
async def get_flight(flight_id: str, db: AsyncSession = Depends(get_db)):
    return await FlightService(db).get_by_id_or_raise(flight_id)


@router.post("", response_model=FlightMutationResponse, status_code=201)
async def create_flight(
    form: FlightForm = Depends(),
    logo: LogoField = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    """Create a flight; ``departure``, ``arrival`` and ``services`` are JSON-encoded."""
    flight = await FlightService(db, store).create(form, limit_uploads(logo, "logo", 1))
    return FlightMutationResponse(message="Flight added successfully", flight=Flight.model_validate(flight))


@router.put("/{flight_id}", response_model=FlightMutationResponse)
async def update_flight(
    flight_id: str,
    form: FlightForm = Depends(),
    logo: LogoField = None,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    flight = await FlightService(db, store).update(flight_id, form, limit_uploads(logo, "logo", 1))
    return FlightMutationResponse(message="Flight updated successfully", flight=Flight.model_validate(flight))


@router.delete("/{flight_id}", response_model=DeleteResponse)
async def delete_flight(
    flight_id: str,
    db: AsyncSession = Depends(get_db),
    store: ObjectStore = ObjectStoreClient,
):
    report = await FlightService(db, store).delete(flight_id)
    return DeleteResponse(
        message="Flight deleted successfully",
        deleted_assets=report.deleted,
        failed_assets=report.failed,
    )


@public_router.get("/search", response_model=FlightSearchResponse)
async def search_flights(
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    departure_date: Annotated[Optional[str], Query(alias="departureDate")] = None,
    db: AsyncSession = Depends(get_db),
):
    """Flights from ``origin`` to ``destination`` (IATA codes), optionally on ``departureDate``."""
    flights = await FlightService(db).search(origin, destination, departure_date)
    return FlightSearchResponse(flights=[Flight.model_validate(f) for f in flights])

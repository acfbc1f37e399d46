"""Flight service: CRUD with an optional airline logo, plus route search."""

import logging
from typing import Any, Optional, Sequence

from fastapi import UploadFile
from sqlalchemy import select

from ..core.exceptions import ValidationError
from ..models.flight import Flight
from ..schemas.flight import FlightForm
from .documents import DocumentService
from .image_sets import first_or_none, reconcile, single_slot_retained

logger = logging.getLogger(__name__)

LOGO_CAPACITY = 1


def _leg_code(leg: Any) -> Optional[str]:
    if isinstance(leg, dict) and leg.get("iataCode"):
        return str(leg["iataCode"]).strip().upper()
    return None


def _missing_fields(flight: Flight) -> list[str]:
    missing = []
    if not flight.flight_number:
        missing.append("flightNumber")
    if not flight.airline:
        missing.append("airline")
    for leg_name in ("departure", "arrival"):
        leg = getattr(flight, leg_name) or {}
        for key in ("iataCode", "time"):
            if not leg.get(key):
                missing.append(f"{leg_name}.{key}")
    for index, service in enumerate(flight.services or []):
        if not service.get("type"):
            missing.append(f"services[{index}].type")
        if service.get("price") in (None, ""):
            missing.append(f"services[{index}].price")
    return missing


class FlightService(DocumentService[Flight]):
    """Service for flight operations."""

    model = Flight
    resource_type = "flight"
    asset_kind = "flights"

    def _apply(self, flight: Flight, values: dict[str, Any]) -> None:
        for column, value in values.items():
            setattr(flight, column, value)
        if "departure" in values:
            flight.origin_code = _leg_code(flight.departure)
        if "arrival" in values:
            flight.destination_code = _leg_code(flight.arrival)

        missing = _missing_fields(flight)
        if missing:
            raise ValidationError(
                detail=f"Missing required fields: {', '.join(missing)}",
                missing_fields=missing,
            )

    async def create(self, form: FlightForm, logo: Sequence[UploadFile] = ()) -> Flight:
        """
        Create a flight.

        Raises:
            ValidationError: If the number, airline or either leg's code and time are missing
        """
        flight = Flight(departure={}, arrival={}, services=[])
        self._apply(flight, form.values())

        uploaded: list[str] = []
        try:
            new_urls = await self._upload(logo, uploaded)
            slot = reconcile([], [], new_urls, LOGO_CAPACITY)
            flight.logo = first_or_none(slot.images)

            flight = await self._save(flight)
        except Exception:
            await self._discard_uploads(uploaded)
            raise

        logger.info(
            "Flight created successfully",
            extra={"flight_id": str(flight.id), "flight_number": flight.flight_number},
        )
        return flight

    async def update(self, flight_id: str, form: FlightForm, logo: Sequence[UploadFile] = ()) -> Flight:
        """
        Update a flight; a new logo replaces and deletes the stored one.

        Raises:
            NotFoundError: If the flight does not exist
            ValidationError: If the update would leave a required field empty
        """
        flight = await self.get_by_id_or_raise(flight_id)
        values = form.values()
        self._apply(flight, values)

        uploaded: list[str] = []
        try:
            new_urls = await self._upload(logo, uploaded)
            stored = [flight.logo] if flight.logo else []
            slot = reconcile(
                stored,
                single_slot_retained(flight.logo, form.existing_logo, bool(new_urls)),
                new_urls,
                LOGO_CAPACITY,
            )
            flight.logo = first_or_none(slot.images)
            flight = await self._save(flight)
        except Exception:
            await self._discard_uploads(uploaded)
            raise

        await self._release_assets(slot.orphaned, flight.id)

        logger.info("Flight updated successfully", extra={"flight_id": str(flight.id), "fields": sorted(values)})
        return flight

    def image_urls(self, flight: Flight) -> list[Optional[str]]:
        return [flight.logo]

    async def search(self, origin: Optional[str], destination: Optional[str], departure_date: Optional[str] = None) -> list[Flight]:
        """
        Flights between two airports, optionally on one date.

        Raises:
            ValidationError: If origin or destination is missing
        """
        if not origin or not destination:
            raise ValidationError(detail="Origin and destination are required")

        stmt = select(Flight).where(
            Flight.origin_code == origin.strip().upper(),
            Flight.destination_code == destination.strip().upper(),
        )
        if departure_date:
            stmt = stmt.where(Flight.departure_date == departure_date)

        result = await self.db.execute(stmt.order_by(Flight.created_at))
        return list(result.scalars().all())

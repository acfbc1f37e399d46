"""Flight schemas: multipart form input and document output."""

from typing import Annotated, Any, Dict, List, Optional

from fastapi import Form
from pydantic import Field

from ..utils.forms import parse_list, parse_object, present_fields
from .common import CamelModel, Document, MutationResponse


class FlightForm:
    """Multipart fields accepted when creating or updating a flight."""

    def __init__(
        self,
        flight_number: Annotated[Optional[str], Form(alias="flightNumber")] = None,
        airline: Annotated[Optional[str], Form()] = None,
        departure: Annotated[Optional[str], Form()] = None,
        arrival: Annotated[Optional[str], Form()] = None,
        departure_date: Annotated[Optional[str], Form(alias="departureDate")] = None,
        duration: Annotated[Optional[str], Form()] = None,
        services: Annotated[Optional[str], Form()] = None,
        existing_logo: Annotated[Optional[str], Form(alias="existingLogo")] = None,
    ):
        self.raw = present_fields({
            "flightNumber": flight_number,
            "airline": airline,
            "departure": departure,
            "arrival": arrival,
            "departureDate": departure_date,
            "duration": duration,
            "services": services,
        })
        self.existing_logo = existing_logo

    def values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        if "flightNumber" in self.raw:
            values["flight_number"] = self.raw["flightNumber"].strip()
        if "airline" in self.raw:
            values["airline"] = self.raw["airline"].strip()
        for name in ("departure", "arrival"):
            if name in self.raw:
                values[name] = parse_object(name, self.raw[name])
        if "departureDate" in self.raw:
            values["departure_date"] = self.raw["departureDate"]
        if "duration" in self.raw:
            values["duration"] = self.raw["duration"]
        if "services" in self.raw:
            parsed = parse_list("services", self.raw["services"]) or []
            values["services"] = [item for item in parsed if isinstance(item, dict)]
        return values


class Flight(Document):
    """Flight document."""

    flight_number: str
    airline: str
    logo: Optional[str] = None
    departure: Dict[str, Any] = Field(default_factory=dict)
    arrival: Dict[str, Any] = Field(default_factory=dict)
    departure_date: Optional[str] = None
    duration: Optional[str] = None
    services: List[Dict[str, Any]] = Field(default_factory=list)


class FlightMutationResponse(MutationResponse):
    flight: Flight


class FlightSearchResponse(CamelModel):
    success: bool = True
    flights: List[Flight] = Field(default_factory=list)

"""Hotel schemas: multipart form input and document output."""

from typing import Annotated, Any, Dict, List, Optional

from fastapi import Form
from pydantic import Field

from ..utils.forms import parse_list, parse_number, parse_refs, present_fields
from .common import Document, MutationResponse

TEXT_FIELDS = {
    "price": "price",
    "perPerson": "per_person",
    "location": "location",
    "overview": "overview",
    "type": "type",
    "roomType": "room_type",
}


class HotelForm:
    """Multipart fields accepted when creating or updating a hotel."""

    def __init__(
        self,
        title: Annotated[Optional[str], Form()] = None,
        price: Annotated[Optional[str], Form()] = None,
        per_person: Annotated[Optional[str], Form(alias="perPerson")] = None,
        location: Annotated[Optional[str], Form()] = None,
        reviews: Annotated[Optional[str], Form()] = None,
        overview: Annotated[Optional[str], Form()] = None,
        popular_amenities: Annotated[Optional[str], Form(alias="popularAmenities")] = None,
        highlights: Annotated[Optional[str], Form()] = None,
        type: Annotated[Optional[str], Form()] = None,
        room_type: Annotated[Optional[str], Form(alias="roomType")] = None,
        existing_images: Annotated[Optional[str], Form(alias="existingImages")] = None,
    ):
        # Empty values are ignored so an update keeps what is stored
        self.raw = present_fields({
            "title": title,
            "price": price,
            "perPerson": per_person,
            "location": location,
            "reviews": reviews,
            "overview": overview,
            "popularAmenities": popular_amenities,
            "highlights": highlights,
            "type": type,
            "roomType": room_type,
        })
        self.existing_images = parse_refs("existingImages", existing_images)

    def values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        if "title" in self.raw:
            values["title"] = self.raw["title"].strip()
        for name, column in TEXT_FIELDS.items():
            if name in self.raw:
                values[column] = self.raw[name]
        if "reviews" in self.raw:
            values["reviews"] = parse_number("reviews", self.raw["reviews"])
        if "popularAmenities" in self.raw:
            values["popular_amenities"] = parse_list("popularAmenities", self.raw["popularAmenities"], split_commas=True)
        if "highlights" in self.raw:
            values["highlights"] = parse_list("highlights", self.raw["highlights"], split_commas=True)
        return values


class Hotel(Document):
    """Hotel document."""

    title: str
    images: List[str] = Field(default_factory=list)
    price: Optional[str] = None
    per_person: Optional[str] = None
    location: Optional[str] = None
    reviews: Optional[float] = None
    overview: Optional[str] = None
    popular_amenities: List[Any] = Field(default_factory=list)
    highlights: List[Any] = Field(default_factory=list)
    type: Optional[str] = None
    room_type: Optional[str] = None


class HotelMutationResponse(MutationResponse):
    hotel: Hotel

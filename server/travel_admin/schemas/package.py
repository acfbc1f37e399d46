"""Travel package schemas: multipart form input and document output."""

from typing import Annotated, Any, Dict, List, Optional

from fastapi import Form
from pydantic import Field

from ..utils.forms import parse_list, parse_number, parse_object, parse_refs, present_fields
from .common import Document, MutationResponse

# Form fields holding JSON-encoded lists, keyed by form name -> column
LIST_FIELDS = {
    "highlights": "highlights",
    "inclusions": "inclusions",
    "exclusions": "exclusions",
    "itinerary": "itinerary",
    "hotels": "hotels",
    "availableDates": "available_dates",
    "transportation": "transportation",
    "termsConditions": "terms_conditions",
}

OBJECT_FIELDS = {
    "pricing": "pricing",
    "policies": "policies",
    "location": "location",
}


class PackageForm:
    """Multipart fields accepted when creating or updating a package."""

    def __init__(
        self,
        title: Annotated[Optional[str], Form()] = None,
        price: Annotated[Optional[str], Form()] = None,
        days: Annotated[Optional[str], Form()] = None,
        short_description: Annotated[Optional[str], Form(alias="shortDescription")] = None,
        highlights: Annotated[Optional[str], Form()] = None,
        inclusions: Annotated[Optional[str], Form()] = None,
        exclusions: Annotated[Optional[str], Form()] = None,
        itinerary: Annotated[Optional[str], Form()] = None,
        hotels: Annotated[Optional[str], Form()] = None,
        available_dates: Annotated[Optional[str], Form(alias="availableDates")] = None,
        transportation: Annotated[Optional[str], Form()] = None,
        pricing: Annotated[Optional[str], Form()] = None,
        policies: Annotated[Optional[str], Form()] = None,
        terms_conditions: Annotated[Optional[str], Form(alias="termsConditions")] = None,
        location: Annotated[Optional[str], Form()] = None,
        activities: Annotated[Optional[str], Form()] = None,
        existing_images: Annotated[Optional[str], Form(alias="existingImages")] = None,
        existing_thumbnail: Annotated[Optional[str], Form(alias="existingThumbnail")] = None,
    ):
        self.raw = present_fields({
            "title": title,
            "price": price,
            "days": days,
            "shortDescription": short_description,
            "highlights": highlights,
            "inclusions": inclusions,
            "exclusions": exclusions,
            "itinerary": itinerary,
            "hotels": hotels,
            "availableDates": available_dates,
            "transportation": transportation,
            "pricing": pricing,
            "policies": policies,
            "termsConditions": terms_conditions,
            "location": location,
            "activities": activities,
        })
        self.existing_images = parse_refs("existingImages", existing_images)
        # "" is meaningful here: it clears the thumbnail
        self.existing_thumbnail = existing_thumbnail

    def values(self) -> Dict[str, Any]:
        """Column values for every scalar and structured field the client sent."""
        values: Dict[str, Any] = {}
        if "title" in self.raw:
            values["title"] = self.raw["title"].strip()
        if "price" in self.raw:
            values["price"] = parse_number("price", self.raw["price"])
        if "days" in self.raw:
            values["days"] = self.raw["days"]
        if "shortDescription" in self.raw:
            values["short_description"] = self.raw["shortDescription"]
        for name, column in LIST_FIELDS.items():
            if name in self.raw:
                values[column] = parse_list(name, self.raw[name])
        for name, column in OBJECT_FIELDS.items():
            if name in self.raw:
                values[column] = parse_object(name, self.raw[name])
        return values

    def activities(self) -> Optional[List[Dict[str, Any]]]:
        """Declared activities, or None when the client did not send the field."""
        if "activities" not in self.raw:
            return None
        parsed = parse_list("activities", self.raw["activities"]) or []
        return [item for item in parsed if isinstance(item, dict)]


class Package(Document):
    """Package document."""

    title: str
    price: Optional[float] = None
    days: Optional[str] = None
    short_description: Optional[str] = None
    thumbnail: Optional[str] = None
    images: List[str] = Field(default_factory=list)
    highlights: List[Any] = Field(default_factory=list)
    inclusions: List[Any] = Field(default_factory=list)
    exclusions: List[Any] = Field(default_factory=list)
    itinerary: List[Any] = Field(default_factory=list)
    hotels: List[Any] = Field(default_factory=list)
    available_dates: List[Any] = Field(default_factory=list)
    transportation: List[Any] = Field(default_factory=list)
    terms_conditions: List[Any] = Field(default_factory=list)
    pricing: Dict[str, Any] = Field(default_factory=dict)
    policies: Dict[str, Any] = Field(default_factory=dict)
    location: Dict[str, Any] = Field(default_factory=dict)
    activities: List[Dict[str, Any]] = Field(default_factory=list)


class PackageMutationResponse(MutationResponse):
    package: Package

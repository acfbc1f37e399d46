"""Visa schemas: multipart form input and document output."""

from typing import Annotated, Any, Dict, List, Optional

from fastapi import Form
from pydantic import Field, field_validator

from ..utils.forms import parse_list, present_fields
from .common import Document, MutationResponse

TEXT_FIELDS = {
    "visaType": "visa_type",
    "validity": "validity",
    "processingTime": "processing_time",
    "visaMode": "visa_mode",
    "country": "country",
    "overview": "overview",
}


class VisaForm:
    """Multipart fields accepted when creating or updating a visa."""

    def __init__(
        self,
        name: Annotated[Optional[str], Form()] = None,
        visa_type: Annotated[Optional[str], Form(alias="visaType")] = None,
        validity: Annotated[Optional[str], Form()] = None,
        processing_time: Annotated[Optional[str], Form(alias="processingTime")] = None,
        visa_mode: Annotated[Optional[str], Form(alias="visaMode")] = None,
        country: Annotated[Optional[str], Form()] = None,
        overview: Annotated[Optional[str], Form()] = None,
        required_documents: Annotated[Optional[str], Form(alias="requiredDocuments")] = None,
        existing_image: Annotated[Optional[str], Form(alias="existingImage")] = None,
    ):
        self.raw = present_fields({
            "name": name,
            "visaType": visa_type,
            "validity": validity,
            "processingTime": processing_time,
            "visaMode": visa_mode,
            "country": country,
            "overview": overview,
        })
        self.required_documents = required_documents
        self.existing_image = existing_image

    def values(self) -> Dict[str, Any]:
        values: Dict[str, Any] = {}
        if "name" in self.raw:
            values["name"] = self.raw["name"].strip()
        for name, column in TEXT_FIELDS.items():
            if name in self.raw:
                values[column] = self.raw[name]
        # Documents are always rewritten; a missing field means none are required
        documents = parse_list("requiredDocuments", self.required_documents, split_commas=True) or []
        values["required_documents"] = [doc for doc in documents if doc not in ("", None)]
        return values


class Visa(Document):
    """Visa document."""

    name: str
    image: str = ""
    visa_type: Optional[str] = None
    validity: Optional[str] = None
    processing_time: Optional[str] = None
    visa_mode: Optional[str] = None
    country: Optional[str] = None
    overview: Optional[str] = None
    required_documents: List[Any] = Field(default_factory=list)

    @field_validator("image", mode="before")
    @classmethod
    def default_image(cls, v: Optional[str]) -> str:
        return v or ""

    @field_validator("required_documents", mode="before")
    @classmethod
    def default_documents(cls, v: Any) -> List[Any]:
        return v if isinstance(v, list) else []


class VisaMutationResponse(MutationResponse):
    visa: Visa

"""Enquiry and dashboard aggregate schemas."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from .common import CamelModel, Document


class CreateEnquiryRequest(BaseModel):
    """Contact request posted from the public site."""

    name: Optional[str] = Field(None, max_length=255)
    email: Optional[str] = Field(None, max_length=255)
    phone: Optional[str] = Field(None, max_length=64)
    adults: Optional[int] = Field(None, ge=0)
    children: Optional[int] = Field(None, ge=0)
    message: Optional[str] = None


class Enquiry(Document):
    """Stored enquiry."""

    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    adults: Optional[int] = None
    children: Optional[int] = None
    message: Optional[str] = None
    date: datetime


class MonthlyEnquiries(BaseModel):
    """Enquiry count for one calendar month, all years together."""

    month: str = Field(..., description="Month name, e.g. 'January'")
    enquiries: int = Field(..., ge=0)


class Stats(CamelModel):
    """Document totals for the admin dashboard."""

    packages: int
    hotels: int
    visas: int
    flights: int
    enquiries: int

"""Service layer package."""

from .admin_service import AdminCredentialStore, AuthService
from .enquiry_service import EnquiryService
from .flight_service import FlightService
from .hotel_service import HotelService
from .package_service import PackageService
from .visa_service import VisaService

__all__ = [
    "AdminCredentialStore",
    "AuthService",
    "EnquiryService",
    "FlightService",
    "HotelService",
    "PackageService",
    "VisaService",
]

"""Models module exporting all database models."""

from .admin import Admin
from .enquiry import Enquiry
from .flight import Flight
from .hotel import Hotel
from .package import Package
from .visa import Visa

__all__ = [
    # Catalogue entities
    "Package",
    "Hotel",
    "Visa",
    "Flight",

    # Public enquiries
    "Enquiry",

    # Credential record
    "Admin",
]

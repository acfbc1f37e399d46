"""Flight model definition."""

from typing import Any

from sqlalchemy import JSON, String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import DocumentMixin


class Flight(DocumentMixin, Base):
    """A scheduled flight with fare services and an optional airline logo."""

    __tablename__ = "flights"

    flight_number: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    airline: Mapped[str] = mapped_column(String(255), nullable=False)
    logo: Mapped[str | None] = mapped_column(String(1024), nullable=True)

    # {"iataCode": "DEL", "time": "10:30"}
    departure: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    arrival: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Denormalised leg codes so search can filter without JSON operators
    origin_code: Mapped[str | None] = mapped_column(String(8), nullable=True, index=True)
    destination_code: Mapped[str | None] = mapped_column(String(8), nullable=True, index=True)

    departure_date: Mapped[str | None] = mapped_column(String(32), nullable=True)
    duration: Mapped[str | None] = mapped_column(String(64), nullable=True)
    services: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Flight(id={self.id}, flight_number='{self.flight_number}')>"

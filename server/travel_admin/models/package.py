"""Travel package model definition."""

from typing import Any

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import DocumentMixin


class Package(DocumentMixin, Base):
    """A travel package with its itinerary, pricing and image sets."""

    __tablename__ = "packages"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    price: Mapped[float | None] = mapped_column(Float, nullable=True, index=True)
    days: Mapped[str | None] = mapped_column(String(64), nullable=True)
    short_description: Mapped[str | None] = mapped_column(Text, nullable=True)

    # Image sets: thumbnail holds at most one URL, images at most ten
    thumbnail: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)

    highlights: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    inclusions: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    exclusions: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    itinerary: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    hotels: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    available_dates: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    transportation: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    terms_conditions: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    pricing: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    policies: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)
    location: Mapped[dict[str, Any]] = mapped_column(JSON, nullable=False, default=dict)

    # Each activity carries its own "images" list
    activities: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Package(id={self.id}, title='{self.title}')>"

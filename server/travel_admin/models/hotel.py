"""Hotel model definition."""

from typing import Any

from sqlalchemy import JSON, Float, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import DocumentMixin


class Hotel(DocumentMixin, Base):
    """A hotel listing with up to ten images."""

    __tablename__ = "hotels"

    title: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    images: Mapped[list[str]] = mapped_column(JSON, nullable=False, default=list)
    price: Mapped[str | None] = mapped_column(String(64), nullable=True)
    per_person: Mapped[str | None] = mapped_column(String(64), nullable=True)
    location: Mapped[str | None] = mapped_column(String(255), nullable=True)
    reviews: Mapped[float | None] = mapped_column(Float, nullable=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    popular_amenities: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    highlights: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)
    type: Mapped[str | None] = mapped_column(String(128), nullable=True)
    room_type: Mapped[str | None] = mapped_column(String(128), nullable=True)

    def __repr__(self) -> str:
        return f"<Hotel(id={self.id}, title='{self.title}')>"

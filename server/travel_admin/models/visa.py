"""Visa model definition."""

from typing import Any

from sqlalchemy import JSON, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import DocumentMixin


class Visa(DocumentMixin, Base):
    """A visa offering with one optional image."""

    __tablename__ = "visas"

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    image: Mapped[str | None] = mapped_column(String(1024), nullable=True)
    visa_type: Mapped[str | None] = mapped_column(String(128), nullable=True)
    validity: Mapped[str | None] = mapped_column(String(128), nullable=True)
    processing_time: Mapped[str | None] = mapped_column(String(128), nullable=True)
    visa_mode: Mapped[str | None] = mapped_column(String(128), nullable=True)
    country: Mapped[str | None] = mapped_column(String(128), nullable=True)
    overview: Mapped[str | None] = mapped_column(Text, nullable=True)
    required_documents: Mapped[list[Any]] = mapped_column(JSON, nullable=False, default=list)

    def __repr__(self) -> str:
        return f"<Visa(id={self.id}, name='{self.name}')>"

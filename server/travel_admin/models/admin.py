"""Admin credential model definition."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from ..core.database import Base
from .mixins import DocumentMixin


class Admin(DocumentMixin, Base):
    """The single privileged account that manages site content."""

    __tablename__ = "admins"

    username: Mapped[str] = mapped_column(String(255), nullable=False, unique=True, index=True)
    password_hash: Mapped[str] = mapped_column(String(255), nullable=False)

    def __repr__(self) -> str:
        return f"<Admin(id={self.id}, username='{self.username}')>"

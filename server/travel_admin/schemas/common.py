"""Common Pydantic schemas."""

from datetime import datetime
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base for schemas exchanged with the admin panel, which speaks camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class Document(CamelModel):
    """Fields every stored document carries."""

    id: UUID = Field(..., description="Unique document ID")
    created_at: datetime = Field(..., description="Creation time (ISO 8601)")
    updated_at: datetime = Field(..., description="Last update time (ISO 8601)")


class MutationResponse(CamelModel):
    """Envelope returned by create and update operations."""

    success: bool = True
    message: str


class DeleteResponse(CamelModel):
    """Envelope returned by delete operations."""

    success: bool = True
    message: str
    deleted_assets: List[str] = Field(default_factory=list, description="Public ids removed from the object store")
    failed_assets: List[str] = Field(
        default_factory=list,
        description="Public ids whose removal failed; the record is deleted regardless",
    )


class Violation(BaseModel):
    """Validation error violation."""

    path: str = Field(..., description="Path to the invalid field")
    message: str = Field(..., description="Validation error message")


class Problem(BaseModel):
    """RFC 9457 Problem Details response."""

    type: Optional[str] = Field(None, description="Problem type URI")
    title: str = Field(..., description="Short human-readable summary")
    status: int = Field(..., description="HTTP status code")
    detail: Optional[str] = Field(None, description="Human-readable explanation")
    instance: Optional[str] = Field(None, description="URI reference for this occurrence")
    violations: Optional[List[Violation]] = Field(None, description="Validation errors")

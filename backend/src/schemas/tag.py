"""Pydantic schemas for tag endpoints."""
from pydantic import BaseModel, ConfigDict, Field, field_validator


class TagRequest(BaseModel):
    """Schema for creating or renaming a tag."""

    name: str = Field(..., min_length=1, max_length=100)

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, v: str) -> str:
        """Strip surrounding whitespace so ' python ' and 'python' collide."""
        if not isinstance(v, str):
            raise ValueError("Tag name must be a string")
        return v.strip()


class TagResponse(BaseModel):
    """Schema for tag responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str

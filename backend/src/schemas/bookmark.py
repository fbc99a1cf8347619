"""Pydantic schemas for bookmark endpoints."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_NAME_LENGTH = 500
MAX_DESCRIPTION_LENGTH = 2000
MAX_LINK_LENGTH = 2048


def null_to_empty(v: Any) -> Any:
    """Treat a null tag list as an empty one."""
    return [] if v is None else v


def dedupe_tag_ids(v: list[int]) -> list[int]:
    """Drop duplicate tag ids, keeping first-seen order."""
    return list(dict.fromkeys(v))


class BookmarkListRequest(BaseModel):
    """Schema for the tag filter of the bookmark list endpoint."""

    tags: list[int] = Field(
        default=[],
        description="Tag ids; a bookmark matches if it has ANY of them. Empty means no filter.",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v: Any) -> Any:
        return null_to_empty(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[int]) -> list[int]:
        return dedupe_tag_ids(v)


class BookmarkCreate(BaseModel):
    """Schema for creating a new bookmark. At least one field must carry content."""

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    link: str | None = Field(default=None, max_length=MAX_LINK_LENGTH)
    tags: list[int] = []

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v: Any) -> Any:
        return null_to_empty(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[int]) -> list[int]:
        return dedupe_tag_ids(v)

    def is_empty(self) -> bool:
        """True if there is no name, description, link or tag."""
        return not (self.name or self.description or self.link or self.tags)


class BookmarkUpdate(BaseModel):
    """
    Schema for partially updating a bookmark.

    Only fields present in the request body change. When `tags` is present
    the bookmark's tag set is replaced with exactly those ids; an explicit
    null clears all tags.
    """

    name: str | None = Field(default=None, max_length=MAX_NAME_LENGTH)
    description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)
    link: str | None = Field(default=None, max_length=MAX_LINK_LENGTH)
    tags: list[int] | None = None

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags(cls, v: Any) -> Any:
        return null_to_empty(v)

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: list[int] | None) -> list[int] | None:
        return dedupe_tag_ids(v) if v is not None else v


class BookmarkResponse(BaseModel):
    """Schema for bookmark responses. Null fields are omitted by the router."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str | None = None
    link: str | None = None
    description: str | None = None

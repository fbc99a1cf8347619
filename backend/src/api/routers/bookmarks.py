"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Body, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from api.routing import TokenRequiredRoute
from models.user import User
from schemas.bookmark import (
    BookmarkCreate,
    BookmarkListRequest,
    BookmarkResponse,
    BookmarkUpdate,
)
from services import bookmark_service
from services.exceptions import NotFoundError, ValidationError

router = APIRouter(
    prefix="/bookmark",
    tags=["bookmarks"],
    dependencies=[Depends(get_current_user)],
    route_class=TokenRequiredRoute,
)


@router.post(
    "/list",
    response_model=list[BookmarkResponse],
    response_model_exclude_none=True,
)
async def list_bookmarks(
    data: BookmarkListRequest | None = Body(default=None),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[BookmarkResponse]:
    """
    List the current user's bookmarks, ordered by id.

    - **tags**: optional tag ids; bookmarks having ANY of them are returned.
      Omitted or empty returns every bookmark.
    """
    tag_ids = data.tags if data is not None else []
    bookmarks = await bookmark_service.list_bookmarks(db, current_user.id, tag_ids)
    return [BookmarkResponse.model_validate(b) for b in bookmarks]


@router.post(
    "",
    response_model=BookmarkResponse,
    response_model_exclude_none=True,
    status_code=status.HTTP_201_CREATED,
)
async def create_bookmark(
    data: BookmarkCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """
    Create a new bookmark.

    Returns 400 if the bookmark would be completely empty or a tag id is unknown.
    """
    try:
        bookmark = await bookmark_service.create_bookmark(db, current_user.id, data)
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return BookmarkResponse.model_validate(bookmark)


@router.patch(
    "/{bookmark_id}",
    response_model=BookmarkResponse,
    response_model_exclude_none=True,
)
async def update_bookmark(
    bookmark_id: int,
    data: BookmarkUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> BookmarkResponse:
    """Update a bookmark. Returns 404 if it doesn't exist or isn't yours."""
    try:
        bookmark = await bookmark_service.update_bookmark(
            db, current_user.id, bookmark_id, data,
        )
    except NotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except ValidationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e
    return BookmarkResponse.model_validate(bookmark)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a bookmark.

    Always returns 204: deleting a missing or foreign id is a no-op and does
    not reveal whether the id exists.
    """
    await bookmark_service.delete_bookmark(db, current_user.id, bookmark_id)

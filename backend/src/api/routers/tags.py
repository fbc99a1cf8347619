"""Tag management endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from api.routing import TokenRequiredRoute
from models.user import User
from schemas.tag import TagRequest, TagResponse
from services import tag_service
from services.exceptions import TagAlreadyExistsError, TagNotFoundError

router = APIRouter(
    prefix="/tag",
    tags=["tags"],
    dependencies=[Depends(get_current_user)],
    route_class=TokenRequiredRoute,
)


@router.get("", response_model=list[TagResponse])
async def list_tags(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[TagResponse]:
    """Get all tags of the current user, ordered by id."""
    tags = await tag_service.list_tags(db, current_user.id)
    return [TagResponse.model_validate(t) for t in tags]


@router.post("", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagResponse:
    """
    Create a tag.

    Returns 409 if you already have a tag with this name. Other users' tag
    names don't matter.
    """
    try:
        tag = await tag_service.create_tag(db, current_user.id, data.name)
    except TagAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    return TagResponse.model_validate(tag)


@router.patch("/{tag_id}", response_model=TagResponse)
async def update_tag(
    tag_id: int,
    data: TagRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagResponse:
    """
    Rename a tag.

    Returns 404 if the tag doesn't exist or isn't yours.
    Returns 409 if you already have another tag with the new name.
    """
    try:
        tag = await tag_service.update_tag(db, current_user.id, tag_id, data.name)
    except TagNotFoundError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e
    except TagAlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    return TagResponse.model_validate(tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a tag and detach it from all bookmarks.

    Always returns 204, whether or not the tag existed.
    """
    await tag_service.delete_tag(db, current_user.id, tag_id)

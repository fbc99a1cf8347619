"""Service layer for bookmark CRUD operations."""
import logging

from sqlalchemy import Select, delete, func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.bookmark import Bookmark
from models.tag import bookmark_tags
from schemas.bookmark import BookmarkCreate, BookmarkUpdate
from services.exceptions import BookmarkNotFoundError, EmptyBookmarkError
from services.tag_service import get_owned_tags

logger = logging.getLogger(__name__)


def build_bookmark_list_query(user_id: int, tag_ids: list[int] | None = None) -> Select:
    """
    Build the bookmark listing statement for a user.

    The owner predicate is always applied. When tag ids are given, the
    statement joins the junction table and keeps bookmarks having ANY of the
    tags (OR semantics). DISTINCT collapses bookmarks that match more than one
    of the requested tags. Tag ids belonging to other users simply match none
    of this user's bookmarks.

    Args:
        user_id: Owner of the bookmarks.
        tag_ids: Optional tag ids to filter by. Empty or None means no filter.

    Returns:
        A SELECT ordered by bookmark id ascending.
    """
    query = select(Bookmark).where(Bookmark.user_id == user_id)

    if tag_ids:
        query = (
            query
            .join(bookmark_tags, bookmark_tags.c.bookmark_id == Bookmark.id)
            .where(bookmark_tags.c.tag_id.in_(tag_ids))
            .distinct()
        )

    return query.order_by(Bookmark.id.asc())


async def list_bookmarks(
    db: AsyncSession,
    user_id: int,
    tag_ids: list[int] | None = None,
) -> list[Bookmark]:
    """
    List all of a user's bookmarks, optionally filtered by tags (any match).

    Returns the full result set; there is no pagination.
    """
    result = await db.execute(build_bookmark_list_query(user_id, tag_ids))
    return list(result.scalars().all())


async def get_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> Bookmark | None:
    """
    Get a bookmark by ID, scoped to user.

    Args:
        db: Database session.
        user_id: User ID to scope the bookmark.
        bookmark_id: ID of the bookmark to retrieve.

    Returns:
        The bookmark (with tags loaded) if it exists and is the user's, None otherwise.
    """
    result = await db.execute(
        select(Bookmark)
        .options(selectinload(Bookmark.tag_objects))
        .where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def create_bookmark(
    db: AsyncSession,
    user_id: int,
    data: BookmarkCreate,
) -> Bookmark:
    """
    Create a new bookmark for a user.

    Args:
        db: Database session.
        user_id: User ID to create the bookmark for.
        data: Bookmark creation data.

    Returns:
        The created bookmark.

    Raises:
        EmptyBookmarkError: If name, description, link and tags are all empty.
        UnknownTagsError: If a tag id is not one of the user's tags.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    if data.is_empty():
        raise EmptyBookmarkError()

    tag_objects = await get_owned_tags(db, user_id, data.tags)
    bookmark = Bookmark(
        user_id=user_id,
        name=data.name,
        link=data.link,
        description=data.description,
    )
    bookmark.tag_objects = tag_objects
    db.add(bookmark)
    await db.flush()
    await db.refresh(bookmark)
    # Ensure tag_objects is loaded for the caller
    await db.refresh(bookmark, attribute_names=["tag_objects"])
    return bookmark


async def update_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
    data: BookmarkUpdate,
) -> Bookmark:
    """
    Partially update a bookmark.

    Only fields set in ``data`` change. If ``tags`` is set, the tag set is
    replaced wholesale. Concurrent updates are last-write-wins.

    Raises:
        BookmarkNotFoundError: If the bookmark doesn't exist or isn't the user's.
        UnknownTagsError: If a tag id is not one of the user's tags.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    bookmark = await get_bookmark(db, user_id, bookmark_id)
    if bookmark is None:
        raise BookmarkNotFoundError(bookmark_id)

    update_data = data.model_dump(exclude_unset=True)

    # Handle tag updates separately via junction table
    new_tags = update_data.pop("tags", None)
    if new_tags is not None:
        bookmark.tag_objects = await get_owned_tags(db, user_id, new_tags)

    for field, value in update_data.items():
        setattr(bookmark, field, value)

    bookmark.updated_at = func.clock_timestamp()
    await db.flush()
    await db.refresh(bookmark)
    await db.refresh(bookmark, attribute_names=["tag_objects"])
    return bookmark


async def delete_bookmark(
    db: AsyncSession,
    user_id: int,
    bookmark_id: int,
) -> bool:
    """
    Permanently delete a bookmark.

    The owner is part of the DELETE statement, so a bookmark id belonging to
    another user matches nothing and that user's data is untouched.

    Returns:
        True if deleted, False if not found (callers treat both as success).
    """
    result = await db.execute(
        delete(Bookmark).where(
            Bookmark.id == bookmark_id,
            Bookmark.user_id == user_id,
        ),
    )
    deleted = result.rowcount > 0
    if not deleted:
        logger.debug("Delete of bookmark %s by user %s matched no row", bookmark_id, user_id)
    return deleted

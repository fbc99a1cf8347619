"""Service layer for tag operations."""
from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.tag import Tag
from services.exceptions import TagAlreadyExistsError, TagNotFoundError, UnknownTagsError


async def list_tags(
    db: AsyncSession,
    user_id: int,
) -> list[Tag]:
    """
    Get all tags for a user.

    Args:
        db: Database session.
        user_id: User ID to scope tags.

    Returns:
        List of tags ordered by id.
    """
    result = await db.execute(
        select(Tag).where(Tag.user_id == user_id).order_by(Tag.id),
    )
    return list(result.scalars().all())


async def get_tag(
    db: AsyncSession,
    user_id: int,
    tag_id: int,
) -> Tag | None:
    """Get a tag by ID, scoped to user."""
    result = await db.execute(
        select(Tag).where(
            Tag.id == tag_id,
            Tag.user_id == user_id,
        ),
    )
    return result.scalar_one_or_none()


async def get_tag_by_name(
    db: AsyncSession,
    user_id: int,
    tag_name: str,
) -> Tag | None:
    """Get a tag by exact name for a user."""
    result = await db.execute(
        select(Tag).where(
            Tag.user_id == user_id,
            Tag.name == tag_name,
        ),
    )
    return result.scalar_one_or_none()


async def get_owned_tags(
    db: AsyncSession,
    user_id: int,
    tag_ids: list[int],
) -> list[Tag]:
    """
    Resolve tag ids to the user's own Tag objects for attaching to a bookmark.

    Args:
        db: Database session.
        user_id: User ID to scope tags.
        tag_ids: Tag ids supplied by the client.

    Returns:
        Tags in the order the ids were given.

    Raises:
        UnknownTagsError: If any id doesn't exist or belongs to another user.
    """
    if not tag_ids:
        return []

    result = await db.execute(
        select(Tag).where(
            Tag.user_id == user_id,
            Tag.id.in_(tag_ids),
        ),
    )
    found = {tag.id: tag for tag in result.scalars()}

    missing = [tag_id for tag_id in tag_ids if tag_id not in found]
    if missing:
        raise UnknownTagsError(missing)
    return [found[tag_id] for tag_id in tag_ids]


async def create_tag(
    db: AsyncSession,
    user_id: int,
    name: str,
) -> Tag:
    """
    Create a tag for a user.

    Raises:
        TagAlreadyExistsError: If the user already has a tag with this name.

    Note:
        Does not commit. Caller (session generator) handles commit at request end.
    """
    # Early check for a clean error; the unique constraint is the backstop
    if await get_tag_by_name(db, user_id, name) is not None:
        raise TagAlreadyExistsError(name)

    tag = Tag(user_id=user_id, name=name)
    db.add(tag)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        # Handle race condition: another request created the tag between check and flush
        if "uq_tags_user_id_name" in str(e):
            raise TagAlreadyExistsError(name) from e
        raise
    await db.refresh(tag)
    return tag


async def update_tag(
    db: AsyncSession,
    user_id: int,
    tag_id: int,
    name: str,
) -> Tag:
    """
    Rename a tag.

    Args:
        db: Database session.
        user_id: User ID to scope the tag.
        tag_id: ID of the tag to rename.
        name: New name for the tag.

    Returns:
        The updated Tag object.

    Raises:
        TagNotFoundError: If the tag doesn't exist or isn't the user's.
        TagAlreadyExistsError: If another of the user's tags has the new name.
    """
    tag = await get_tag(db, user_id, tag_id)
    if tag is None:
        raise TagNotFoundError(tag_id)

    if tag.name == name:
        return tag

    existing = await get_tag_by_name(db, user_id, name)
    if existing is not None:
        raise TagAlreadyExistsError(name)

    tag.name = name
    tag.updated_at = func.clock_timestamp()
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        if "uq_tags_user_id_name" in str(e):
            raise TagAlreadyExistsError(name) from e
        raise
    await db.refresh(tag)
    return tag


async def delete_tag(
    db: AsyncSession,
    user_id: int,
    tag_id: int,
) -> bool:
    """
    Delete a tag. Junction table entries cascade automatically.

    The owner is part of the DELETE statement itself, so another user's tag
    is never touched.

    Returns:
        True if a tag was deleted, False if none matched.
    """
    result = await db.execute(
        delete(Tag).where(
            Tag.id == tag_id,
            Tag.user_id == user_id,
        ),
    )
    return result.rowcount > 0

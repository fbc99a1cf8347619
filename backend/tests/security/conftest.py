"""
Security test fixtures.

These fixtures enable testing IDOR (Insecure Direct Object Reference)
scenarios: the `other_user` owns a bookmark and a tag, and requests are made
with the `test_user`'s token against those ids.
"""
import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from models.bookmark import Bookmark
from models.tag import Tag
from models.user import User
from schemas.bookmark import BookmarkCreate
from services import bookmark_service, tag_service


@pytest.fixture
async def victim_tag(db_session: AsyncSession, other_user: tuple[User, str]) -> Tag:
    """A tag belonging to the other user."""
    user, _ = other_user
    return await tag_service.create_tag(db_session, user.id, "private")


@pytest.fixture
async def victim_bookmark(
    db_session: AsyncSession,
    other_user: tuple[User, str],
    victim_tag: Tag,
) -> Bookmark:
    """A tagged bookmark belonging to the other user."""
    user, _ = other_user
    return await bookmark_service.create_bookmark(
        db_session,
        user.id,
        BookmarkCreate(
            name="Private bookmark",
            link="https://private.example.com",
            description="Only the owner should see this",
            tags=[victim_tag.id],
        ),
    )

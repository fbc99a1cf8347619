"""FastAPI dependencies for injection."""
from core.auth import get_current_user
from db.session import get_async_session

__all__ = [
    "get_async_session",
    "get_current_user",
]

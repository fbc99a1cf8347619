"""Shared exceptions for service layer operations."""


class ValidationError(Exception):
    """Raised when input is insufficient or refers to things the caller can't use."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class NotFoundError(Exception):
    """
    Raised when a resource is absent or not owned by the caller.

    The two cases are deliberately indistinguishable so that ids belonging to
    other users can't be probed.
    """

    def __init__(self, message: str) -> None:
        super().__init__(message)


class ConflictError(Exception):
    """Raised when an operation would violate a uniqueness rule."""

    def __init__(self, message: str) -> None:
        super().__init__(message)


class InvalidCredentialsError(Exception):
    """Raised when a password does not match the stored hash."""

    def __init__(self) -> None:
        super().__init__("Invalid credentials")


class EmptyBookmarkError(ValidationError):
    """Raised when a bookmark would have no name, description, link or tags."""

    def __init__(self) -> None:
        super().__init__("You cannot create a completely empty bookmark")


class UnknownTagsError(ValidationError):
    """Raised when tag ids don't exist or belong to another user."""

    def __init__(self, tag_ids: list[int]) -> None:
        self.tag_ids = tag_ids
        ids = ", ".join(str(tag_id) for tag_id in tag_ids)
        super().__init__(f"Unknown tag ids: {ids}")


class BookmarkNotFoundError(NotFoundError):
    """Raised when a bookmark is not found for the user."""

    def __init__(self, bookmark_id: int) -> None:
        self.bookmark_id = bookmark_id
        super().__init__("Bookmark not found")


class TagNotFoundError(NotFoundError):
    """Raised when a tag is not found for the user."""

    def __init__(self, tag_id: int) -> None:
        self.tag_id = tag_id
        super().__init__("Tag not found")


class UserNotFoundError(NotFoundError):
    """Raised when no user is registered with the given email."""

    def __init__(self) -> None:
        super().__init__("User not found")


class TagAlreadyExistsError(ConflictError):
    """Raised when the user already has a tag with this name."""

    def __init__(self, tag_name: str) -> None:
        self.tag_name = tag_name
        super().__init__(f"Tag '{tag_name}' already exists")


class EmailAlreadyRegisteredError(ConflictError):
    """Raised when registering an email that is already in use."""

    def __init__(self) -> None:
        super().__init__("Email is already registered")

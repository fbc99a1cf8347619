"""Password hashing and session token primitives."""
import hashlib
import secrets

import bcrypt

from core.config import get_settings

# bcrypt only looks at the first 72 bytes of its input
MAX_PASSWORD_BYTES = 72


def hash_password(password: str) -> str:
    """Hash a password with bcrypt using the configured work factor."""
    salt = bcrypt.gensalt(rounds=get_settings().bcrypt_rounds)
    return bcrypt.hashpw(password.encode(), salt).decode()


def verify_password(password: str, password_hash: str) -> bool:
    """
    Check a password against a bcrypt hash (constant-time inside bcrypt).

    A password longer than bcrypt accepts can never have been registered, so
    it is a mismatch rather than an error.
    """
    encoded = password.encode()
    if len(encoded) > MAX_PASSWORD_BYTES:
        return False
    return bcrypt.checkpw(encoded, password_hash.encode())


def generate_token() -> tuple[str, str]:
    """
    Generate an opaque session token.

    Returns:
        Tuple of (plaintext_token, token_hash). Only the hash is stored.
    """
    plaintext = secrets.token_urlsafe(32)
    return plaintext, hash_token(plaintext)


def hash_token(token: str) -> str:
    """Hash a token for comparison against stored hashes."""
    return hashlib.sha256(token.encode()).hexdigest()

"""Password hashing and access token helpers."""
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from core.config import Settings

# bcrypt only looks at the first 72 bytes of a password
BCRYPT_MAX_BYTES = 72


def _password_bytes(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


def hash_password(password: str, rounds: int = 12) -> str:
    """Hash a password with a fresh bcrypt salt."""
    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(_password_bytes(password), salt).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    """Check a plaintext password against a stored bcrypt hash."""
    try:
        return bcrypt.checkpw(_password_bytes(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed hash in storage
        return False


def create_access_token(
    user_id: int,
    email: str,
    settings: Settings,
    now: datetime | None = None,
) -> str:
    """
    Create a signed access token for a user.

    Claims:
        sub: The user id as a string (JWT requires a string subject).
        email: The user's email at signin time (informational only).
        iat / exp: Issue and expiry timestamps.
    """
    issued_at = now or datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "email": email,
        "iat": issued_at,
        "exp": issued_at + timedelta(minutes=settings.access_token_expire_minutes),
    }
    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str, settings: Settings) -> dict:
    """
    Verify a token's signature and expiry and return its claims.

    Raises:
        jwt.PyJWTError: If the token is malformed, tampered with, expired, or
            missing the sub/exp claims.
    """
    return jwt.decode(
        token,
        settings.jwt_secret,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["sub", "exp"]},
    )

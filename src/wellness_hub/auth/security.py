"""Password hashing and session tokens."""

from datetime import datetime, timedelta, timezone

import bcrypt
from jose import JWTError, jwt

ALGORITHM = "HS256"
DEFAULT_EXPIRY = timedelta(minutes=60)


def hash_password(password: str) -> str:
    """Hash a password with bcrypt."""
    # bcrypt only looks at the first 72 bytes
    truncated = password.encode("utf-8")[:72]
    return bcrypt.hashpw(truncated, bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, hashed: str) -> bool:
    """Check a password against a bcrypt hash."""
    truncated = password.encode("utf-8")[:72]
    return bcrypt.checkpw(truncated, hashed.encode("utf-8"))


def create_access_token(
    email: str,
    user_id: int,
    secret_key: str,
    expires_delta: timedelta = DEFAULT_EXPIRY,
) -> str:
    """Create a signed session token for a user."""
    payload = {
        "sub": email,
        "user_id": user_id,
        "exp": datetime.now(timezone.utc) + expires_delta,
    }
    return jwt.encode(payload, secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, secret_key: str) -> dict | None:
    """Decode a session token.

    Returns the payload, or None if the token is invalid, expired or signed
    with another key.
    """
    try:
        payload = jwt.decode(token, secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None

    if payload.get("sub") is None or payload.get("user_id") is None:
        return None
    return payload

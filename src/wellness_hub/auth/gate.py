"""Identity gate: session lookup for every protected action."""

import logging
from datetime import timedelta

from fastapi import Request

from ..config import Settings
from ..db.repositories import UserRepository
from ..errors import Unauthenticated
from ..models.user import User
from .security import create_access_token, decode_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

SESSION_COOKIE = "access_token"


async def register(
    users: UserRepository, email: str, password: str, display_name: str = ""
) -> User:
    """Create a new account. Raises ValueError for bad input or a taken email."""
    email = email.strip().lower()
    if "@" not in email:
        raise ValueError("Please enter a valid email address")
    if len(password) < 8:
        raise ValueError("Password must be at least 8 characters")

    user = await users.create(
        User(email=email, password_hash=hash_password(password), display_name=display_name.strip())
    )
    logger.info("Registered user %s", user.id)
    return user


async def authenticate(users: UserRepository, email: str, password: str) -> User:
    """Check credentials, raising Unauthenticated on mismatch."""
    user = await users.get_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed sign-in for %s", email)
        raise Unauthenticated("Invalid email or password.")
    return user


def issue_token(user: User, settings: Settings) -> str:
    """Create a session token for a signed-in user."""
    return create_access_token(
        user.email,
        user.id,
        secret_key=settings.secret_key,
        expires_delta=timedelta(minutes=settings.access_token_expire_minutes),
    )


async def resolve_session(
    users: UserRepository, token: str | None, secret_key: str
) -> User | None:
    """Resolve a session token to its user.

    The user row is re-read every time, so deleted accounts and expired
    tokens are rejected on the next action.
    """
    if not token:
        return None
    payload = decode_access_token(token, secret_key)
    if payload is None:
        return None
    user = await users.get(payload["user_id"])
    if user is None or user.email != payload["sub"]:
        return None
    return user


async def get_session(request: Request) -> User | None:
    """FastAPI dependency: the current user, or None."""
    users = UserRepository(request.app.state.db_path)
    return await resolve_session(
        users,
        request.cookies.get(SESSION_COOKIE),
        request.app.state.settings.secret_key,
    )


async def require_user(request: Request) -> User:
    """FastAPI dependency: the current user, or raise Unauthenticated."""
    user = await get_session(request)
    if user is None:
        raise Unauthenticated()
    return user

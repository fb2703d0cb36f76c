"""Authentication and the identity gate."""

from .gate import (
    SESSION_COOKIE,
    authenticate,
    get_session,
    issue_token,
    register,
    require_user,
    resolve_session,
)
from .security import create_access_token, decode_access_token, hash_password, verify_password

__all__ = [
    "SESSION_COOKIE",
    "authenticate",
    "create_access_token",
    "decode_access_token",
    "get_session",
    "hash_password",
    "issue_token",
    "register",
    "require_user",
    "resolve_session",
    "verify_password",
]

"""
Authentication - identity provider interface and FastAPI dependencies.

The API layer never checks passwords or tokens itself; it asks an
AuthProvider. LocalAuthProvider checks bcrypt hashes held in the store
and issues signed JWT sessions. A managed identity service can be
plugged in by implementing the same three methods.

A session token is read from the Authorization: Bearer header first,
then from the session cookie.
"""

import logging
from abc import ABC, abstractmethod
from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from jobreel.core.config import get_settings
from jobreel.core.security import create_access_token, decode_token, verify_password
from jobreel.models import User
from jobreel.storage import Storage, get_storage

logger = logging.getLogger(__name__)

settings = get_settings()

# Bearer token extractor (cookie sessions are the fallback)
bearer_scheme = HTTPBearer(auto_error=False)


class AuthProvider(ABC):

    @abstractmethod
    def authenticate(self, username: str, password: str) -> Optional[User]:
        """Return the user for valid credentials, else None."""

    @abstractmethod
    def issue_session(self, user: User) -> str:
        """Create a session token for the user."""

    @abstractmethod
    def resolve_session(self, token: str) -> Optional[int]:
        """Return the user id a session token belongs to, else None."""


class LocalAuthProvider(AuthProvider):
    """Username/password sign-in against the store, JWT sessions."""

    def __init__(self, storage: Storage):
        self.storage = storage

    def authenticate(self, username: str, password: str) -> Optional[User]:
        user = self.storage.get_user_by_username(username)
        if user is None or not verify_password(password, user.password):
            logger.info("Failed sign-in for username %r", username)
            return None
        return user

    def issue_session(self, user: User) -> str:
        return create_access_token(data={"sub": str(user.id), "user_type": user.user_type.value})

    def resolve_session(self, token: str) -> Optional[int]:
        payload = decode_token(token)
        if not payload or not payload.get("sub"):
            return None
        try:
            return int(payload["sub"])
        except (TypeError, ValueError):
            return None


def get_auth_provider(storage: Storage = Depends(get_storage)) -> AuthProvider:
    return LocalAuthProvider(storage)


def get_session_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is not None:
        return credentials.credentials
    return request.cookies.get(settings.session_cookie_name)


async def get_optional_user(
    token: Optional[str] = Depends(get_session_token),
    auth: AuthProvider = Depends(get_auth_provider),
    storage: Storage = Depends(get_storage),
) -> Optional[User]:
    """Dependency - the session user, or None when there is no valid session."""
    if not token:
        return None
    user_id = auth.resolve_session(token)
    if user_id is None:
        return None
    return storage.get_user(user_id)


async def get_current_user(user: Optional[User] = Depends(get_optional_user)) -> User:
    """
    FastAPI dependency - Get current authenticated user.

    Usage:
        @router.get("/protected")
        async def route(user: User = Depends(get_current_user)):
            return user
    """
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def set_session_cookie(response, token: str) -> None:
    response.set_cookie(
        key=settings.session_cookie_name,
        value=token,
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
        max_age=settings.jwt_expire_minutes * 60,
    )


def clear_session_cookie(response) -> None:
    response.delete_cookie(key=settings.session_cookie_name)

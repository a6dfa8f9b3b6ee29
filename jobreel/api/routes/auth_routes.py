"""
Authentication Routes

POST /auth/register - Register new user and start a session
POST /auth/login - Login and start a session
POST /auth/logout - End the session
"""

from fastapi import APIRouter, HTTPException, Depends, Response

from jobreel.core.auth import (
    AuthProvider, get_auth_provider, set_session_cookie, clear_session_cookie
)
from jobreel.core.security import hash_password
from jobreel.storage import Storage, get_storage
from jobreel.schemas.schemas import (
    RegisterRequest, LoginRequest, AuthResponse, UserResponse, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _start_session(response: Response, auth: AuthProvider, user) -> AuthResponse:
    token = auth.issue_session(user)
    set_session_cookie(response, token)
    return AuthResponse(user=UserResponse.model_validate(user), access_token=token)


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(
    request: RegisterRequest,
    response: Response,
    storage: Storage = Depends(get_storage),
    auth: AuthProvider = Depends(get_auth_provider),
):
    """
    Register a new user account.

    The session starts right away (cookie + token in the body).
    """
    if storage.get_user_by_username(request.username):
        raise HTTPException(status_code=400, detail="Username already taken")
    if storage.get_user_by_email(request.email):
        raise HTTPException(status_code=400, detail="Email already in use")

    data = request.model_dump(exclude={"password"})
    data["password"] = hash_password(request.password)
    user = storage.create_user(data)

    return _start_session(response, auth, user)


@router.post("/login", response_model=AuthResponse)
async def login(
    request: LoginRequest,
    response: Response,
    auth: AuthProvider = Depends(get_auth_provider),
):
    """
    Login and start a session.

    Browsers keep the session cookie; other clients send
    Authorization: Bearer <access_token>.
    """
    user = auth.authenticate(request.username, request.password)
    if not user:
        raise HTTPException(status_code=401, detail="Invalid username or password")

    return _start_session(response, auth, user)


@router.post("/logout", response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie."""
    clear_session_cookie(response)
    return MessageResponse(message="Logged out successfully")

"""JWT login, registration, password change and auth dependencies (get_current_user, require_admin)."""

from typing import Annotated

import jwt
from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.api.v1.deps import get_store, to_http_exception
from app.core.security import create_access_token, decode_access_token
from app.schemas.auth import (
    LoginRequest,
    PasswordUpdateRequest,
    RegisterRequest,
    TokenResponse,
)
from app.schemas.entities import PublicUser, User
from app.services.booking_store import BookingStore
from app.services.errors import BookingServiceError

router = APIRouter()
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


@router.post("", response_model=TokenResponse)
async def login(
    body: LoginRequest,
    store: Annotated[BookingStore, Depends(get_store)],
) -> TokenResponse:
    """
    Authenticate with email and password; returns a JWT access token.
    Include the token in the Authorization header as: Bearer <access_token>
    """
    user = await store.authenticate(body.email, body.password)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password.",
        )
    token = create_access_token(sub=user.id, role=user.role)
    return TokenResponse(access_token=token, token_type="bearer")


@router.post("/register", response_model=PublicUser, status_code=status.HTTP_201_CREATED)
async def register(
    body: RegisterRequest,
    store: Annotated[BookingStore, Depends(get_store)],
) -> PublicUser:
    """Create a regular user account. 409 if the email is already registered (any case)."""
    try:
        user = await store.register(body.name, body.email, body.password)
    except BookingServiceError as e:
        raise to_http_exception(e) from e
    return PublicUser.from_user(user)


async def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> User:
    """Dependency: require valid Bearer JWT and return the current user. Raises 401 if missing or invalid."""
    if credentials is None:
        raise _unauthorized("Not authenticated")
    try:
        payload = decode_access_token(credentials.credentials)
    except jwt.PyJWTError:
        raise _unauthorized("Invalid or expired token")
    sub = payload.get("sub")
    if not sub:
        raise _unauthorized("Invalid token payload")
    try:
        user_id = int(sub)
    except (TypeError, ValueError):
        raise _unauthorized("Invalid token payload")
    user = await store.get_user(user_id)
    if user is None:
        raise _unauthorized("User not found")
    return user


def require_admin(
    current_user: Annotated[User, Depends(get_current_user)],
) -> User:
    """Dependency: require authenticated user with role 'admin'. Raises 403 for non-admin."""
    if current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


@router.get("/me", response_model=PublicUser)
def read_me(
    current_user: Annotated[User, Depends(get_current_user)],
) -> PublicUser:
    """Return the authenticated user (no password hash)."""
    return PublicUser.from_user(current_user)


@router.post("/password", response_model=PublicUser)
async def update_password(
    body: PasswordUpdateRequest,
    current_user: Annotated[User, Depends(get_current_user)],
    store: Annotated[BookingStore, Depends(get_store)],
) -> PublicUser:
    """
    Set a new password for the account with this email (no email is sent).

    Users may change their own password; admins may reset anyone's. 403 otherwise.
    """
    is_self = body.email.strip().lower() == current_user.email.strip().lower()
    if not is_self and current_user.role != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="You can only change your own password",
        )
    try:
        user = await store.update_password(body.email, body.new_password)
    except BookingServiceError as e:
        raise to_http_exception(e) from e
    return PublicUser.from_user(user)

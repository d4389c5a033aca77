"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, Field


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str = Field(..., min_length=1, max_length=320, description="Account email (case-insensitive)")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class RegisterRequest(BaseModel):
    """New account details. Registration always creates a 'user' role account."""

    name: str = Field(..., min_length=1, max_length=255, description="Display name")
    email: str = Field(..., min_length=3, max_length=320, description="Account email")
    password: str = Field(..., min_length=1, max_length=128, description="Password")


class PasswordUpdateRequest(BaseModel):
    """Set a new password for the account with this email."""

    email: str = Field(..., min_length=1, max_length=320)
    new_password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseModel):
    """JWT access token returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(default="bearer", description="Token type")

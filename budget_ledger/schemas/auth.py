"""Request/response schemas for auth endpoints."""

from pydantic import BaseModel, ConfigDict, Field


class RegisterRequest(BaseModel):
    """Registration body. Unknown or missing role falls back to 'user'."""

    name: str | None = Field(default=None, description="Display name")
    email: str | None = Field(default=None, description="Email (unique, case-sensitive)")
    password: str | None = Field(default=None, description="Password (6-128 chars)")
    role: str | None = Field(default=None, description="admin, user or read-only")


class LoginRequest(BaseModel):
    """Credentials for login."""

    email: str | None = Field(default=None, description="Email")
    password: str | None = Field(default=None, description="Password")


class UserProfile(BaseModel):
    """Public user profile (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    email: str
    role: str


class LoginResponse(BaseModel):
    """JWT returned after successful login, plus the public profile."""

    token: str = Field(..., description="JWT access token (send as Bearer)")
    user: UserProfile


class CurrentUser(BaseModel):
    """Claims embedded in a verified token (id, role, email)."""

    id: int
    role: str
    email: str

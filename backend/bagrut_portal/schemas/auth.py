"""Authentication schemas."""

from pydantic import Field

from bagrut_portal.schemas.base import BaseSchema
from bagrut_portal.schemas.user import UserRead


class SignInRequest(BaseSchema):
    """Email/password credentials."""

    email: str = Field(..., min_length=1, max_length=255)
    password: str = Field(..., min_length=1, max_length=128)


class TokenResponse(BaseSchema):
    """Response schema for successful authentication."""

    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., description="Token expiry in seconds")
    user: UserRead

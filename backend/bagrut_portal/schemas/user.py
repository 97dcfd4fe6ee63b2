"""User schemas."""

from datetime import datetime
from enum import Enum as PyEnum

from pydantic import EmailStr, Field

from bagrut_portal.schemas.base import BaseSchema


class UserRole(str, PyEnum):
    """Portal role of a user."""

    USER = "user"
    ADMIN = "admin"


class UserRead(BaseSchema):
    """Schema for reading user data. Never carries the password."""

    id: str
    email: str
    first_name: str = ""
    last_name: str = ""
    birth_date: str = ""
    role: UserRole = UserRole.USER
    created_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class UserRecord(UserRead):
    """A user as persisted in the users collection (plaintext password)."""

    password: str = ""

    def public(self) -> UserRead:
        return UserRead.model_validate(self.model_dump(exclude={"password"}))


class UserCreate(BaseSchema):
    """Schema for sign up and for admin-created users."""

    email: EmailStr
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field("", max_length=100)
    last_name: str = Field("", max_length=100)
    birth_date: str = Field("", max_length=10, description="ISO date, YYYY-MM-DD")
    role: UserRole = UserRole.USER


class UserUpdate(BaseSchema):
    """Schema for updating a user profile. All fields optional."""

    email: EmailStr | None = None
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)
    birth_date: str | None = Field(None, max_length=10)


class UserAdminUpdate(UserUpdate):
    """Admin profile update, which may also change the role."""

    role: UserRole | None = None


class PasswordUpdate(BaseSchema):
    """Schema for changing the current user's password."""

    password: str = Field(..., min_length=6, max_length=128)

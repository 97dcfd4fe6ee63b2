"""
Authentication Routes

Endpoints:
- POST /auth/signin - Email/password sign in, issues a session JWT
- POST /auth/signup - Register a new user (sends the welcome message)
- POST /auth/logout - Clear the caller's session
- GET /auth/me - Get current user profile
- PATCH /auth/me - Update current user profile
- PUT /auth/me/password - Change current user password
- GET /auth/session - Cached session user, when it is the caller

Auth Flow:
1. Frontend POSTs email/password to /auth/signin
2. Backend matches the credentials against the users collection
3. Backend caches the user as the current session user
4. Backend returns JWT (in cookie and response body)
"""

from fastapi import APIRouter, Response, status

from bagrut_portal.api.deps import CurrentUser, Store, create_access_token, unwrap
from bagrut_portal.config import get_settings
from bagrut_portal.schemas import (
    PasswordUpdate,
    SignInRequest,
    TokenResponse,
    UserCreate,
    UserRead,
    UserRole,
    UserUpdate,
)
from bagrut_portal.services import auth as auth_service
from bagrut_portal.services import users as users_service

router = APIRouter(prefix="/auth", tags=["auth"])
settings = get_settings()


def _cookie_options() -> dict:
    # For cross-domain deployments use samesite="none" + secure=True
    return {
        "httponly": True,
        "secure": settings.cookie_cross_domain or settings.environment != "development",
        "samesite": "none" if settings.cookie_cross_domain else "lax",
    }


@router.post("/signin", response_model=TokenResponse)
async def sign_in(
    request: SignInRequest,
    response: Response,
    store: Store,
) -> TokenResponse:
    """Exchange email/password for a session JWT."""
    user = unwrap(await auth_service.sign_in(store, request.email, request.password))
    await auth_service.cache_session_user(store, user)

    access_token = create_access_token(user.id)
    expires_in = settings.jwt_expire_minutes * 60
    response.set_cookie(
        key="access_token",
        value=access_token,
        max_age=expires_in,
        **_cookie_options(),
    )

    return TokenResponse(access_token=access_token, expires_in=expires_in, user=user)


@router.post("/signup", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def sign_up(data: UserCreate, store: Store) -> UserRead:
    """
    Register a new user.

    Self-registration always creates a regular user; admins are added
    through /users.
    """
    data = data.model_copy(update={"role": UserRole.USER})
    return unwrap(await auth_service.sign_up(store, data))


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(response: Response, current_user: CurrentUser, store: Store) -> None:
    """
    Clear the authentication session.

    This clears the cookie, and the cached session user when it is the
    caller. A JWT stored elsewhere by the client stays valid until expiry.
    """
    cached = await auth_service.get_session_user(store)
    if cached is not None and cached.id == current_user.id:
        await auth_service.clear_session_user(store)
    response.delete_cookie(key="access_token", **_cookie_options())


@router.get("/me", response_model=UserRead)
async def get_me(current_user: CurrentUser) -> UserRead:
    """Get the current authenticated user's profile."""
    return current_user


@router.patch("/me", response_model=UserRead)
async def update_me(data: UserUpdate, current_user: CurrentUser, store: Store) -> UserRead:
    """Update the current user's profile, keeping the session cache in step."""
    updated = unwrap(
        await users_service.update_profile(store, current_user.id, data.model_dump(exclude_unset=True))
    )

    cached = await auth_service.get_session_user(store)
    if cached is not None and cached.id == updated.id:
        await auth_service.cache_session_user(store, updated)
    return updated


@router.put("/me/password", status_code=status.HTTP_204_NO_CONTENT)
async def update_my_password(data: PasswordUpdate, current_user: CurrentUser, store: Store) -> None:
    """Change the current user's password."""
    unwrap(await users_service.update_password(store, current_user.id, data.password))


@router.get("/session", response_model=UserRead | None)
async def get_session(current_user: CurrentUser, store: Store) -> UserRead | None:
    """Return the cached session user if it is the caller, else null."""
    cached = await auth_service.get_session_user(store)
    if cached is None or cached.id != current_user.id:
        return None
    return cached

"""
FastAPI Dependencies for Authentication, Authorization and storage access.

Key patterns:
1. get_current_user: Extracts and validates JWT, returns the user record
2. require_admin: Gate for catalog and user administration endpoints
3. unwrap: Turns a CRUD Result into data or an HTTPException

Security model:
- JWT stored in HttpOnly cookie or sent as Authorization: Bearer <token>
- The token only carries the user id; the user is re-read from the users
  collection on every request, so deleted users lose access immediately
"""

import logging
from collections.abc import Iterable
from datetime import datetime, timedelta, timezone
from typing import Annotated, TypeVar

from fastapi import Cookie, Depends, Header, HTTPException, status
from jose import JWTError, jwt

from bagrut_portal.config import get_settings, sanitize_error
from bagrut_portal.schemas import UserRead, UserRole
from bagrut_portal.services import ErrorKind, Result
from bagrut_portal.services.users import get_user
from bagrut_portal.storage import FileBlobStore, LocalStore, get_file_store, get_local_store

logger = logging.getLogger(__name__)

settings = get_settings()

T = TypeVar("T")


# =============================================================================
# STORAGE DEPENDENCIES
# =============================================================================


def get_store() -> LocalStore:
    """FastAPI dependency for the local store (overridden in tests)."""
    return get_local_store()


def get_files() -> FileBlobStore:
    """FastAPI dependency for the file blob store (overridden in tests)."""
    return get_file_store()


Store = Annotated[LocalStore, Depends(get_store)]
Files = Annotated[FileBlobStore, Depends(get_files)]


async def discard_files(files: FileBlobStore, urls: Iterable[str | None], *, owner: str) -> None:
    """
    Delete stored files of a record that is already gone.

    Failures are logged, not raised: the record deletion has succeeded.
    """
    for url in urls:
        try:
            await files.delete_file(url)
        except Exception:
            logger.exception("Failed to delete file %s of %s", url, owner)


# =============================================================================
# RESULT HANDLING
# =============================================================================


_STATUS_BY_KIND = {
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.ALREADY_EXISTS: status.HTTP_409_CONFLICT,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID: status.HTTP_400_BAD_REQUEST,
    ErrorKind.QUOTA_EXCEEDED: status.HTTP_507_INSUFFICIENT_STORAGE,
    ErrorKind.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def unwrap(result: Result[T]) -> T:
    """
    Return the data of a successful Result, or raise the matching HTTP error.

    Storage failures keep their message in development only.
    """
    if result.error is None:
        return result.data

    error = result.error
    detail = error.message
    if error.kind in (ErrorKind.STORAGE, ErrorKind.QUOTA_EXCEEDED):
        detail = sanitize_error(error.message, generic_message="Storage operation failed.")
    raise HTTPException(status_code=_STATUS_BY_KIND[error.kind], detail=detail)


# =============================================================================
# JWT UTILITIES
# =============================================================================


def create_access_token(user_id: str) -> str:
    """
    Create a JWT access token for a user.

    Token payload contains:
    - sub: user id (standard JWT subject claim)
    - exp: expiration timestamp
    """
    expire = datetime.now(timezone.utc) + timedelta(minutes=settings.jwt_expire_minutes)
    payload = {
        "sub": user_id,
        "exp": expire,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_access_token(token: str) -> str | None:
    """
    Decode and validate a JWT access token.

    Returns the user id if valid, None if invalid/expired.
    """
    try:
        payload = jwt.decode(
            token,
            settings.jwt_secret_key,
            algorithms=[settings.jwt_algorithm],
        )
    except JWTError:
        return None
    return payload.get("sub")


# =============================================================================
# AUTHENTICATION DEPENDENCIES
# =============================================================================


async def get_token_from_request(
    authorization: Annotated[str | None, Header()] = None,
    access_token: Annotated[str | None, Cookie()] = None,
) -> str:
    """
    Extract JWT token from request.

    Supports two methods (in order of preference):
    1. HttpOnly cookie named 'access_token'
    2. Authorization header: 'Bearer <token>'
    """
    if access_token:
        return access_token

    if authorization:
        parts = authorization.split()
        if len(parts) == 2 and parts[0].lower() == "bearer":
            return parts[1]

    raise HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Not authenticated",
        headers={"WWW-Authenticate": "Bearer"},
    )


async def get_current_user(
    token: Annotated[str, Depends(get_token_from_request)],
    store: Store,
) -> UserRead:
    """
    Validate JWT and return the current authenticated user.

    Raises 401 if:
    - Token is missing, invalid, or expired
    - User no longer exists in the users collection
    """
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )

    user_id = decode_access_token(token)
    if user_id is None:
        raise credentials_exception

    result = await get_user(store, user_id)
    if result.error is not None:
        if result.error.kind == ErrorKind.NOT_FOUND:
            raise credentials_exception
        unwrap(result)

    return result.data


CurrentUser = Annotated[UserRead, Depends(get_current_user)]


async def require_admin(current_user: CurrentUser) -> UserRead:
    """Allow only admins through."""
    if current_user.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return current_user


AdminUser = Annotated[UserRead, Depends(require_admin)]


# =============================================================================
# AUTHORIZATION HELPERS
# =============================================================================


def require_owner_or_admin(owner_ids: str | tuple[str, ...], current_user: UserRead) -> None:
    """
    Verify the current user owns the resource, or is an admin.

    Returns 404 rather than 403 so other users' resources are not revealed.
    """
    if isinstance(owner_ids, str):
        owner_ids = (owner_ids,)
    if current_user.role == UserRole.ADMIN or current_user.id in owner_ids:
        return
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Resource not found")

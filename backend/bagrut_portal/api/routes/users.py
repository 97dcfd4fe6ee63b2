"""User administration routes (admin only)."""

from fastapi import APIRouter, HTTPException, status

from bagrut_portal.api.deps import AdminUser, Store, unwrap
from bagrut_portal.schemas import UserAdminUpdate, UserCreate, UserRead
from bagrut_portal.services import users as users_service

router = APIRouter(prefix="/users", tags=["users"])


@router.get("/", response_model=list[UserRead])
async def list_users(
    admin: AdminUser,
    store: Store,
    q: str | None = None,
) -> list[UserRead]:
    """
    List users, without passwords.

    Filters:
    - q: Search in email, first name and last name
    """
    if q:
        return unwrap(await users_service.search_users(store, q))
    return unwrap(await users_service.get_users_data(store))


@router.post("/", response_model=UserRead, status_code=status.HTTP_201_CREATED)
async def create_user(data: UserCreate, admin: AdminUser, store: Store) -> UserRead:
    """Create a user with any role. No welcome message is sent."""
    return unwrap(await users_service.add_user(store, data))


@router.patch("/{user_id}", response_model=UserRead)
async def update_user(
    user_id: str,
    data: UserAdminUpdate,
    admin: AdminUser,
    store: Store,
) -> UserRead:
    """Update a user's profile or role."""
    return unwrap(await users_service.update_profile(store, user_id, data.model_dump(exclude_unset=True)))


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_user(user_id: str, admin: AdminUser, store: Store) -> None:
    """Delete a user. Their comments and messages stay, with the names they carried."""
    if user_id == admin.id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Admins cannot delete their own account",
        )
    unwrap(await users_service.delete_user(store, user_id))

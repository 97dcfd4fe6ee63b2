"""Messaging routes: inbox, sent items, compose, read flags."""

from typing import Literal

from fastapi import APIRouter, status

from bagrut_portal.api.deps import CurrentUser, Store, require_owner_or_admin, unwrap
from bagrut_portal.schemas import MessageCreate, MessageRead, UnreadCount, UserRead
from bagrut_portal.services import messages as messages_service
from bagrut_portal.services import users as users_service

router = APIRouter(prefix="/messages", tags=["messages"])


@router.get("/", response_model=list[MessageRead])
async def list_messages(
    current_user: CurrentUser,
    store: Store,
    box: Literal["all", "inbox", "sent"] = "all",
    unread_only: bool = False,
) -> list[MessageRead]:
    """
    List the current user's messages, newest first.

    Filters:
    - box: inbox (received), sent, or all
    - unread_only: Only messages not read yet
    """
    messages = unwrap(await messages_service.get_messages(store, current_user.id))

    if box == "inbox":
        messages = [m for m in messages if m.recipient_id == current_user.id]
    elif box == "sent":
        messages = [m for m in messages if m.sender_id == current_user.id]
    if unread_only:
        messages = [m for m in messages if not m.is_read]

    return sorted(messages, key=lambda m: m.created_at, reverse=True)


@router.get("/unread-count", response_model=UnreadCount)
async def get_unread_count(current_user: CurrentUser, store: Store) -> UnreadCount:
    """Number of unread messages addressed to the current user."""
    return UnreadCount(unread=await messages_service.get_unread_messages_count(store, current_user.id))


@router.get("/recipients", response_model=list[UserRead])
async def search_recipients(current_user: CurrentUser, store: Store, q: str = "") -> list[UserRead]:
    """Find users to write to (compose screen autocomplete)."""
    users = unwrap(await users_service.search_users(store, q))
    return [u for u in users if u.id != current_user.id]


@router.post("/", response_model=MessageRead, status_code=status.HTTP_201_CREATED)
async def send_message(data: MessageCreate, current_user: CurrentUser, store: Store) -> MessageRead:
    """Send a message from the current user."""
    return unwrap(await messages_service.send_message(store, current_user.id, data))


@router.get("/{message_id}", response_model=MessageRead)
async def get_message(message_id: str, current_user: CurrentUser, store: Store) -> MessageRead:
    """Get a message the current user sent or received."""
    message = unwrap(await messages_service.get_message(store, message_id))
    require_owner_or_admin((message.sender_id, message.recipient_id), current_user)
    return message


@router.post("/{message_id}/read", status_code=status.HTTP_204_NO_CONTENT)
async def mark_message_as_read(message_id: str, current_user: CurrentUser, store: Store) -> None:
    """Mark a received message as read."""
    message = unwrap(await messages_service.get_message(store, message_id))
    require_owner_or_admin(message.recipient_id, current_user)
    unwrap(await messages_service.mark_message_as_read(store, message_id))


@router.delete("/{message_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_message(message_id: str, current_user: CurrentUser, store: Store) -> None:
    """Delete a message the current user sent or received."""
    message = unwrap(await messages_service.get_message(store, message_id))
    require_owner_or_admin((message.sender_id, message.recipient_id), current_user)
    unwrap(await messages_service.delete_message(store, message_id))

"""User-to-user messaging (inbox, sent items, read flags)."""

import logging
from datetime import datetime, timezone

from bagrut_portal.schemas import MessageCreate, MessageRead
from bagrut_portal.services.results import Result, service_operation
from bagrut_portal.storage import LocalStore
from bagrut_portal.storage import collections as c

logger = logging.getLogger(__name__)


@service_operation("Get messages")
async def get_messages(store: LocalStore, user_id: str) -> Result[list[MessageRead]]:
    """Messages the user sent or received."""
    async with store.transaction() as tx:
        messages = await c.MESSAGES.load(tx)
    return Result.ok([m for m in messages if user_id in (m.sender_id, m.recipient_id)])


@service_operation("Get message")
async def get_message(store: LocalStore, message_id: str) -> Result[MessageRead]:
    async with store.transaction() as tx:
        messages = await c.MESSAGES.load(tx)

    message = next((m for m in messages if m.id == message_id), None)
    if message is None:
        return Result.not_found("Message")
    return Result.ok(message)


@service_operation("Send message")
async def send_message(store: LocalStore, sender_id: str, data: MessageCreate) -> Result[MessageRead]:
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        sender = next((u for u in users if u.id == sender_id), None)
        recipient = next((u for u in users if u.id == data.recipient_id), None)
        if sender is None or recipient is None:
            return Result.not_found("Sender or recipient")

        messages = await c.MESSAGES.load(tx)
        message = MessageRead(
            id=c.new_id("msg", (m.id for m in messages)),
            sender_id=sender.id,
            sender_name=sender.full_name,
            recipient_id=recipient.id,
            recipient_name=recipient.full_name,
            subject=data.subject,
            content=data.content,
            attachment_url=data.attachment_url,
            attachment_name=data.attachment_name,
            is_read=False,
            created_at=datetime.now(timezone.utc),
        )
        await c.MESSAGES.save(tx, [*messages, message])

    logger.info("Message %s sent from %s to %s", message.id, sender.id, recipient.id)
    return Result.ok(message)


@service_operation("Mark message as read")
async def mark_message_as_read(store: LocalStore, message_id: str) -> Result[None]:
    async with store.transaction() as tx:
        messages = await c.MESSAGES.load(tx)
        message = next((m for m in messages if m.id == message_id), None)
        if message is None:
            return Result.not_found("Message")

        message.is_read = True
        await c.MESSAGES.save(tx, messages)

    return Result.ok()


@service_operation("Delete message")
async def delete_message(store: LocalStore, message_id: str) -> Result[None]:
    async with store.transaction() as tx:
        messages = await c.MESSAGES.load(tx)
        remaining = [m for m in messages if m.id != message_id]
        if len(remaining) == len(messages):
            return Result.not_found("Message")
        await c.MESSAGES.save(tx, remaining)

    return Result.ok()


async def get_unread_messages_count(store: LocalStore, user_id: str) -> int:
    async with store.transaction() as tx:
        messages = await c.MESSAGES.load(tx)
    return sum(1 for m in messages if m.recipient_id == user_id and not m.is_read)

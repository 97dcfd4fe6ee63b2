"""Tests for messaging and exam forum comments."""

from bagrut_portal.schemas import CommentCreate, MessageCreate, UserRole
from bagrut_portal.services import ErrorKind
from bagrut_portal.services import comments, messages
from bagrut_portal.services.users import update_profile


async def test_send_message(seeded_store):
    result = await messages.send_message(
        seeded_store,
        "user-1",
        MessageCreate(
            recipient_id="admin-1",
            subject="שאלה",
            content="מתי יעלו הפתרונות?",
            attachment_url="local://file_1_abcdefg",
            attachment_name="question.pdf",
        ),
    )

    message = result.data
    assert message.sender_name == "משתמש רגיל"
    assert message.recipient_name == "מנהל מערכת"
    assert message.attachment_name == "question.pdf"
    assert not message.is_read
    assert message.id.startswith("msg-")


async def test_send_message_to_unknown_recipient(seeded_store):
    result = await messages.send_message(
        seeded_store,
        "user-1",
        MessageCreate(recipient_id="user-404", subject="x", content="y"),
    )
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_get_messages_covers_sent_and_received(seeded_store):
    await messages.send_message(
        seeded_store, "user-1", MessageCreate(recipient_id="admin-1", subject="s", content="c")
    )

    user_messages = (await messages.get_messages(seeded_store, "user-1")).data
    admin_messages = (await messages.get_messages(seeded_store, "admin-1")).data

    assert len(user_messages) == 2
    assert len(admin_messages) == 2
    assert (await messages.get_messages(seeded_store, "user-404")).data == []


async def test_unread_count_and_mark_as_read(seeded_store):
    assert await messages.get_unread_messages_count(seeded_store, "user-1") == 1
    assert await messages.get_unread_messages_count(seeded_store, "admin-1") == 0

    assert (await messages.mark_message_as_read(seeded_store, "message-1")).success
    assert await messages.get_unread_messages_count(seeded_store, "user-1") == 0
    assert (await messages.get_message(seeded_store, "message-1")).data.is_read

    # Marking twice is harmless
    assert (await messages.mark_message_as_read(seeded_store, "message-1")).success


async def test_mark_missing_message(store):
    result = await messages.mark_message_as_read(store, "msg-404")
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_delete_message(seeded_store):
    assert (await messages.delete_message(seeded_store, "message-1")).success
    assert (await messages.get_messages(seeded_store, "user-1")).data == []
    assert (await messages.delete_message(seeded_store, "message-1")).error.kind == ErrorKind.NOT_FOUND


async def test_add_comment_copies_author(seeded_store):
    result = await comments.add_comment(
        seeded_store, "exam-2", "admin-1", CommentCreate(content="ראו פתרון מלא", image_url="local://file_2_zzzzzzz")
    )

    comment = result.data
    assert comment.exam_id == "exam-2"
    assert comment.user_name == "מנהל מערכת"
    assert comment.user_role == UserRole.ADMIN
    assert comment.image_url == "local://file_2_zzzzzzz"


async def test_comment_keeps_author_name_after_rename(seeded_store):
    comment = (
        await comments.add_comment(seeded_store, "exam-2", "user-1", CommentCreate(content="תודה"))
    ).data

    await update_profile(seeded_store, "user-1", {"first_name": "חדש"})

    stored = (await comments.get_comment(seeded_store, comment.id)).data
    assert stored.user_name == "משתמש רגיל"


async def test_add_comment_unknown_user(seeded_store):
    result = await comments.add_comment(seeded_store, "exam-1", "user-404", CommentCreate(content="x"))
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_get_and_delete_comments(seeded_store):
    assert [cm.id for cm in (await comments.get_comments(seeded_store, "exam-1")).data] == [
        "comment-1",
        "comment-2",
    ]

    assert (await comments.delete_comment(seeded_store, "comment-1")).success
    assert [cm.id for cm in (await comments.get_comments(seeded_store, "exam-1")).data] == ["comment-2"]
    assert (await comments.get_comment(seeded_store, "comment-1")).error.kind == ErrorKind.NOT_FOUND

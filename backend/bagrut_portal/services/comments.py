"""Exam discussion forum comments."""

from datetime import datetime, timezone

from bagrut_portal.schemas import CommentCreate, CommentRead
from bagrut_portal.services.results import Result, service_operation
from bagrut_portal.storage import LocalStore
from bagrut_portal.storage import collections as c


@service_operation("Get comments")
async def get_comments(store: LocalStore, exam_id: str) -> Result[list[CommentRead]]:
    async with store.transaction() as tx:
        comments = await c.COMMENTS.load(tx)
    return Result.ok([cm for cm in comments if cm.exam_id == exam_id])


@service_operation("Get comment")
async def get_comment(store: LocalStore, comment_id: str) -> Result[CommentRead]:
    async with store.transaction() as tx:
        comments = await c.COMMENTS.load(tx)

    comment = next((cm for cm in comments if cm.id == comment_id), None)
    if comment is None:
        return Result.not_found("Comment")
    return Result.ok(comment)


@service_operation("Add comment")
async def add_comment(
    store: LocalStore,
    exam_id: str,
    user_id: str,
    data: CommentCreate,
) -> Result[CommentRead]:
    """Post a comment; the author's name and role are copied onto it."""
    async with store.transaction() as tx:
        users = await c.USERS.load(tx)
        user = next((u for u in users if u.id == user_id), None)
        if user is None:
            return Result.not_found("User")

        comments = await c.COMMENTS.load(tx)
        comment = CommentRead(
            id=c.new_id("comment", (cm.id for cm in comments)),
            exam_id=exam_id,
            user_id=user_id,
            user_name=user.full_name,
            user_role=user.role,
            content=data.content,
            image_url=data.image_url,
            created_at=datetime.now(timezone.utc),
        )
        await c.COMMENTS.save(tx, [*comments, comment])

    return Result.ok(comment)


@service_operation("Delete comment")
async def delete_comment(store: LocalStore, comment_id: str) -> Result[None]:
    async with store.transaction() as tx:
        comments = await c.COMMENTS.load(tx)
        remaining = [cm for cm in comments if cm.id != comment_id]
        if len(remaining) == len(comments):
            return Result.not_found("Comment")
        await c.COMMENTS.save(tx, remaining)

    return Result.ok()

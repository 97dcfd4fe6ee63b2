"""Routes for a single forum comment."""

from fastapi import APIRouter, status

from bagrut_portal.api.deps import (
    CurrentUser,
    Files,
    Store,
    discard_files,
    require_owner_or_admin,
    unwrap,
)
from bagrut_portal.services import comments as comments_service

router = APIRouter(prefix="/comments", tags=["comments"])


@router.delete("/{comment_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_comment(
    comment_id: str,
    current_user: CurrentUser,
    store: Store,
    files: Files,
) -> None:
    """Delete a comment (author or admin) and its stored image."""
    comment = unwrap(await comments_service.get_comment(store, comment_id))
    require_owner_or_admin(comment.user_id, current_user)

    unwrap(await comments_service.delete_comment(store, comment_id))
    await discard_files(files, [comment.image_url], owner=f"comment {comment_id}")

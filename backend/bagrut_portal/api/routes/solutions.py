"""Routes for a single per-question solution."""

from fastapi import APIRouter, status

from bagrut_portal.api.deps import AdminUser, Store, unwrap
from bagrut_portal.schemas import QuestionSolutionRead, QuestionSolutionUpdate
from bagrut_portal.services import catalog

router = APIRouter(prefix="/solutions", tags=["solutions"])


@router.patch("/{solution_id}", response_model=QuestionSolutionRead)
async def update_question_solution(
    solution_id: str,
    data: QuestionSolutionUpdate,
    admin: AdminUser,
    store: Store,
) -> QuestionSolutionRead:
    """Update a question solution."""
    return unwrap(
        await catalog.update_question_solution(store, solution_id, data.model_dump(exclude_unset=True))
    )


@router.delete("/{solution_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_question_solution(solution_id: str, admin: AdminUser, store: Store) -> None:
    """Delete a question solution."""
    unwrap(await catalog.delete_question_solution(store, solution_id))

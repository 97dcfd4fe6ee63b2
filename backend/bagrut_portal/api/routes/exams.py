"""Exam CRUD routes, with per-question solutions and forum comments."""

from fastapi import APIRouter, status

from bagrut_portal.api.deps import AdminUser, CurrentUser, Files, Store, discard_files, unwrap
from bagrut_portal.schemas import (
    CommentCreate,
    CommentRead,
    ExamCreate,
    ExamRead,
    ExamUpdate,
    QuestionSolutionCreate,
    QuestionSolutionRead,
    Season,
)
from bagrut_portal.services import catalog
from bagrut_portal.services import comments as comments_service

router = APIRouter(prefix="/exams", tags=["exams"])


@router.get("/", response_model=list[ExamRead])
async def list_exams(
    store: Store,
    subject: str | None = None,
    form: str | None = None,
    year: int | None = None,
    season: Season | None = None,
) -> list[ExamRead]:
    """
    List exams. Public.

    Filters:
    - subject: Filter by subject id
    - form: Filter by exam form id
    - year: Filter by exam year
    - season: winter or summer
    """
    exams = unwrap(
        await catalog.get_exams(store, subject=subject, form=form, year=year, season=season)
    )
    return sorted(exams, key=lambda e: e.year, reverse=True)


@router.post("/", response_model=ExamRead, status_code=status.HTTP_201_CREATED)
async def create_exam(data: ExamCreate, admin: AdminUser, store: Store) -> ExamRead:
    """Create a new exam."""
    return unwrap(await catalog.add_exam(store, data))


@router.get("/{exam_id}", response_model=ExamRead)
async def get_exam(exam_id: str, store: Store) -> ExamRead:
    """Get a specific exam by ID."""
    return unwrap(await catalog.get_exam(store, exam_id))


@router.patch("/{exam_id}", response_model=ExamRead)
async def update_exam(
    exam_id: str,
    data: ExamUpdate,
    admin: AdminUser,
    store: Store,
    files: Files,
) -> ExamRead:
    """
    Update an exam.

    Locally stored files replaced by this update are deleted afterwards.
    """
    before = unwrap(await catalog.get_exam(store, exam_id))
    updated = unwrap(await catalog.update_exam(store, exam_id, data.model_dump(exclude_unset=True)))

    replaced = [
        getattr(before, field)
        for field in ("exam_file_url", "solution_file_url")
        if getattr(before, field) != getattr(updated, field)
    ]
    await discard_files(files, replaced, owner=f"exam {exam_id}")
    return updated


@router.delete("/{exam_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exam(exam_id: str, admin: AdminUser, store: Store, files: Files) -> None:
    """Delete an exam with its question solutions, comments and stored files."""
    deletion = unwrap(await catalog.delete_exam(store, exam_id))
    await discard_files(files, deletion.file_urls(), owner=f"exam {exam_id}")


# =============================================================================
# QUESTION SOLUTIONS
# =============================================================================


@router.get("/{exam_id}/solutions", response_model=list[QuestionSolutionRead])
async def list_question_solutions(exam_id: str, store: Store) -> list[QuestionSolutionRead]:
    """List per-question solutions of an exam, by question number."""
    solutions = unwrap(await catalog.get_question_solutions(store, exam_id))
    return sorted(solutions, key=lambda s: s.question_number)


@router.post(
    "/{exam_id}/solutions",
    response_model=QuestionSolutionRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_question_solution(
    exam_id: str,
    data: QuestionSolutionCreate,
    admin: AdminUser,
    store: Store,
) -> QuestionSolutionRead:
    """Add a solution for one question. One solution per question number."""
    return unwrap(await catalog.add_question_solution(store, exam_id, data))


# =============================================================================
# FORUM
# =============================================================================


@router.get("/{exam_id}/comments", response_model=list[CommentRead])
async def list_comments(exam_id: str, store: Store) -> list[CommentRead]:
    """List the forum comments of an exam, oldest first."""
    comments = unwrap(await comments_service.get_comments(store, exam_id))
    return sorted(comments, key=lambda cm: cm.created_at)


@router.post(
    "/{exam_id}/comments",
    response_model=CommentRead,
    status_code=status.HTTP_201_CREATED,
)
async def create_comment(
    exam_id: str,
    data: CommentCreate,
    current_user: CurrentUser,
    store: Store,
) -> CommentRead:
    """Post a comment on an exam as the current user."""
    return unwrap(await comments_service.add_comment(store, exam_id, current_user.id, data))

"""Exam form CRUD routes."""

from fastapi import APIRouter, status

from bagrut_portal.api.deps import AdminUser, Store, unwrap
from bagrut_portal.schemas import ExamFormCreate, ExamFormRead
from bagrut_portal.services import catalog

router = APIRouter(prefix="/exam-forms", tags=["exam-forms"])


@router.get("/", response_model=list[ExamFormRead])
async def list_exam_forms(store: Store, subject_id: str | None = None) -> list[ExamFormRead]:
    """
    List exam forms.

    Filters:
    - subject_id: Only forms of this subject
    """
    if subject_id:
        return unwrap(await catalog.get_exam_forms_by_subject(store, subject_id))
    return unwrap(await catalog.get_exam_forms(store))


@router.post("/", response_model=ExamFormRead, status_code=status.HTTP_201_CREATED)
async def create_exam_form(data: ExamFormCreate, admin: AdminUser, store: Store) -> ExamFormRead:
    """Create an exam form. Names are unique per subject."""
    return unwrap(await catalog.add_exam_form(store, data))


@router.delete("/{form_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_exam_form(form_id: str, admin: AdminUser, store: Store) -> None:
    """Delete an exam form; exams that used it are kept without a form."""
    unwrap(await catalog.delete_exam_form(store, form_id))

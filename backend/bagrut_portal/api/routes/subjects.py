"""Subject CRUD routes."""

from fastapi import APIRouter, status

from bagrut_portal.api.deps import AdminUser, Files, Store, discard_files, unwrap
from bagrut_portal.schemas import ExamFormRead, SubjectCreate, SubjectRead
from bagrut_portal.services import catalog

router = APIRouter(prefix="/subjects", tags=["subjects"])


@router.get("/", response_model=list[SubjectRead])
async def list_subjects(store: Store) -> list[SubjectRead]:
    """List all subjects. Public."""
    return unwrap(await catalog.get_subjects(store))


@router.post("/", response_model=SubjectRead, status_code=status.HTTP_201_CREATED)
async def create_subject(data: SubjectCreate, admin: AdminUser, store: Store) -> SubjectRead:
    """Create a subject. Names must be unique."""
    return unwrap(await catalog.add_subject(store, data.name))


@router.delete("/{subject_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_subject(subject_id: str, admin: AdminUser, store: Store, files: Files) -> None:
    """Delete a subject with its exam forms, exams and everything under them, stored files included."""
    deletion = unwrap(await catalog.delete_subject(store, subject_id))
    await discard_files(files, deletion.file_urls(), owner=f"subject {subject_id}")


@router.get("/{subject_id}/forms", response_model=list[ExamFormRead])
async def list_subject_forms(subject_id: str, store: Store) -> list[ExamFormRead]:
    """List the exam forms of one subject."""
    return unwrap(await catalog.get_exam_forms_by_subject(store, subject_id))

"""
Exam catalog: subjects, exam forms, exams and per-question solutions.

Soft references are never validated. Cascades are explicit
filter-and-resave steps, all inside the same store transaction:

- deleting a subject drops its exam forms and exams, cascading as below
- deleting an exam form clears ``form`` on the exams that used it
- deleting an exam drops its question solutions and comments

Deletes that cascade return a ``CatalogDeletion`` so callers can remove the
stored files the deleted records pointed at.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any

from bagrut_portal.schemas import (
    CommentRead,
    ExamCreate,
    ExamFormCreate,
    ExamFormRead,
    ExamRead,
    QuestionSolutionCreate,
    QuestionSolutionRead,
    Season,
    SubjectRead,
)
from bagrut_portal.services.results import Result, service_operation
from bagrut_portal.storage import LocalStore, StoreTransaction
from bagrut_portal.storage import collections as c


def _now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CatalogDeletion:
    """Exams and comments removed by a delete, for cleaning up their stored files."""

    exams: list[ExamRead] = field(default_factory=list)
    comments: list[CommentRead] = field(default_factory=list)

    def file_urls(self) -> list[str]:
        urls = [url for e in self.exams for url in (e.exam_file_url, e.solution_file_url)]
        urls.extend(cm.image_url for cm in self.comments if cm.image_url)
        return [url for url in urls if url]


async def _drop_exam_children(tx: StoreTransaction, exam_ids: set[str]) -> list[CommentRead]:
    """Remove the question solutions and comments of the given exams; returns the comments."""
    solutions = await c.QUESTION_SOLUTIONS.load(tx)
    await c.QUESTION_SOLUTIONS.save(tx, [s for s in solutions if s.exam_id not in exam_ids])

    comments = await c.COMMENTS.load(tx)
    await c.COMMENTS.save(tx, [cm for cm in comments if cm.exam_id not in exam_ids])
    return [cm for cm in comments if cm.exam_id in exam_ids]


# =============================================================================
# SUBJECTS
# =============================================================================


@service_operation("Get subjects")
async def get_subjects(store: LocalStore) -> Result[list[SubjectRead]]:
    async with store.transaction() as tx:
        return Result.ok(await c.SUBJECTS.load(tx))


@service_operation("Add subject")
async def add_subject(store: LocalStore, name: str) -> Result[SubjectRead]:
    async with store.transaction() as tx:
        subjects = await c.SUBJECTS.load(tx)
        if any(s.name == name for s in subjects):
            return Result.already_exists("Subject already exists")

        subject = SubjectRead(
            id=c.new_id("subject", (s.id for s in subjects)),
            name=name,
            created_at=_now(),
        )
        await c.SUBJECTS.save(tx, [*subjects, subject])

    return Result.ok(subject)


@service_operation("Delete subject")
async def delete_subject(store: LocalStore, subject_id: str) -> Result[CatalogDeletion]:
    """Delete a subject with its exam forms and exams, and everything under those exams."""
    async with store.transaction() as tx:
        subjects = await c.SUBJECTS.load(tx)
        remaining = [s for s in subjects if s.id != subject_id]
        if len(remaining) == len(subjects):
            return Result.not_found("Subject")
        await c.SUBJECTS.save(tx, remaining)

        exams = await c.EXAMS.load(tx)
        removed = [e for e in exams if e.subject == subject_id]
        await c.EXAMS.save(tx, [e for e in exams if e.subject != subject_id])
        comments = await _drop_exam_children(tx, {e.id for e in removed})

        forms = await c.EXAM_FORMS.load(tx)
        await c.EXAM_FORMS.save(tx, [f for f in forms if f.subject_id != subject_id])

    return Result.ok(CatalogDeletion(exams=removed, comments=comments))


# =============================================================================
# EXAM FORMS
# =============================================================================


@service_operation("Get exam forms")
async def get_exam_forms(store: LocalStore) -> Result[list[ExamFormRead]]:
    async with store.transaction() as tx:
        return Result.ok(await c.EXAM_FORMS.load(tx))


@service_operation("Get exam forms by subject")
async def get_exam_forms_by_subject(store: LocalStore, subject_id: str) -> Result[list[ExamFormRead]]:
    async with store.transaction() as tx:
        forms = await c.EXAM_FORMS.load(tx)
    return Result.ok([f for f in forms if f.subject_id == subject_id])


@service_operation("Add exam form")
async def add_exam_form(store: LocalStore, data: ExamFormCreate) -> Result[ExamFormRead]:
    async with store.transaction() as tx:
        forms = await c.EXAM_FORMS.load(tx)
        if any(f.subject_id == data.subject_id and f.name == data.name for f in forms):
            return Result.already_exists("Exam form already exists for this subject")

        form = ExamFormRead(
            id=c.new_id("form", (f.id for f in forms)),
            subject_id=data.subject_id,
            name=data.name,
            created_at=_now(),
        )
        await c.EXAM_FORMS.save(tx, [*forms, form])

    return Result.ok(form)


@service_operation("Delete exam form")
async def delete_exam_form(store: LocalStore, form_id: str) -> Result[None]:
    async with store.transaction() as tx:
        forms = await c.EXAM_FORMS.load(tx)
        remaining = [f for f in forms if f.id != form_id]
        if len(remaining) == len(forms):
            return Result.not_found("Exam form")
        await c.EXAM_FORMS.save(tx, remaining)

        exams = await c.EXAMS.load(tx)
        for exam in exams:
            if exam.form == form_id:
                exam.form = None
        await c.EXAMS.save(tx, exams)

    return Result.ok()


# =============================================================================
# EXAMS
# =============================================================================


@service_operation("Get exams")
async def get_exams(
    store: LocalStore,
    *,
    subject: str | None = None,
    form: str | None = None,
    year: int | None = None,
    season: Season | None = None,
) -> Result[list[ExamRead]]:
    """List exams, optionally narrowed by subject, form, year and season."""
    async with store.transaction() as tx:
        exams = await c.EXAMS.load(tx)

    if subject is not None:
        exams = [e for e in exams if e.subject == subject]
    if form is not None:
        exams = [e for e in exams if e.form == form]
    if year is not None:
        exams = [e for e in exams if e.year == year]
    if season is not None:
        exams = [e for e in exams if e.season == season]
    return Result.ok(exams)


@service_operation("Get exam")
async def get_exam(store: LocalStore, exam_id: str) -> Result[ExamRead]:
    async with store.transaction() as tx:
        exams = await c.EXAMS.load(tx)

    exam = next((e for e in exams if e.id == exam_id), None)
    if exam is None:
        return Result.not_found("Exam")
    return Result.ok(exam)


@service_operation("Add exam")
async def add_exam(store: LocalStore, data: ExamCreate) -> Result[ExamRead]:
    async with store.transaction() as tx:
        exams = await c.EXAMS.load(tx)
        exam = ExamRead(
            id=c.new_id("exam", (e.id for e in exams)),
            created_at=_now(),
            **data.model_dump(),
        )
        await c.EXAMS.save(tx, [*exams, exam])

    return Result.ok(exam)


@service_operation("Update exam")
async def update_exam(store: LocalStore, exam_id: str, updates: dict[str, Any]) -> Result[ExamRead]:
    updates = {k: v for k, v in updates.items() if k not in ("id", "created_at")}

    async with store.transaction() as tx:
        exams = await c.EXAMS.load(tx)
        index = next((i for i, e in enumerate(exams) if e.id == exam_id), None)
        if index is None:
            return Result.not_found("Exam")

        exams[index] = ExamRead.model_validate({**exams[index].model_dump(), **updates})
        await c.EXAMS.save(tx, exams)

    return Result.ok(exams[index])


@service_operation("Delete exam")
async def delete_exam(store: LocalStore, exam_id: str) -> Result[CatalogDeletion]:
    """Delete an exam with its question solutions and comments."""
    async with store.transaction() as tx:
        exams = await c.EXAMS.load(tx)
        exam = next((e for e in exams if e.id == exam_id), None)
        if exam is None:
            return Result.not_found("Exam")
        await c.EXAMS.save(tx, [e for e in exams if e.id != exam_id])
        comments = await _drop_exam_children(tx, {exam_id})

    return Result.ok(CatalogDeletion(exams=[exam], comments=comments))


# =============================================================================
# QUESTION SOLUTIONS
# =============================================================================


@service_operation("Get question solutions")
async def get_question_solutions(store: LocalStore, exam_id: str) -> Result[list[QuestionSolutionRead]]:
    async with store.transaction() as tx:
        solutions = await c.QUESTION_SOLUTIONS.load(tx)
    return Result.ok([s for s in solutions if s.exam_id == exam_id])


@service_operation("Add question solution")
async def add_question_solution(
    store: LocalStore,
    exam_id: str,
    data: QuestionSolutionCreate,
) -> Result[QuestionSolutionRead]:
    async with store.transaction() as tx:
        solutions = await c.QUESTION_SOLUTIONS.load(tx)
        if any(s.exam_id == exam_id and s.question_number == data.question_number for s in solutions):
            return Result.already_exists("Solution already exists for this question")

        solution = QuestionSolutionRead(
            id=c.new_id("solution", (s.id for s in solutions)),
            exam_id=exam_id,
            created_at=_now(),
            **data.model_dump(),
        )
        await c.QUESTION_SOLUTIONS.save(tx, [*solutions, solution])

    return Result.ok(solution)


@service_operation("Update question solution")
async def update_question_solution(
    store: LocalStore,
    solution_id: str,
    updates: dict[str, Any],
) -> Result[QuestionSolutionRead]:
    updates = {k: v for k, v in updates.items() if k not in ("id", "exam_id", "created_at")}

    async with store.transaction() as tx:
        solutions = await c.QUESTION_SOLUTIONS.load(tx)
        index = next((i for i, s in enumerate(solutions) if s.id == solution_id), None)
        if index is None:
            return Result.not_found("Question solution")

        solutions[index] = QuestionSolutionRead.model_validate(
            {**solutions[index].model_dump(), **updates}
        )
        await c.QUESTION_SOLUTIONS.save(tx, solutions)

    return Result.ok(solutions[index])


@service_operation("Delete question solution")
async def delete_question_solution(store: LocalStore, solution_id: str) -> Result[None]:
    async with store.transaction() as tx:
        solutions = await c.QUESTION_SOLUTIONS.load(tx)
        remaining = [s for s in solutions if s.id != solution_id]
        if len(remaining) == len(solutions):
            return Result.not_found("Question solution")
        await c.QUESTION_SOLUTIONS.save(tx, remaining)

    return Result.ok()

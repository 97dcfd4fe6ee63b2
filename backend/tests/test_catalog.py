"""Tests for subjects, exam forms, exams and question solutions."""

from bagrut_portal.schemas import (
    CommentCreate,
    ExamCreate,
    ExamFormCreate,
    QuestionSolutionCreate,
    Season,
)
from bagrut_portal.services import ErrorKind
from bagrut_portal.services import catalog
from bagrut_portal.services.comments import add_comment, get_comments
from bagrut_portal.storage import collections as c
from bagrut_portal.storage.seed import seed_collections


async def test_seed_runs_once(store):
    seeded = await seed_collections(store)
    assert len(seeded) == len(c.ALL_COLLECTIONS)

    await catalog.add_subject(store, "היסטוריה")
    assert await seed_collections(store) == []

    subjects = (await catalog.get_subjects(store)).data
    assert len(subjects) == 4


async def test_empty_store_returns_empty_lists(store):
    result = await catalog.get_exams(store)
    assert result.success
    assert result.data == []


async def test_exam_round_trip(store):
    data = ExamCreate(
        subject="subject-1",
        form="form-1",
        year=2021,
        season=Season.WINTER,
        exam_file_url="local://file_1_abcdefg",
        solution_file_url="https://example.com/solution.pdf",
        solution_video_url="https://www.youtube.com/watch?v=abc",
    )

    created = (await catalog.add_exam(store, data)).data
    fetched = (await catalog.get_exam(store, created.id)).data

    assert fetched == created
    assert fetched.model_dump(exclude={"id", "created_at"}) == data.model_dump()


async def test_subject_names_are_unique(store):
    assert (await catalog.add_subject(store, "Math")).success

    result = await catalog.add_subject(store, "Math")

    assert result.error.kind == ErrorKind.ALREADY_EXISTS
    assert len((await catalog.get_subjects(store)).data) == 1


async def test_exam_form_unique_per_subject(store):
    assert (await catalog.add_exam_form(store, ExamFormCreate(subject_id="s1", name="581"))).success
    assert (await catalog.add_exam_form(store, ExamFormCreate(subject_id="s2", name="581"))).success

    result = await catalog.add_exam_form(store, ExamFormCreate(subject_id="s1", name="581"))

    assert result.error.kind == ErrorKind.ALREADY_EXISTS
    assert [f.subject_id for f in (await catalog.get_exam_forms_by_subject(store, "s1")).data] == ["s1"]


async def test_ids_stay_unique_under_rapid_inserts(store):
    for i in range(5):
        await catalog.add_subject(store, f"subject {i}")

    ids = [s.id for s in (await catalog.get_subjects(store)).data]
    assert len(set(ids)) == 5
    assert all(i.startswith("subject-") for i in ids)


async def test_delete_subject_cascades(store):
    math = (await catalog.add_subject(store, "Math")).data
    physics = (await catalog.add_subject(store, "Physics")).data
    form = (await catalog.add_exam_form(store, ExamFormCreate(subject_id=math.id, name="581"))).data
    await catalog.add_exam(store, ExamCreate(subject=math.id, form=form.id, year=2023))
    kept = (await catalog.add_exam(store, ExamCreate(subject=physics.id, year=2023))).data

    result = await catalog.delete_subject(store, math.id)

    assert result.success
    exams = (await catalog.get_exams(store)).data
    forms = (await catalog.get_exam_forms(store)).data
    assert all(e.subject != math.id for e in exams)
    assert [e.id for e in exams] == [kept.id]
    assert all(f.name != "581" for f in forms)
    assert [s.id for s in (await catalog.get_subjects(store)).data] == [physics.id]


async def test_delete_missing_subject(store):
    result = await catalog.delete_subject(store, "subject-404")

    assert not result.success
    assert result.error.kind == ErrorKind.NOT_FOUND
    assert result.error.message == "Subject not found"


async def test_delete_exam_form_clears_exam_form(store):
    form = (await catalog.add_exam_form(store, ExamFormCreate(subject_id="s1", name="581"))).data
    exam = (await catalog.add_exam(store, ExamCreate(subject="s1", form=form.id, year=2020))).data

    assert (await catalog.delete_exam_form(store, form.id)).success

    fetched = (await catalog.get_exam(store, exam.id)).data
    assert fetched.form is None
    assert fetched.subject == "s1"


async def test_delete_exam_cascades_to_comments_and_solutions(seeded_store):
    other = (await catalog.add_exam(seeded_store, ExamCreate(subject="subject-1", year=2019))).data
    await add_comment(seeded_store, other.id, "user-1", CommentCreate(content="שאלה 3?"))
    await catalog.add_question_solution(
        seeded_store, other.id, QuestionSolutionCreate(question_number=1, solution_text="x=2")
    )

    result = await catalog.delete_exam(seeded_store, "exam-1")

    assert [e.id for e in result.data.exams] == ["exam-1"]
    assert [cm.id for cm in result.data.comments] == ["comment-1", "comment-2"]
    assert (await get_comments(seeded_store, "exam-1")).data == []
    assert (await catalog.get_question_solutions(seeded_store, "exam-1")).data == []
    assert len((await get_comments(seeded_store, other.id)).data) == 1
    assert len((await catalog.get_question_solutions(seeded_store, other.id)).data) == 1


async def test_exam_filters(seeded_store):
    await catalog.add_exam(
        seeded_store, ExamCreate(subject="subject-2", year=2023, season=Season.SUMMER)
    )

    by_subject = (await catalog.get_exams(seeded_store, subject="subject-1")).data
    by_year = (await catalog.get_exams(seeded_store, year=2023)).data
    by_season = (await catalog.get_exams(seeded_store, season=Season.SUMMER)).data

    assert {e.id for e in by_subject} == {"exam-1", "exam-2"}
    assert len(by_year) == 3
    assert len(by_season) == 1


async def test_update_exam(seeded_store):
    result = await catalog.update_exam(seeded_store, "exam-2", {"year": 2021, "season": "winter"})

    assert result.data.year == 2021
    assert result.data.season == Season.WINTER
    assert result.data.subject == "subject-1"


async def test_update_exam_rejects_invalid_values(seeded_store):
    result = await catalog.update_exam(seeded_store, "exam-2", {"season": "spring"})

    assert result.error.kind == ErrorKind.INVALID
    assert (await catalog.get_exam(seeded_store, "exam-2")).data.season is None


async def test_update_missing_exam(store):
    result = await catalog.update_exam(store, "exam-404", {"year": 2000})
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_question_numbers_unique_per_exam(seeded_store):
    result = await catalog.add_question_solution(
        seeded_store, "exam-1", QuestionSolutionCreate(question_number=1)
    )
    assert result.error.kind == ErrorKind.ALREADY_EXISTS

    result = await catalog.add_question_solution(
        seeded_store, "exam-2", QuestionSolutionCreate(question_number=1, solution_text="ראו סרטון")
    )
    assert result.success
    assert result.data.exam_id == "exam-2"


async def test_update_and_delete_question_solution(seeded_store):
    updated = await catalog.update_question_solution(
        seeded_store, "solution-1", {"solution_text": "הצבה בנוסחה"}
    )
    assert updated.data.solution_text == "הצבה בנוסחה"
    assert updated.data.solution_video_url == "https://www.youtube.com/watch?v=example-q1"

    assert (await catalog.delete_question_solution(seeded_store, "solution-1")).success
    remaining = (await catalog.get_question_solutions(seeded_store, "exam-1")).data
    assert [s.id for s in remaining] == ["solution-2"]

    missing = await catalog.delete_question_solution(seeded_store, "solution-1")
    assert missing.error.kind == ErrorKind.NOT_FOUND


async def test_math_scenario(store):
    math = (await catalog.add_subject(store, "Math")).data
    form = (await catalog.add_exam_form(store, ExamFormCreate(subject_id=math.id, name="581"))).data
    await catalog.add_exam(store, ExamCreate(subject=math.id, form=form.id, year=2023))

    await catalog.delete_subject(store, math.id)

    assert not any(e.subject == math.id for e in (await catalog.get_exams(store)).data)
    assert not any(f.name == "581" for f in (await catalog.get_exam_forms(store)).data)


async def test_quota_error_surfaces_as_result(make_store):
    store = make_store(quota_chars=50)

    result = await catalog.add_subject(store, "מתמטיקה " * 10)

    assert result.error.kind == ErrorKind.QUOTA_EXCEEDED
    assert await store.get_item(c.SUBJECTS.key) is None


async def test_delete_subject_drops_everything_under_its_exams(seeded_store):
    await add_comment(
        seeded_store,
        "exam-2",
        "user-1",
        CommentCreate(content="תמונה של הפתרון", image_url="local://file_5_imgimgi"),
    )

    result = await catalog.delete_subject(seeded_store, "subject-1")

    assert {e.id for e in result.data.exams} == {"exam-1", "exam-2"}
    assert (await get_comments(seeded_store, "exam-1")).data == []
    assert (await get_comments(seeded_store, "exam-2")).data == []
    assert (await catalog.get_question_solutions(seeded_store, "exam-1")).data == []
    urls = result.data.file_urls()
    assert "local://file_5_imgimgi" in urls
    assert "https://example.com/math_2023.pdf" in urls
    assert "" not in urls


async def test_corrupt_collection_is_a_storage_error(store):
    await store.set_item(c.EXAMS.key, '[{"id": "exam-1", "year": "not a year"}]')

    result = await catalog.get_exams(store)

    assert result.error.kind == ErrorKind.STORAGE
    assert c.EXAMS.key in result.error.message


async def test_unparsable_collection_is_a_storage_error(store):
    await store.set_item(c.SUBJECTS.key, "{truncated")

    result = await catalog.add_subject(store, "Math")

    assert result.error.kind == ErrorKind.STORAGE
    assert await store.get_item(c.SUBJECTS.key) == "{truncated"

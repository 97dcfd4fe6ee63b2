"""Fixture data written to the store on first run."""

import logging
from datetime import datetime, timedelta, timezone

from bagrut_portal.schemas import (
    CommentRead,
    ExamFormRead,
    ExamRead,
    MessageRead,
    QuestionSolutionRead,
    SubjectRead,
    UserRecord,
)
from bagrut_portal.storage import collections as c
from bagrut_portal.storage.local_store import LocalStore

logger = logging.getLogger(__name__)

WELCOME_SUBJECT = "ברוכים הבאים לבגרויות ישראל"


def welcome_content(first_name: str) -> str:
    return (
        f"שלום {first_name},\n\n"
        "ברוכים הבאים למערכת בגרויות ישראל! אנו שמחים שהצטרפת אלינו.\n\n"
        "באתר תוכל למצוא מגוון רחב של בגרויות, פתרונות וסרטוני הסבר שיעזרו לך "
        "להתכונן לבחינות הבגרות בצורה הטובה ביותר.\n\n"
        "אם יש לך שאלות או בקשות, אל תהסס לפנות אלינו.\n\n"
        "בהצלחה!\n"
        "צוות בגרויות ישראל"
    )


def _fixtures(now: datetime) -> dict[c.Collection, list]:
    return {
        c.USERS: [
            UserRecord(
                id="user-1",
                email="user@example.com",
                password="password123",
                first_name="משתמש",
                last_name="רגיל",
                birth_date="2000-01-01",
                role="user",
                created_at=now,
            ),
            UserRecord(
                id="admin-1",
                email="admin@example.com",
                password="password123",
                first_name="מנהל",
                last_name="מערכת",
                birth_date="1990-01-01",
                role="admin",
                created_at=now,
            ),
        ],
        c.SUBJECTS: [
            SubjectRead(id="subject-1", name="מתמטיקה 5 יח'"),
            SubjectRead(id="subject-2", name="פיזיקה 5 יח'"),
            SubjectRead(id="subject-3", name="אנגלית 5 יח'"),
        ],
        c.EXAMS: [
            ExamRead(
                id="exam-1",
                subject="subject-1",
                year=2023,
                exam_file_url="https://example.com/math_2023.pdf",
                solution_file_url="https://example.com/math_2023_solution.pdf",
                solution_video_url="https://www.youtube.com/watch?v=example1",
                created_at=now,
            ),
            ExamRead(
                id="exam-2",
                subject="subject-1",
                year=2022,
                exam_file_url="https://example.com/math_2022.pdf",
                solution_file_url="https://example.com/math_2022_solution.pdf",
                solution_video_url="https://www.youtube.com/watch?v=example2",
                created_at=now,
            ),
            ExamRead(
                id="exam-3",
                subject="subject-2",
                year=2023,
                exam_file_url="https://example.com/physics_2023.pdf",
                solution_file_url="https://example.com/physics_2023_solution.pdf",
                solution_video_url="https://www.youtube.com/watch?v=example3",
                created_at=now,
            ),
        ],
        c.COMMENTS: [
            CommentRead(
                id="comment-1",
                exam_id="exam-1",
                user_id="user-1",
                user_name="משתמש רגיל",
                user_role="user",
                content="האם מישהו יכול להסביר את השאלה הראשונה?",
                created_at=now,
            ),
            CommentRead(
                id="comment-2",
                exam_id="exam-1",
                user_id="admin-1",
                user_name="מנהל מערכת",
                user_role="admin",
                content="בוודאי! בשאלה הראשונה צריך להשתמש בנוסחת הכפל המקוצר.",
                created_at=now + timedelta(hours=1),
            ),
        ],
        c.MESSAGES: [
            MessageRead(
                id="message-1",
                sender_id="admin-1",
                sender_name="מנהל מערכת",
                recipient_id="user-1",
                recipient_name="משתמש רגיל",
                subject=WELCOME_SUBJECT,
                content=welcome_content("משתמש רגיל"),
                is_read=False,
                created_at=now,
            ),
        ],
        c.EXAM_FORMS: [
            ExamFormRead(id="form-1", subject_id="subject-1", name="581"),
            ExamFormRead(id="form-2", subject_id="subject-1", name="582"),
            ExamFormRead(id="form-3", subject_id="subject-2", name="917"),
        ],
        c.QUESTION_SOLUTIONS: [
            QuestionSolutionRead(
                id="solution-1",
                exam_id="exam-1",
                question_number=1,
                solution_video_url="https://www.youtube.com/watch?v=example-q1",
                created_at=now,
            ),
            QuestionSolutionRead(
                id="solution-2",
                exam_id="exam-1",
                question_number=2,
                solution_video_url="https://www.youtube.com/watch?v=example-q2",
                created_at=now,
            ),
        ],
    }


async def seed_collections(store: LocalStore) -> list[str]:
    """
    Write fixture data for every collection whose key is missing.

    Collections that already exist, even empty ones, are left untouched.
    Returns the keys that were seeded.
    """
    seeded = []
    async with store.transaction() as tx:
        for collection, records in _fixtures(datetime.now(timezone.utc)).items():
            if await collection.exists(tx):
                continue
            await collection.save(tx, records)
            seeded.append(collection.key)

    if seeded:
        logger.info("Seeded collections: %s", ", ".join(seeded))
    return seeded

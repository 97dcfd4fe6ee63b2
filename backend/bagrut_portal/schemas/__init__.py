"""Pydantic schemas for stored records and API request/response validation."""

from bagrut_portal.schemas.user import (
    PasswordUpdate,
    UserAdminUpdate,
    UserCreate,
    UserRead,
    UserRecord,
    UserRole,
    UserUpdate,
)
from bagrut_portal.schemas.auth import SignInRequest, TokenResponse
from bagrut_portal.schemas.subjects import SubjectCreate, SubjectRead
from bagrut_portal.schemas.exam_forms import ExamFormCreate, ExamFormRead
from bagrut_portal.schemas.exams import ExamCreate, ExamRead, ExamUpdate, Season
from bagrut_portal.schemas.comments import CommentCreate, CommentRead
from bagrut_portal.schemas.messages import MessageCreate, MessageRead, UnreadCount
from bagrut_portal.schemas.question_solutions import (
    QuestionSolutionCreate,
    QuestionSolutionRead,
    QuestionSolutionUpdate,
)
from bagrut_portal.schemas.dashboard import DashboardSummary, MonthlyCount
from bagrut_portal.schemas.files import FileUploadResponse

__all__ = [
    # User
    "PasswordUpdate",
    "UserAdminUpdate",
    "UserCreate",
    "UserRead",
    "UserRecord",
    "UserRole",
    "UserUpdate",
    # Auth
    "SignInRequest",
    "TokenResponse",
    # Subjects
    "SubjectCreate",
    "SubjectRead",
    # Exam forms
    "ExamFormCreate",
    "ExamFormRead",
    # Exams
    "ExamCreate",
    "ExamRead",
    "ExamUpdate",
    "Season",
    # Comments
    "CommentCreate",
    "CommentRead",
    # Messages
    "MessageCreate",
    "MessageRead",
    "UnreadCount",
    # Question solutions
    "QuestionSolutionCreate",
    "QuestionSolutionRead",
    "QuestionSolutionUpdate",
    # Dashboard
    "DashboardSummary",
    "MonthlyCount",
    # Files
    "FileUploadResponse",
]

"""API routes package."""

from bagrut_portal.api.routes import (
    auth,
    comments,
    dashboard,
    exam_forms,
    exams,
    files,
    messages,
    solutions,
    subjects,
    users,
)

__all__ = [
    "auth",
    "comments",
    "dashboard",
    "exam_forms",
    "exams",
    "files",
    "messages",
    "solutions",
    "subjects",
    "users",
]

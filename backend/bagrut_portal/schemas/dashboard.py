"""Admin dashboard schemas."""

from pydantic import BaseModel

from bagrut_portal.schemas.user import UserRead


class MonthlyCount(BaseModel):
    """Number of users registered in one calendar month (YYYY-MM)."""

    month: str
    count: int


class DashboardSummary(BaseModel):
    """Counters and charts shown on the admin dashboard."""

    users_count: int
    exams_count: int
    subjects_count: int
    users_by_month: list[MonthlyCount]
    recent_users: list[UserRead]

"""Admin dashboard route."""

from fastapi import APIRouter, Query

from bagrut_portal.api.deps import AdminUser, Store
from bagrut_portal.schemas import DashboardSummary
from bagrut_portal.services import dashboard

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


@router.get("/", response_model=DashboardSummary)
async def get_dashboard(
    admin: AdminUser,
    store: Store,
    months: int = Query(6, ge=1, le=24),
    recent: int = Query(5, ge=1, le=50),
) -> DashboardSummary:
    """
    Counters, monthly registrations and newest users.

    Query parameters:
    - months: How many months of registrations to chart (default 6)
    - recent: How many newest users to list (default 5)
    """
    return DashboardSummary(
        users_count=await dashboard.get_users_count(store),
        exams_count=await dashboard.get_exams_count(store),
        subjects_count=await dashboard.get_subjects_count(store),
        users_by_month=await dashboard.get_users_by_month(store, months),
        recent_users=await dashboard.get_recent_users(store, recent),
    )

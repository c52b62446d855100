# app/api/stats/main.py
from fastapi import APIRouter, Depends
from sqlmodel import Session

from ...db.engine_sync import get_sync_session
from ...services.stats_service import StatsService
from .models import DashboardStats, ExpiryRow

router = APIRouter()


def get_stats_service(session: Session = Depends(get_sync_session)) -> StatsService:
    return StatsService(session)


@router.get("/stats/dashboard", response_model=DashboardStats)
def get_dashboard_stats(service: StatsService = Depends(get_stats_service)):
    """Totals, upcoming (30 days), overdue, SMS-alert window and type distribution."""
    return service.get_dashboard()


@router.get("/stats/expiry", response_model=list[ExpiryRow])
def get_expiry_checker(
    search: str | None = None,
    service: StatsService = Depends(get_stats_service),
):
    """Customers ranked by days remaining until their next service."""
    return service.get_expiry_list(search=search)

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from socialcare.database import get_db
from socialcare.auth import get_current_user, Principal
from socialcare.schemas.calendar import DashboardSummary
from socialcare.services.calendar_service import calendar_service

router = APIRouter()


@router.get("/summary", response_model=DashboardSummary)
async def get_summary(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    """Counts behind the dashboard summary cards, scoped to what the caller can see."""
    return DashboardSummary(**await calendar_service.summary(current_user, db))

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from socialcare.database import get_db
from socialcare.auth import get_current_user, Principal
from socialcare.exceptions import ValidationFailed
from socialcare.schemas.calendar import CalendarEvent, CalendarResponse
from socialcare.services.calendar_service import as_utc, calendar_service

router = APIRouter()


@router.get("", response_model=CalendarResponse)
async def get_calendar(
    start: Optional[datetime] = Query(None, description="Inclusive lower bound"),
    end: Optional[datetime] = Query(None, description="Exclusive upper bound"),
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    start, end = as_utc(start), as_utc(end)
    if start and end and end <= start:
        raise ValidationFailed("end must be after start")

    events = await calendar_service.events(current_user, db, start, end)
    return CalendarResponse(
        events=[CalendarEvent(**e) for e in events],
        total=len(events),
    )

from datetime import datetime
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from socialcare import policy
from socialcare.database import get_db
from socialcare.models.meeting import Meeting
from socialcare.auth import get_current_user, Principal
from socialcare.exceptions import NotFoundError, ValidationFailed
from socialcare.schemas.base import MessageResponse
from socialcare.schemas.meeting import MeetingCreate, MeetingResponse, MeetingUpdate
from socialcare.services.calendar_service import as_utc, calendar_service

router = APIRouter()


async def get_meeting_or_404(db: AsyncSession, meeting_id: int, principal: Principal) -> Meeting:
    # No manager bypass: meetings belong to whoever scheduled them
    meeting = await db.get(Meeting, meeting_id)
    if not meeting or not policy.can_modify_meeting(principal, meeting):
        raise NotFoundError("Meeting not found")
    return meeting


@router.get("", response_model=list[MeetingResponse])
async def list_meetings(
    start: Optional[datetime] = Query(None),
    end: Optional[datetime] = Query(None),
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    meetings = await calendar_service.own_meetings(current_user, db, as_utc(start), as_utc(end))
    return [MeetingResponse.model_validate(m) for m in meetings]


@router.get("/case/{case_id}", response_model=list[MeetingResponse])
async def list_case_meetings(
    case_id: str,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    result = await db.execute(
        select(Meeting)
        .where(
            Meeting.case_id == case_id,
            Meeting.created_by == policy.meeting_list_scope(current_user),
        )
        .order_by(Meeting.scheduled_at, Meeting.id)
    )
    return [MeetingResponse.model_validate(m) for m in result.scalars().all()]


@router.post("", response_model=MeetingResponse, status_code=201)
async def create_meeting(
    data: MeetingCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    if not data.title or not data.scheduled_at or not data.case_id or not data.case_name:
        raise ValidationFailed("Missing required fields")

    meeting = Meeting(
        title=data.title,
        description=data.description,
        scheduled_at=data.scheduled_at,
        duration=data.duration or 60,
        meeting_type=data.meeting_type or "Home Visit",
        location=data.location,
        attendees=data.attendees,
        case_id=data.case_id,
        case_name=data.case_name,
        created_by=current_user.id,
        status="Scheduled",
    )
    db.add(meeting)
    await db.flush()
    await db.refresh(meeting)
    return MeetingResponse.model_validate(meeting)


@router.get("/{meeting_id}", response_model=MeetingResponse)
async def get_meeting(
    meeting_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    return MeetingResponse.model_validate(await get_meeting_or_404(db, meeting_id, current_user))


@router.put("/{meeting_id}", response_model=MeetingResponse)
async def update_meeting(
    meeting_id: int,
    data: MeetingUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    meeting = await get_meeting_or_404(db, meeting_id, current_user)

    update_data = data.model_dump(exclude_unset=True)
    for field in ("title", "scheduled_at", "duration", "meeting_type", "case_id", "case_name", "status"):
        if field in update_data and update_data[field] is None:
            raise ValidationFailed("Validation error", errors=[f"{field}: is required"])

    for key, value in update_data.items():
        setattr(meeting, key, value)

    await db.flush()
    await db.refresh(meeting)
    return MeetingResponse.model_validate(meeting)


@router.delete("/{meeting_id}", response_model=MessageResponse)
async def delete_meeting(
    meeting_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    meeting = await get_meeting_or_404(db, meeting_id, current_user)
    await db.delete(meeting)
    await db.flush()
    return MessageResponse(message="Meeting deleted successfully")

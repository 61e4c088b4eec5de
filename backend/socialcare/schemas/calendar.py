from datetime import datetime
from typing import Literal, Optional
from socialcare.schemas.base import CamelModel


class CalendarEvent(CamelModel):
    id: int
    type: Literal["task", "meeting"]
    title: str
    start: datetime
    end: datetime
    status: str
    case_id: Optional[str] = None
    case_name: Optional[str] = None
    priority: Optional[str] = None
    meeting_type: Optional[str] = None
    location: Optional[str] = None


class CalendarResponse(CamelModel):
    events: list[CalendarEvent]
    total: int


class DashboardSummary(CamelModel):
    active_cases: int
    archived_cases: int
    total_tasks: int
    pending_tasks: int
    blocked_tasks: int
    overdue_tasks: int
    tasks_by_status: dict[str, int]
    upcoming_meetings: int

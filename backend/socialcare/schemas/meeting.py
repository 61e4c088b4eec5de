from typing import Literal, Optional
from pydantic import Field
from socialcare.schemas.base import CamelModel, UTCDateTime

MeetingType = Literal[
    "Home Visit",
    "Office Meeting",
    "Phone Call",
    "Virtual Meeting",
    "School Meeting",
    "Medical Appointment",
    "Court Hearing",
    "Other",
]
MeetingStatus = Literal["Scheduled", "Completed", "Cancelled", "Rescheduled"]


class MeetingCreate(CamelModel):
    title: Optional[str] = Field(default=None, max_length=300)
    description: Optional[str] = None
    scheduled_at: Optional[UTCDateTime] = None
    duration: Optional[int] = Field(default=None, ge=1, le=24 * 60)
    meeting_type: Optional[MeetingType] = None
    location: Optional[str] = Field(default=None, max_length=300)
    attendees: Optional[str] = None
    case_id: Optional[str] = Field(default=None, max_length=50)
    case_name: Optional[str] = Field(default=None, max_length=200)


class MeetingUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = None
    scheduled_at: Optional[UTCDateTime] = None
    duration: Optional[int] = Field(default=None, ge=1, le=24 * 60)
    meeting_type: Optional[MeetingType] = None
    location: Optional[str] = Field(default=None, max_length=300)
    attendees: Optional[str] = None
    case_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    case_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    status: Optional[MeetingStatus] = None


class MeetingResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    scheduled_at: UTCDateTime
    duration: int
    meeting_type: str
    location: Optional[str] = None
    attendees: Optional[str] = None
    case_id: str
    case_name: str
    created_by: int
    status: str
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

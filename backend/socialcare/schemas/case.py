from datetime import date
from typing import Literal, Optional
from pydantic import Field
from socialcare.schemas.base import CamelModel, UTCDateTime

CaseStatus = Literal["Open", "Ongoing", "Closed", "On Hold"]
PriorityLevel = Literal["Low", "Medium", "High", "Urgent"]
LivingSituation = Literal["Alone", "With Family", "Foster Care", "Residential Home", "Homeless"]
InteractionType = Literal["Home Visit", "Office Meeting", "Phone Call", "Virtual Meeting"]
YesNo = Literal["Yes", "No"]


class CaseDetails(CamelModel):
    """Optional client, safeguarding and meeting-note fields shared by create and update."""
    other_case_type: Optional[str] = None
    client_address: Optional[str] = None
    phone_number: Optional[str] = None
    email_address: Optional[str] = None
    living_situation: Optional[LivingSituation] = None
    safeguarding_details: Optional[str] = None
    meeting_date: Optional[UTCDateTime] = None
    attendees: Optional[str] = None
    type_of_interaction: Optional[InteractionType] = None
    meeting_summary: Optional[str] = None
    concerns_raised: Optional[str] = None
    immediate_actions_taken: Optional[str] = None
    client_wishes_feelings: Optional[str] = None
    next_planned_review_date: Optional[UTCDateTime] = None


class CaseCreate(CaseDetails):
    case_id: str = Field(min_length=1, max_length=50)
    client_full_name: str = Field(min_length=1, max_length=200)
    date_of_birth: date
    client_reference_number: str = Field(min_length=1, max_length=100)
    case_type: str = Field(min_length=1, max_length=100)
    case_status: CaseStatus = "Open"
    priority_level: PriorityLevel = "Medium"
    assigned_social_workers: list[str] = []
    safeguarding_concerns: YesNo = "No"
    new_tasks: list[str] = []


class CaseUpdate(CaseDetails):
    case_id: Optional[str] = Field(default=None, min_length=1, max_length=50)
    client_full_name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    date_of_birth: Optional[date] = None
    client_reference_number: Optional[str] = Field(default=None, min_length=1, max_length=100)
    case_type: Optional[str] = Field(default=None, min_length=1, max_length=100)
    case_status: Optional[CaseStatus] = None
    priority_level: Optional[PriorityLevel] = None
    assigned_social_workers: Optional[list[str]] = None
    safeguarding_concerns: Optional[YesNo] = None
    new_tasks: Optional[list[str]] = None


class AttachmentResponse(CamelModel):
    filename: str
    original_name: str
    mime_type: str
    size: int
    uploaded_by: int
    uploaded_at: UTCDateTime


class CaseResponse(CamelModel):
    id: int
    case_id: str
    client_full_name: str
    date_of_birth: date
    client_reference_number: str
    case_type: str
    other_case_type: Optional[str] = None
    case_status: str
    priority_level: str
    assigned_social_workers: list[str] = []
    client_address: Optional[str] = None
    phone_number: Optional[str] = None
    email_address: Optional[str] = None
    living_situation: Optional[str] = None
    safeguarding_concerns: str = "No"
    safeguarding_details: Optional[str] = None
    meeting_date: Optional[UTCDateTime] = None
    attendees: Optional[str] = None
    type_of_interaction: Optional[str] = None
    meeting_summary: Optional[str] = None
    concerns_raised: Optional[str] = None
    immediate_actions_taken: Optional[str] = None
    client_wishes_feelings: Optional[str] = None
    new_tasks: list[str] = []
    next_planned_review_date: Optional[UTCDateTime] = None
    attachments: list[AttachmentResponse] = []
    created_by: int
    archived: bool = False
    archived_at: Optional[UTCDateTime] = None
    archived_by: Optional[int] = None
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

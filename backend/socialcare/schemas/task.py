from typing import Literal, Optional
from pydantic import Field
from socialcare.schemas.base import CamelModel, UTCDateTime

TaskStatus = Literal["Backlog", "In Progress", "Blocked", "Complete"]
TaskPriority = Literal["Low", "Medium", "High"]


class TaskCreate(CamelModel):
    # title and due_date are checked by the router so a missing value
    # reports "Missing required fields" rather than a schema error
    title: Optional[str] = Field(default=None, max_length=300)
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(default=None, max_length=200)
    due_date: Optional[UTCDateTime] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    case_id: Optional[str] = Field(default=None, max_length=50)
    case_name: Optional[str] = Field(default=None, max_length=200)


class TaskUpdate(CamelModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=300)
    description: Optional[str] = None
    assigned_to: Optional[str] = Field(default=None, max_length=200)
    due_date: Optional[UTCDateTime] = None
    priority: Optional[TaskPriority] = None
    status: Optional[TaskStatus] = None
    case_id: Optional[str] = Field(default=None, max_length=50)
    case_name: Optional[str] = Field(default=None, max_length=200)


class TaskResponse(CamelModel):
    id: int
    title: str
    description: Optional[str] = None
    assigned_to: Optional[str] = None
    due_date: UTCDateTime
    priority: str
    status: str
    case_id: Optional[str] = None
    case_name: Optional[str] = None
    created_by: int
    created_at: Optional[UTCDateTime] = None
    updated_at: Optional[UTCDateTime] = None

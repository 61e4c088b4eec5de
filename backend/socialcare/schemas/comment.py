from typing import Optional
from socialcare.schemas.base import CamelModel, UTCDateTime


class CommentCreate(CamelModel):
    text: Optional[str] = None


class CommentBase(CamelModel):
    id: int
    user_id: int
    user_first_name: str
    user_last_name: str
    text: str
    created_at: Optional[UTCDateTime] = None


class CaseCommentResponse(CommentBase):
    case_id: int


class TaskCommentResponse(CommentBase):
    task_id: int

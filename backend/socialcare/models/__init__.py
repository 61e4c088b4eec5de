from socialcare.models.user import User
from socialcare.models.case import Case
from socialcare.models.task import Task
from socialcare.models.meeting import Meeting
from socialcare.models.comment import CaseComment, TaskComment

__all__ = ["User", "Case", "Task", "Meeting", "CaseComment", "TaskComment"]

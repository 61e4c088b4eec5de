import logging
from typing import Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from socialcare import policy
from socialcare.database import get_db
from socialcare.models.task import Task
from socialcare.models.comment import TaskComment
from socialcare.auth import get_current_user, Principal
from socialcare.exceptions import NotFoundError, ValidationFailed
from socialcare.kanban import build_board
from socialcare.schemas.base import MessageResponse
from socialcare.schemas.task import TaskCreate, TaskResponse, TaskStatus, TaskUpdate

logger = logging.getLogger(__name__)

router = APIRouter()


async def get_task_or_404(db: AsyncSession, task_id: int, principal: Principal) -> Task:
    task = await db.get(Task, task_id)
    if not task or not policy.can_modify_task(principal, task):
        raise NotFoundError("Task not found")
    return task


def _scoped_query(principal: Principal, status: Optional[str], case_id: Optional[str]):
    query = select(Task)
    scope = policy.task_list_scope(principal)
    if scope is not None:
        query = query.where(Task.created_by == scope)
    if status:
        query = query.where(Task.status == status)
    if case_id:
        query = query.where(Task.case_id == case_id)
    return query.order_by(Task.created_at.desc(), Task.id.desc())


@router.get("", response_model=list[TaskResponse])
async def list_tasks(
    status: Optional[TaskStatus] = Query(None),
    case_id: Optional[str] = Query(None, alias="caseId"),
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    result = await db.execute(_scoped_query(current_user, status, case_id))
    return [TaskResponse.model_validate(t) for t in result.scalars().all()]


@router.get("/board")
async def get_board(
    case_id: Optional[str] = Query(None, alias="caseId"),
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    """Tasks grouped into the four Kanban columns."""
    result = await db.execute(_scoped_query(current_user, None, case_id))
    return build_board(
        TaskResponse.model_validate(t).model_dump(by_alias=True, mode="json")
        for t in result.scalars().all()
    )


@router.post("", response_model=TaskResponse, status_code=201)
async def create_task(
    data: TaskCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    if not data.title or not data.due_date:
        raise ValidationFailed("Missing required fields")

    task = Task(
        title=data.title,
        description=data.description,
        assigned_to=data.assigned_to,
        due_date=data.due_date,
        priority=data.priority or "Medium",
        status=data.status or "Backlog",
        case_id=data.case_id,
        case_name=data.case_name,
        created_by=current_user.id,
    )
    db.add(task)
    await db.flush()
    await db.refresh(task)
    return TaskResponse.model_validate(task)


@router.get("/{task_id}", response_model=TaskResponse)
async def get_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    return TaskResponse.model_validate(await get_task_or_404(db, task_id, current_user))


@router.put("/{task_id}", response_model=TaskResponse)
async def update_task(
    task_id: int,
    data: TaskUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    """Full edit or a drag-and-drop status change; any status may follow any other."""
    task = await get_task_or_404(db, task_id, current_user)

    update_data = data.model_dump(exclude_unset=True)
    for field in ("title", "due_date", "priority", "status"):
        if field in update_data and update_data[field] is None:
            raise ValidationFailed("Validation error", errors=[f"{field}: is required"])

    previous_status = task.status
    for key, value in update_data.items():
        setattr(task, key, value)

    await db.flush()
    await db.refresh(task)
    if task.status != previous_status:
        logger.info("Task %s moved from %s to %s", task.id, previous_status, task.status)
    return TaskResponse.model_validate(task)


@router.delete("/{task_id}", response_model=MessageResponse)
async def delete_task(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    task = await get_task_or_404(db, task_id, current_user)
    await db.execute(delete(TaskComment).where(TaskComment.task_id == task.id))
    await db.delete(task)
    await db.flush()
    return MessageResponse(message="Task deleted successfully")

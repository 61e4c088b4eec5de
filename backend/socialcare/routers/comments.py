from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from socialcare import policy
from socialcare.database import get_db
from socialcare.models.comment import CaseComment, TaskComment
from socialcare.models.task import Task
from socialcare.auth import get_current_user, Principal
from socialcare.exceptions import NotFoundError, ValidationFailed
from socialcare.routers.cases import get_case_or_404
from socialcare.schemas.base import MessageResponse
from socialcare.schemas.comment import CaseCommentResponse, CommentCreate, TaskCommentResponse

router = APIRouter()


def _comment_text(data: CommentCreate) -> str:
    text = (data.text or "").strip()
    if not text:
        raise ValidationFailed("Comment text is required")
    return text


async def _get_task_for_comments(db: AsyncSession, task_id: int, principal: Principal) -> Task:
    task = await db.get(Task, task_id)
    if not task or not policy.can_comment_on_task(principal, task):
        raise NotFoundError("Task not found")
    return task


# Case comments: oldest first, like a conversation thread

@router.get("/cases/{case_pk}/comments", response_model=list[CaseCommentResponse])
async def list_case_comments(
    case_pk: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    await get_case_or_404(db, case_pk, current_user, policy.can_view_case)
    result = await db.execute(
        select(CaseComment)
        .where(CaseComment.case_id == case_pk)
        .order_by(CaseComment.created_at, CaseComment.id)
    )
    return [CaseCommentResponse.model_validate(c) for c in result.scalars().all()]


@router.post("/cases/{case_pk}/comments", response_model=CaseCommentResponse, status_code=201)
async def add_case_comment(
    case_pk: int,
    data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    text = _comment_text(data)
    case = await get_case_or_404(db, case_pk, current_user, policy.can_comment_on_case)

    comment = CaseComment(
        case_id=case.id,
        user_id=current_user.id,
        user_first_name=current_user.first_name,
        user_last_name=current_user.last_name,
        text=text,
    )
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    return CaseCommentResponse.model_validate(comment)


@router.delete("/case-comments/{comment_id}", response_model=MessageResponse)
async def delete_case_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    comment = await db.get(CaseComment, comment_id)
    if not comment or not policy.can_delete_comment(current_user, comment):
        raise NotFoundError("Comment not found or you do not have permission to delete it")
    await db.delete(comment)
    await db.flush()
    return MessageResponse(message="Comment deleted successfully")


# Task comments: newest first

@router.get("/tasks/{task_id}/comments", response_model=list[TaskCommentResponse])
async def list_task_comments(
    task_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    await _get_task_for_comments(db, task_id, current_user)
    result = await db.execute(
        select(TaskComment)
        .where(TaskComment.task_id == task_id)
        .order_by(TaskComment.created_at.desc(), TaskComment.id.desc())
    )
    return [TaskCommentResponse.model_validate(c) for c in result.scalars().all()]


@router.post("/tasks/{task_id}/comments", response_model=TaskCommentResponse, status_code=201)
async def add_task_comment(
    task_id: int,
    data: CommentCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    text = _comment_text(data)
    task = await _get_task_for_comments(db, task_id, current_user)

    comment = TaskComment(
        task_id=task.id,
        user_id=current_user.id,
        user_first_name=current_user.first_name,
        user_last_name=current_user.last_name,
        text=text,
    )
    db.add(comment)
    await db.flush()
    await db.refresh(comment)
    return TaskCommentResponse.model_validate(comment)


@router.delete("/task-comments/{comment_id}", response_model=MessageResponse)
async def delete_task_comment(
    comment_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    comment = await db.get(TaskComment, comment_id)
    if not comment or not policy.can_delete_comment(current_user, comment):
        raise NotFoundError("Comment not found")
    await db.delete(comment)
    await db.flush()
    return MessageResponse(message="Comment deleted successfully")

import logging
from datetime import datetime, timezone
from typing import Callable
from fastapi import APIRouter, Depends, File, Query, UploadFile
from fastapi.responses import FileResponse
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, delete
from sqlalchemy.exc import IntegrityError
from socialcare import policy
from socialcare.database import get_db
from socialcare.models.case import Case
from socialcare.models.comment import CaseComment
from socialcare.auth import get_current_user, Principal
from socialcare.exceptions import ConflictError, NotFoundError, ValidationFailed
from socialcare.schemas.base import MessageResponse
from socialcare.schemas.case import CaseCreate, CaseResponse, CaseUpdate
from socialcare.services.attachment_service import attachment_service

logger = logging.getLogger(__name__)

router = APIRouter()

# Columns an update may change but never clear
NON_NULL_FIELDS = (
    "case_id",
    "client_full_name",
    "date_of_birth",
    "client_reference_number",
    "case_type",
    "case_status",
    "priority_level",
    "safeguarding_concerns",
    "assigned_social_workers",
    "new_tasks",
)


async def get_case_or_404(
    db: AsyncSession,
    case_pk: int,
    principal: Principal,
    allowed: Callable[[Principal, Case], bool] = policy.can_view_case,
    message: str = "Case not found",
) -> Case:
    """Load a case the principal may act on; denial looks exactly like absence."""
    case = await db.get(Case, case_pk)
    if not case:
        raise NotFoundError(message)
    if not allowed(principal, case):
        logger.warning("User %s denied %s on case %s", principal.id, allowed.__name__, case_pk)
        raise NotFoundError(message)
    return case


async def _ensure_case_id_free(db: AsyncSession, case_id: str, exclude_pk: int = None) -> None:
    query = select(Case.id).where(Case.case_id == case_id)
    if exclude_pk is not None:
        query = query.where(Case.id != exclude_pk)
    if await db.scalar(query) is not None:
        raise ConflictError("Case ID already exists")


def _find_attachment(case: Case, filename: str) -> dict:
    for attachment in case.attachments or []:
        if attachment.get("filename") == filename:
            return attachment
    raise NotFoundError("Attachment not found")


@router.get("", response_model=list[CaseResponse])
async def list_cases(
    archived: bool = Query(False, description="true lists archived cases instead of active ones"),
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    query = (
        select(Case)
        .where(Case.archived == archived)
        .order_by(Case.created_at.desc(), Case.id.desc())
    )
    result = await db.execute(query)
    # Assignment is by name inside a JSON list, so visibility is decided in Python
    return [
        CaseResponse.model_validate(c)
        for c in result.scalars().all()
        if policy.can_view_case(current_user, c)
    ]


@router.post("", response_model=CaseResponse, status_code=201)
async def create_case(
    data: CaseCreate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    await _ensure_case_id_free(db, data.case_id)

    case = Case(**data.model_dump(), created_by=current_user.id, archived=False, attachments=[])
    db.add(case)
    try:
        await db.flush()
    except IntegrityError:
        raise ConflictError("Case ID already exists")
    await db.refresh(case)

    logger.info("User %s created case %s", current_user.id, case.case_id)
    return CaseResponse.model_validate(case)


@router.get("/{case_pk}", response_model=CaseResponse)
async def get_case(
    case_pk: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(db, case_pk, current_user)
    return CaseResponse.model_validate(case)


@router.put("/{case_pk}", response_model=CaseResponse)
async def update_case(
    case_pk: int,
    data: CaseUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(
        db, case_pk, current_user, policy.can_edit_case,
        "Case not found or you do not have permission to edit it",
    )

    update_data = data.model_dump(exclude_unset=True)
    missing = [f"{field}: is required" for field in NON_NULL_FIELDS if field in update_data and update_data[field] is None]
    if missing:
        raise ValidationFailed("Validation failed", errors=missing)
    if "case_id" in update_data and update_data["case_id"] != case.case_id:
        await _ensure_case_id_free(db, update_data["case_id"], exclude_pk=case.id)

    for key, value in update_data.items():
        setattr(case, key, value)

    try:
        await db.flush()
    except IntegrityError:
        if "case_id" not in update_data:
            raise
        raise ConflictError("Case ID already exists")
    await db.refresh(case)
    return CaseResponse.model_validate(case)


@router.delete("/{case_pk}", response_model=MessageResponse)
async def delete_case(
    case_pk: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(
        db, case_pk, current_user, policy.can_delete_case,
        "Case not found or you do not have permission to delete it",
    )

    filenames = [a.get("filename") for a in case.attachments or []]
    await db.execute(delete(CaseComment).where(CaseComment.case_id == case.id))
    await db.delete(case)
    await db.flush()

    for filename in filenames:
        await attachment_service.delete(filename)

    logger.info("User %s deleted case %s", current_user.id, case.case_id)
    return MessageResponse(message="Case deleted successfully")


@router.patch("/{case_pk}/archive", response_model=CaseResponse)
async def archive_case(
    case_pk: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(db, case_pk, current_user, policy.can_archive_case)
    if case.archived:
        raise ValidationFailed("Case is already archived")

    case.archived = True
    case.archived_at = datetime.now(timezone.utc)
    case.archived_by = current_user.id
    await db.flush()
    await db.refresh(case)

    logger.info("User %s archived case %s", current_user.id, case.case_id)
    return CaseResponse.model_validate(case)


@router.patch("/{case_pk}/unarchive", response_model=CaseResponse)
async def unarchive_case(
    case_pk: int,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(db, case_pk, current_user, policy.can_archive_case)
    if not case.archived:
        raise ValidationFailed("Case is not archived")

    case.archived = False
    case.archived_at = None
    case.archived_by = None
    await db.flush()
    await db.refresh(case)

    logger.info("User %s unarchived case %s", current_user.id, case.case_id)
    return CaseResponse.model_validate(case)


@router.post("/{case_pk}/upload", response_model=CaseResponse, status_code=201)
async def upload_attachment(
    case_pk: int,
    file: UploadFile = File(...),
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(db, case_pk, current_user, policy.can_upload_attachment)

    record = await attachment_service.save(file, uploaded_by=current_user.id)
    # Reassign so the JSON column is flagged dirty
    case.attachments = [*(case.attachments or []), record]
    await db.flush()
    await db.refresh(case)
    return CaseResponse.model_validate(case)


@router.get("/{case_pk}/attachments/{filename}")
async def download_attachment(
    case_pk: int,
    filename: str,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(db, case_pk, current_user)
    attachment = _find_attachment(case, filename)
    if not await attachment_service.exists(filename):
        raise NotFoundError("Attachment not found")
    return FileResponse(
        attachment_service.path_for(filename),
        filename=attachment.get("original_name") or filename,
        media_type=attachment.get("mime_type"),
    )


@router.delete("/{case_pk}/attachments/{filename}", response_model=MessageResponse)
async def delete_attachment(
    case_pk: int,
    filename: str,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    case = await get_case_or_404(db, case_pk, current_user, policy.can_delete_attachment)
    _find_attachment(case, filename)

    case.attachments = [a for a in case.attachments or [] if a.get("filename") != filename]
    await db.flush()
    await attachment_service.delete(filename)
    return MessageResponse(message="Attachment deleted successfully")

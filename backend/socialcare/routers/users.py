import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from socialcare.database import get_db
from socialcare.models.user import User
from socialcare.auth import get_current_user, Principal
from socialcare.exceptions import ConflictError, NotFoundError, ValidationFailed
from socialcare.passwords import MIN_PASSWORD_LENGTH, hash_password, verify_password
from socialcare.routers.auth import check_email_domain, normalize_email
from socialcare.schemas.base import MessageResponse
from socialcare.schemas.user import PasswordChange, ProfileUpdate, UserResponse, UserSummary

logger = logging.getLogger(__name__)

router = APIRouter()

ROLES = ("caregiver", "manager")


async def _load_self(db: AsyncSession, principal: Principal) -> User:
    user = await db.get(User, principal.id)
    if not user:
        raise NotFoundError("User not found")
    return user


@router.get("", response_model=list[UserSummary])
async def list_users(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    """Active users for assignment dropdowns: names and roles only."""
    result = await db.execute(
        select(User).where(User.is_active.is_(True)).order_by(User.first_name, User.last_name, User.id)
    )
    return [UserSummary.model_validate(u) for u in result.scalars().all()]


@router.get("/profile", response_model=UserResponse)
async def get_profile(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    return UserResponse.model_validate(await _load_self(db, current_user))


@router.put("/profile", response_model=UserResponse)
async def update_profile(
    data: ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    if not data.name or not data.email:
        raise ValidationFailed("Name and email are required")
    # Case assignment matches on "First Last", so both parts must be present
    first, _, rest = " ".join(data.name.split()).partition(" ")
    if not rest:
        raise ValidationFailed("Please provide both a first and last name")
    if data.role and data.role not in ROLES:
        raise ValidationFailed("Invalid role")
    if data.role and data.role != current_user.role and not current_user.is_manager:
        raise ValidationFailed("Role changes require a manager")

    email = normalize_email(data.email)
    check_email_domain(email)
    taken = await db.scalar(select(User).where(User.email == email, User.id != current_user.id))
    if taken:
        raise ConflictError("Email is already in use")

    user = await _load_self(db, current_user)
    user.first_name = first
    user.last_name = rest
    user.email = email
    if data.role:
        user.role = data.role

    await db.flush()
    await db.refresh(user)
    return UserResponse.model_validate(user)


@router.put("/change-password", response_model=MessageResponse)
async def change_password(
    data: PasswordChange,
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    if not data.current_password or not data.new_password:
        raise ValidationFailed("Current password and new password are required")
    if len(data.new_password) < MIN_PASSWORD_LENGTH:
        raise ValidationFailed(f"New password must be at least {MIN_PASSWORD_LENGTH} characters long")

    user = await _load_self(db, current_user)
    if not verify_password(data.current_password, user.password_hash):
        raise ValidationFailed("Current password is incorrect")

    user.password_hash = hash_password(data.new_password)
    await db.flush()
    logger.info("User %s changed password", user.id)
    return MessageResponse(message="Password changed successfully")

import logging
from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from socialcare.config import get_settings
from socialcare.database import get_db
from socialcare.models.user import User
from socialcare.auth import create_token, get_current_user, Principal
from socialcare.exceptions import ConflictError, NotFoundError, ValidationFailed
from socialcare.passwords import hash_password, verify_password
from socialcare.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserResponse

logger = logging.getLogger(__name__)

router = APIRouter()


def normalize_email(email: str) -> str:
    return email.strip().lower()


def check_email_domain(email: str) -> None:
    domain = get_settings().allowed_email_domain.lower()
    local, _, host = email.partition("@")
    if not local or not host or not ("." + host).endswith(domain):
        raise ValidationFailed(f"Registration is restricted to {domain} email addresses")


@router.post("/register", response_model=AuthResponse, status_code=201)
async def register(data: RegisterRequest, db: AsyncSession = Depends(get_db)):
    """Create a caregiver account. The role is never taken from the request."""
    email = normalize_email(data.email)
    check_email_domain(email)

    existing = await db.scalar(select(User).where(User.email == email))
    if existing:
        raise ConflictError("User already exists")

    user = User(
        email=email,
        password_hash=hash_password(data.password),
        first_name=data.first_name,
        last_name=data.last_name,
        role="caregiver",
        is_active=True,
    )
    db.add(user)
    try:
        await db.flush()
    except IntegrityError:
        raise ConflictError("User already exists")
    await db.refresh(user)

    logger.info("Registered user %s (%s)", user.id, user.email)
    return AuthResponse(token=create_token(user), user=UserResponse.model_validate(user))


@router.post("/login", response_model=AuthResponse)
async def login(data: LoginRequest, db: AsyncSession = Depends(get_db)):
    email = normalize_email(data.email)
    user = await db.scalar(select(User).where(User.email == email))
    if not user or not user.is_active or not verify_password(data.password, user.password_hash):
        logger.warning("Failed login for %s", email)
        raise ValidationFailed("Invalid credentials")

    logger.info("User %s logged in", user.id)
    return AuthResponse(token=create_token(user), user=UserResponse.model_validate(user))


@router.get("/me", response_model=UserResponse)
async def me(
    db: AsyncSession = Depends(get_db),
    current_user: Principal = Depends(get_current_user),
):
    user = await db.get(User, current_user.id)
    if not user:
        raise NotFoundError("User not found")
    return UserResponse.model_validate(user)

"""
Auth module: JWT creation/validation and the get_current_user FastAPI dependency.

Tokens only carry the user id and role. The dependency always reloads the
User row for the id in the token, so role and name checks use the live
record and a demoted or deactivated user loses access immediately.
"""

import logging
import time
from dataclasses import dataclass
from typing import Optional
from jose import jwt, JWTError
from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession
from socialcare.config import get_settings
from socialcare.database import get_db
from socialcare.exceptions import AuthenticationError
from socialcare.models.user import User

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


@dataclass(frozen=True)
class Principal:
    """Resolved identity attached to each request."""
    id: int
    role: str                     # "caregiver" | "manager"
    first_name: str
    last_name: str
    email: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def is_manager(self) -> bool:
        return self.role == "manager"

    @classmethod
    def from_user(cls, user: User) -> "Principal":
        return cls(
            id=user.id,
            role=user.role,
            first_name=user.first_name,
            last_name=user.last_name,
            email=user.email,
        )


def create_token(user: User) -> str:
    """Create a signed JWT for the given User model instance."""
    settings = get_settings()
    payload = {
        "sub": str(user.id),
        "role": user.role,
        "exp": int(time.time()) + settings.token_expire_seconds,
    }
    return jwt.encode(payload, settings.jwt_secret_key, algorithm=ALGORITHM)


def decode_token(token: str) -> Optional[dict]:
    """Decode and validate a JWT. Returns None if invalid/expired."""
    try:
        settings = get_settings()
        payload = jwt.decode(token, settings.jwt_secret_key, algorithms=[ALGORITHM])
    except JWTError:
        return None
    if not str(payload.get("sub", "")).isdigit():
        return None
    return payload


async def get_current_user(request: Request, db: AsyncSession = Depends(get_db)) -> Principal:
    """
    FastAPI dependency. Extracts the bearer token and loads its user.
    Raises 401 when the header is absent, the token does not verify, or
    the user no longer exists or has been deactivated.
    """
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        raise AuthenticationError("No token, authorization denied")

    payload = decode_token(auth_header[7:].strip())
    if payload is None:
        raise AuthenticationError("Token is not valid")

    user = await db.get(User, int(payload["sub"]))
    if user is None or not user.is_active:
        logger.warning("Rejected token for missing or inactive user %s", payload["sub"])
        raise AuthenticationError("Token is not valid")
    return Principal.from_user(user)

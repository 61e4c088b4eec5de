"""Bcrypt password hashing.

bcrypt only looks at the first 72 bytes of a password; longer inputs are
truncated explicitly so that newer bcrypt releases do not reject them.
"""

import bcrypt
from socialcare.config import get_settings

MIN_PASSWORD_LENGTH = 6


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:72]


def hash_password(password: str) -> str:
    rounds = get_settings().bcrypt_rounds
    return bcrypt.hashpw(_encode(password), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
    except ValueError:
        # Malformed stored hash
        return False

# pcstore/utils/security.py
from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from pcstore.utils.settings import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_MINUTES


class InvalidTokenError(Exception):
    """Token jest niepoprawny albo wygasł."""


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))


def create_token(user_id: int, role: str) -> str:
    exp = datetime.now(timezone.utc) + timedelta(minutes=JWT_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "role": role, "exp": exp}
    return jwt.encode(payload, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_token(token: str) -> dict:
    try:
        payload = jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise InvalidTokenError("Token expired")
    except jwt.InvalidTokenError:
        raise InvalidTokenError("Invalid token")

    if not payload.get("sub"):
        raise InvalidTokenError("Invalid token payload")
    return payload

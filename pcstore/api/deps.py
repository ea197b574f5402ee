# pcstore/api/deps.py
from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from pcstore.data.database import get_db
from pcstore.data.models.user import UserModel
from pcstore.repos.user_repo import UserRepo
from pcstore.domain.enums import Role
from pcstore.services.notification_service import NotificationService
from pcstore.services.reset_code_store import ResetCodeStore
from pcstore.utils.security import InvalidTokenError, decode_token

bearer = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(bearer),
    db: Session = Depends(get_db),
) -> UserModel:
    """Zalogowany użytkownik z tokena Bearer, inaczej 401."""
    if credentials is None:
        raise HTTPException(status_code=401, detail="Not authenticated")

    try:
        payload = decode_token(credentials.credentials)
        user_id = int(payload["sub"])
    except (InvalidTokenError, ValueError) as e:
        raise HTTPException(status_code=401, detail=str(e))

    user = UserRepo(db).get_user(user_id)
    if not user:
        raise HTTPException(status_code=401, detail="User no longer exists")
    return user


def require_admin(user: UserModel = Depends(get_current_user)) -> UserModel:
    if not is_admin(user):
        raise HTTPException(status_code=403, detail="Admin role required")
    return user


def is_admin(user: UserModel) -> bool:
    return user.role == Role.ADMIN.value


#podmieniane w testach przez app.dependency_overrides
def get_notification_service() -> NotificationService:
    return NotificationService()


def get_reset_code_store() -> ResetCodeStore:
    return ResetCodeStore()

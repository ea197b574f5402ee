# pcstore/services/password_reset_service.py
import secrets

from sqlalchemy.orm import Session

from pcstore.services.user_service import UserService
from pcstore.services.reset_code_store import ResetCodeStore
from pcstore.services.notification_service import NotificationService
from pcstore.domain.exceptions import ValidationError
from pcstore.utils.settings import RESET_CODE_TTL_SECONDS
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


def generate_code() -> str:
    return f"{secrets.randbelow(1_000_000):06d}"


class PasswordResetService:
    """
    Reset hasła kodem wysłanym mailem.

    -kod 6 cyfr, ważny godzinę (TTL w redisie)
    -nowy request nadpisuje poprzedni kod
    -nieznany email: odpowiedź taka sama, nic nie wysyłamy
    """

    def __init__(
        self,
        db: Session,
        code_store: ResetCodeStore,
        notification_service: NotificationService | None = None,
        ttl: int = RESET_CODE_TTL_SECONDS,
    ):
        self.users = UserService(db)
        self.code_store = code_store
        self.notification_service = notification_service or NotificationService()
        self.ttl = ttl

    def request_reset(self, email: str) -> None:
        user = self.users.find_by_email(email)
        if not user:
            logger.info(f"Password reset requested for unknown email {email}")
            return

        code = generate_code()
        self.code_store.save(user.email, code, self.ttl)
        self.notification_service.send_password_reset(user.email, code)
        logger.info(f"Password reset code issued for user {user.id}")

    def validate(self, email: str, code: str) -> bool:
        stored = self.code_store.get(email)
        return stored is not None and secrets.compare_digest(stored, code)

    def update_password(self, email: str, code: str, new_password: str) -> None:
        if not self.validate(email, code):
            raise ValidationError("Invalid or expired reset code")

        user = self.users.find_by_email(email)
        if not user:
            raise ValidationError("Invalid or expired reset code")

        self.users.set_password(user, new_password)
        self.code_store.delete(email)
        logger.info(f"Password updated for user {user.id}")

from sqlalchemy.orm import Session

from pcstore.data.models.user import UserModel
from pcstore.repos.user_repo import UserRepo
from pcstore.domain.enums import Role
from pcstore.domain.exceptions import AuthenticationError, ConflictError, NotFoundError, ValidationError
from pcstore.domain.schemas import UserCreate, UserUpdate, UserRead, UserProfile, LoginIn, TokenOut
from pcstore.utils.security import hash_password, verify_password, create_token
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)

# kolumny NOT NULL, null w update nie może ich wyczyścić
REQUIRED_FIELDS = ("username", "first_name", "last_name", "email")


class UserService:
    def __init__(self, db: Session):
        self.repo = UserRepo(db)

    def register(self, payload: UserCreate) -> TokenOut:
        if self.repo.find_by_username(payload.username):
            raise ConflictError("Username already taken")
        if self.repo.find_by_email(payload.email):
            raise ConflictError("Email already registered")

        user = UserModel(
            username=payload.username,
            password_hash=hash_password(payload.password),
            first_name=payload.first_name,
            last_name=payload.last_name,
            email=payload.email,
            phone=payload.phone,
            national_id=payload.national_id,
            role=Role.USER.value,
        )
        created = self.repo.create_user(user)

        logger.info(f"Registered user {created.id} ({created.username})")
        return TokenOut(token=create_token(created.id, created.role))

    def login(self, payload: LoginIn) -> TokenOut:
        user = self.repo.find_by_username(payload.username)
        if not user or not verify_password(payload.password, user.password_hash):
            raise AuthenticationError("Invalid credentials")
        return TokenOut(token=create_token(user.id, user.role))

    def get_user(self, user_id: int) -> UserRead:
        return UserRead.model_validate(self._get(user_id))

    def find_by_username(self, username: str) -> UserModel | None:
        return self.repo.find_by_username(username)

    def find_by_email(self, email: str) -> UserModel | None:
        return self.repo.find_by_email(email)

    def get_profile(self, user_id: int) -> UserProfile:
        user = self._get(user_id)
        counts = self.repo.count_owned(user_id)
        return UserProfile(**UserRead.model_validate(user).model_dump(), **counts)

    def update_user(self, user_id: int, payload: UserUpdate) -> UserRead:
        user = self._get(user_id)
        data = payload.model_dump(exclude_unset=True)

        nulled = [f for f in REQUIRED_FIELDS if f in data and data[f] is None]
        if nulled:
            raise ValidationError(f"Fields cannot be null: {nulled}")

        if "username" in data and data["username"] != user.username:
            if self.repo.find_by_username(data["username"]):
                raise ConflictError("Username already taken")
        if "email" in data and data["email"].lower() != user.email.lower():
            if self.repo.find_by_email(data["email"]):
                raise ConflictError("Email already registered")

        for field, value in data.items():
            setattr(user, field, value)

        updated = self.repo.save(user)
        logger.info(f"Updated user {user_id}")
        return UserRead.model_validate(updated)

    def set_password(self, user: UserModel, new_password: str) -> None:
        user.password_hash = hash_password(new_password)
        self.repo.save(user)

    def delete_user(self, user_id: int) -> None:
        user = self._get(user_id)
        try:
            self.repo.detach_owned(user_id)
            self.repo.delete(user)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise
        logger.info(f"Deleted user {user_id}")

    def _get(self, user_id: int) -> UserModel:
        user = self.repo.get_user(user_id)
        if not user:
            raise NotFoundError("User not found")
        return user

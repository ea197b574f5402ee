# pcstore/repos/user_repo.py
from sqlalchemy import func, select, update
from sqlalchemy.orm import Session

from pcstore.data.models.user import UserModel
from pcstore.data.models.order import OrderModel
from pcstore.data.models.comment import CommentModel
from pcstore.data.models.favorite import FavoriteModel


class UserRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_user(self, user_id: int) -> UserModel | None:
        return self.db.get(UserModel, user_id)

    def find_by_username(self, username: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(UserModel.username == username)
        ).scalar_one_or_none()

    def find_by_email(self, email: str) -> UserModel | None:
        return self.db.execute(
            select(UserModel).where(func.lower(UserModel.email) == email.lower())
        ).scalar_one_or_none()

    def create_user(self, user: UserModel) -> UserModel:
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)
        return user

    def save(self, user: UserModel) -> UserModel:
        self.db.commit()
        self.db.refresh(user)
        return user

    def count_owned(self, user_id: int) -> dict:
        def _count(model):
            return self.db.execute(
                select(func.count()).select_from(model).where(model.user_id == user_id)
            ).scalar_one()

        return {
            "orders": _count(OrderModel),
            "comments": _count(CommentModel),
            "favorites": _count(FavoriteModel),
        }

    def detach_owned(self, user_id: int) -> None:
        #odpinamy zamówienia, komentarze i ulubione - historia zostaje
        for model in (OrderModel, CommentModel, FavoriteModel):
            self.db.execute(
                update(model).where(model.user_id == user_id).values(user_id=None)
            )

    def delete(self, user: UserModel) -> None:
        self.db.delete(user)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

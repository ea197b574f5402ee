# pcstore/repos/favorite_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from pcstore.data.models.favorite import FavoriteModel


class FavoriteRepo:
    def __init__(self, db: Session):
        self.db = db

    def find(self, user_id: int, product_id: int) -> FavoriteModel | None:
        return self.db.execute(
            select(FavoriteModel).where(
                FavoriteModel.user_id == user_id,
                FavoriteModel.product_id == product_id,
            )
        ).scalar_one_or_none()

    def list_by_user(self, user_id: int) -> list[FavoriteModel]:
        return list(
            self.db.execute(
                select(FavoriteModel).where(FavoriteModel.user_id == user_id).order_by(FavoriteModel.id)
            ).scalars().all()
        )

    def create_favorite(self, favorite: FavoriteModel) -> FavoriteModel:
        self.db.add(favorite)
        self.db.commit()
        self.db.refresh(favorite)
        return favorite

    def delete(self, favorite: FavoriteModel) -> None:
        self.db.delete(favorite)
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

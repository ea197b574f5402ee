# pcstore/services/favorite_service.py
from typing import List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pcstore.data.models.favorite import FavoriteModel
from pcstore.repos.favorite_repo import FavoriteRepo
from pcstore.repos.product_repo import ProductRepo
from pcstore.domain.exceptions import ConflictError, NotFoundError
from pcstore.domain.schemas import FavoriteOut
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


def favorite_to_out(favorite: FavoriteModel) -> FavoriteOut:
    product = favorite.product
    return FavoriteOut(
        id=product.id,
        name=product.name,
        description=product.description,
        price=product.price,
        image=product.image,
    )


class FavoriteService:
    def __init__(self, db: Session):
        self.repo = FavoriteRepo(db)
        self.product_repo = ProductRepo(db)

    def add_favorite(self, user_id: int, product_id: int) -> FavoriteOut:
        if not self.product_repo.get_product(product_id):
            raise NotFoundError("Product not found")

        if self.repo.find(user_id, product_id):
            raise ConflictError("Product is already in favorites")

        try:
            favorite = self.repo.create_favorite(FavoriteModel(user_id=user_id, product_id=product_id))
        except IntegrityError:
            #równoległy request wstawił tę samą parę, uq_favorite_user_product
            self.repo.rollback()
            raise ConflictError("Product is already in favorites")

        logger.info(f"User {user_id} added product {product_id} to favorites")
        return favorite_to_out(favorite)

    def list_favorites(self, user_id: int) -> List[FavoriteOut]:
        return [favorite_to_out(f) for f in self.repo.list_by_user(user_id)]

    def remove_favorite(self, user_id: int, product_id: int) -> None:
        favorite = self.repo.find(user_id, product_id)
        if not favorite:
            raise NotFoundError("Product is not in favorites")
        self.repo.delete(favorite)
        logger.info(f"User {user_id} removed product {product_id} from favorites")

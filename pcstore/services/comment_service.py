# pcstore/services/comment_service.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from pcstore.data.models.comment import CommentModel
from pcstore.repos.comment_repo import CommentRepo
from pcstore.repos.product_repo import ProductRepo
from pcstore.domain.exceptions import NotFoundError
from pcstore.domain.schemas import CommentOut
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


def comment_to_out(comment: CommentModel) -> CommentOut:
    return CommentOut(
        id=comment.id,
        product_id=comment.product_id,
        product_name=comment.product.name,
        content=comment.content,
        user_id=comment.user_id,
        username=comment.user.username if comment.user else None,
        created_at=comment.created_at,
    )


class CommentService:
    def __init__(self, db: Session):
        self.repo = CommentRepo(db)
        self.product_repo = ProductRepo(db)

    def add_comment(self, user_id: int, product_id: int, content: str) -> CommentOut:
        if not self.product_repo.get_product(product_id):
            raise NotFoundError("Product not found")

        comment = self.repo.create_comment(
            CommentModel(user_id=user_id, product_id=product_id, content=content)
        )
        logger.info(f"User {user_id} commented product {product_id} (comment {comment.id})")
        return comment_to_out(comment)

    def list_by_product(self, product_id: int) -> List[CommentOut]:
        if not self.product_repo.get_product(product_id):
            raise NotFoundError("Product not found")
        return [comment_to_out(c) for c in self.repo.list_by_product(product_id)]

    def edit_comment(self, comment_id: int, user_id: int, content: str) -> CommentOut:
        comment = self._get_authored(comment_id, user_id)
        comment.content = content
        comment.created_at = datetime.now(timezone.utc)
        updated = self.repo.save(comment)
        logger.info(f"Edited comment {comment_id}")
        return comment_to_out(updated)

    def delete_comment(self, comment_id: int, user_id: int) -> None:
        comment = self._get_authored(comment_id, user_id)
        self.repo.delete(comment)
        logger.info(f"Deleted comment {comment_id}")

    def _get_authored(self, comment_id: int, user_id: int) -> CommentModel:
        comment = self.repo.get_comment(comment_id)
        if not comment:
            raise NotFoundError("Comment not found")
        #tylko autor
        if comment.user_id != user_id:
            raise PermissionError("You can only modify your own comments")
        return comment

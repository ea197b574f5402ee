# pcstore/repos/comment_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from pcstore.data.models.comment import CommentModel


class CommentRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_comment(self, comment_id: int) -> CommentModel | None:
        return self.db.get(CommentModel, comment_id)

    def list_by_product(self, product_id: int) -> list[CommentModel]:
        return list(
            self.db.execute(
                select(CommentModel)
                .where(CommentModel.product_id == product_id)
                .order_by(CommentModel.created_at, CommentModel.id)
            ).scalars().all()
        )

    def create_comment(self, comment: CommentModel) -> CommentModel:
        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def save(self, comment: CommentModel) -> CommentModel:
        self.db.commit()
        self.db.refresh(comment)
        return comment

    def delete(self, comment: CommentModel) -> None:
        self.db.delete(comment)
        self.db.commit()

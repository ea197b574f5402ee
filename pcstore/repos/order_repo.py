# pcstore/repos/order_repo.py
from sqlalchemy import select, update
from sqlalchemy.orm import Session

from pcstore.data.models.order import OrderModel
from pcstore.domain.enums import OrderStatus


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_order(self, order_id: int) -> OrderModel | None:
        return self.db.get(OrderModel, order_id)

    def list_by_user(self, user_id: int) -> list[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel).where(OrderModel.user_id == user_id).order_by(OrderModel.id)
            ).scalars().all()
        )

    def get_active_order(self, user_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.user_id == user_id,
                OrderModel.status == OrderStatus.CART.value,
            )
        ).scalars().first()

    def add(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.flush()
        return order

    def update_order_version(
        self,
        order_id: int,
        old_version: int,
        new_data: dict,
        expected_status: str | None = None,
    ) -> int:
        stmt = update(OrderModel).where(
            OrderModel.id == order_id,
            OrderModel.version == old_version,
        )
        if expected_status is not None:
            stmt = stmt.where(OrderModel.status == expected_status)

        return self.db.execute(
            stmt.values(**new_data).execution_options(synchronize_session=False)
        ).rowcount

    def delete(self, order: OrderModel) -> None:
        self.db.delete(order)

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

# pcstore/repos/payment_repo.py
from sqlalchemy import select
from sqlalchemy.orm import Session

from pcstore.data.models.payment import PaymentModel


class PaymentRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_payment(self, payment_id: int) -> PaymentModel | None:
        return self.db.get(PaymentModel, payment_id)

    def list_by_order(self, order_id: int) -> list[PaymentModel]:
        return list(
            self.db.execute(
                select(PaymentModel).where(PaymentModel.order_id == order_id).order_by(PaymentModel.id)
            ).scalars().all()
        )

    def add(self, payment: PaymentModel) -> PaymentModel:
        self.db.add(payment)
        self.db.flush()
        return payment

# pcstore/services/payment_service.py
from datetime import datetime, timezone
from typing import List

from sqlalchemy.orm import Session

from pcstore.data.models.order import OrderModel
from pcstore.data.models.payment import PaymentModel
from pcstore.repos.order_repo import OrderRepo
from pcstore.repos.payment_repo import PaymentRepo
from pcstore.repos.user_repo import UserRepo
from pcstore.domain.enums import OrderStatus, PaymentStatus
from pcstore.domain.exceptions import ConflictError, NotFoundError
from pcstore.domain.schemas import PaymentOut
from pcstore.services.order_service import OrderService, order_to_dict
from pcstore.services.notification_service import NotificationService
from pcstore.services.pricing import compute_total
from pcstore.services.receipt_service import ReceiptRenderer
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


class PaymentService:
    """
    Rejestracja płatności.

    Płatność i zmiana statusu zamówienia na PAID idą w jednej transakcji:
    albo oba zapisy, albo żaden. Powiadomienie dopiero po commicie.
    """

    def __init__(self, db: Session, notification_service: NotificationService | None = None):
        self.repo = PaymentRepo(db)
        self.order_repo = OrderRepo(db)
        self.user_repo = UserRepo(db)
        self.order_service = OrderService(db)
        self.notification_service = notification_service or NotificationService()
        self.renderer = ReceiptRenderer()

    def record_payment(self, order_id: int, method: str, user_id: int) -> PaymentOut:
        order = self._get_order(order_id)

        if order.user_id != user_id:
            raise PermissionError("No access to this order")

        if order.status == OrderStatus.PAID.value:
            raise ConflictError("Order already paid")

        try:
            #cena z chwili płatności, późniejsze zmiany cen jej nie ruszają
            amount = compute_total(order.products)
            payment = self.repo.add(
                PaymentModel(
                    order_id=order.id,
                    method=method,
                    amount=amount,
                    status=PaymentStatus.COMPLETED.value,
                    paid_at=datetime.now(timezone.utc),
                )
            )
            self.order_service.mark_paid(order)
            self.order_repo.commit()
        except Exception:
            self.order_repo.rollback()
            raise

        logger.info(f"Recorded payment {payment.id} for order {order_id}, amount {amount}")

        user = self.user_repo.get_user(user_id)
        if user:
            self.notification_service.send_payment_confirmation(user.email, order_id, amount)

        return PaymentOut.model_validate(payment)

    def list_payments(self, order_id: int, user_id: int, is_admin: bool = False) -> List[PaymentOut]:
        order = self._get_order(order_id)
        self._check_access(order, user_id, is_admin)
        return [PaymentOut.model_validate(p) for p in self.repo.list_by_order(order_id)]

    def generate_receipt(self, order_id: int, user_id: int, is_admin: bool = False) -> bytes:
        order = self._get_order(order_id)
        self._check_access(order, user_id, is_admin)

        payments = self.repo.list_by_order(order_id)
        if not payments:
            raise NotFoundError("No payment recorded for this order")

        owner = self.user_repo.get_user(order.user_id) if order.user_id else None
        return self.renderer.render(order_to_dict(order), payments[-1], owner.username if owner else None)

    def _get_order(self, order_id: int) -> OrderModel:
        order = self.order_repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    @staticmethod
    def _check_access(order: OrderModel, user_id: int, is_admin: bool) -> None:
        if order.user_id != user_id and not is_admin:
            raise PermissionError("No access to this order")

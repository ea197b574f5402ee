"""Payment recorder and receipts."""

from decimal import Decimal

import pytest

from pcstore.domain.enums import OrderStatus, PaymentStatus
from pcstore.domain.exceptions import ConflictError, NotFoundError
from pcstore.data.database import SessionLocal
from pcstore.repos.order_repo import OrderRepo
from pcstore.repos.payment_repo import PaymentRepo
from pcstore.services.order_service import OrderService
from pcstore.services.payment_service import PaymentService
from tests.fakes import FakeNotificationService


def _checkout_setup(db, make_user, make_product):
    user = make_user()
    a = make_product("A", "100.00")
    b = make_product("B", "50.00")
    orders = OrderService(db)
    order = orders.create_order(user.id)
    orders.add_product(order["id"], a.id, user.id)
    orders.add_product(order["id"], b.id, user.id)
    return user, order


class TestRecordPayment:

    def test_pays_order_total(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)
        notifications = FakeNotificationService()

        payment = PaymentService(db, notifications).record_payment(order["id"], "card", user.id)

        assert payment.amount == Decimal("150.00")
        assert payment.status == PaymentStatus.COMPLETED.value
        assert payment.order_id == order["id"]
        assert OrderService(db).get_order(order["id"], user.id)["status"] == OrderStatus.PAID.value
        assert notifications.sent == [("payment", "alice@example.com", order["id"], Decimal("150.00"))]

    def test_second_payment_rejected(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)
        svc = PaymentService(db, FakeNotificationService())
        svc.record_payment(order["id"], "card", user.id)

        with pytest.raises(ConflictError, match="already paid"):
            svc.record_payment(order["id"], "card", user.id)

        assert len(PaymentRepo(db).list_by_order(order["id"])) == 1

    def test_cart_change_during_payment_rolls_back_payment(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)
        c = make_product("C", "25.00")

        # this session has already read the order at version 3
        stale = OrderRepo(db).get_order(order["id"])
        assert stale.version == 3

        other = SessionLocal()
        try:
            OrderService(other).add_product(order["id"], c.id, user.id)

            notifications = FakeNotificationService()
            with pytest.raises(ConflictError):
                PaymentService(db, notifications).record_payment(order["id"], "card", user.id)

            assert PaymentRepo(db).list_by_order(order["id"]) == []
            assert notifications.sent == []
            current = OrderService(db).get_order(order["id"], user.id)
            assert current["status"] == OrderStatus.CART.value
            assert current["total"] == Decimal("175.00")
        finally:
            other.close()

    def test_amount_uses_prices_at_payment_time(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        order = OrderService(db).create_order(user.id, [a.id])

        a.price = Decimal("120.00")
        db.commit()

        payment = PaymentService(db, FakeNotificationService()).record_payment(order["id"], "card", user.id)
        assert payment.amount == Decimal("120.00")

    def test_unknown_order(self, db, make_user):
        user = make_user()
        with pytest.raises(NotFoundError):
            PaymentService(db, FakeNotificationService()).record_payment(42, "card", user.id)

    def test_only_owner_can_pay(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)
        bob = make_user("bob")
        notifications = FakeNotificationService()

        with pytest.raises(PermissionError):
            PaymentService(db, notifications).record_payment(order["id"], "card", bob.id)

        assert notifications.sent == []
        assert PaymentRepo(db).list_by_order(order["id"]) == []


class TestReceipt:

    def test_receipt_lists_products_and_total(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)
        svc = PaymentService(db, FakeNotificationService())
        svc.record_payment(order["id"], "card", user.id)

        text = svc.generate_receipt(order["id"], user.id).decode("utf-8")

        assert f"Order:    #{order['id']}" in text
        assert "Customer: alice" in text
        assert "150.00" in text
        assert "Method:   card" in text

    def test_receipt_without_payment(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)

        with pytest.raises(NotFoundError):
            PaymentService(db, FakeNotificationService()).generate_receipt(order["id"], user.id)

    def test_admin_can_read_any_receipt(self, db, make_user, make_product):
        user, order = _checkout_setup(db, make_user, make_product)
        svc = PaymentService(db, FakeNotificationService())
        svc.record_payment(order["id"], "card", user.id)
        admin = make_user("boss")

        assert svc.generate_receipt(order["id"], admin.id, is_admin=True)
        with pytest.raises(PermissionError):
            svc.generate_receipt(order["id"], admin.id)

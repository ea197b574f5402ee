"""Order lifecycle: CART mutations, PAID guard, one active cart per user."""

from decimal import Decimal

import pytest

from pcstore.domain.enums import OrderStatus
from pcstore.domain.exceptions import ConflictError, InvalidStateError, NotFoundError
from pcstore.repos.order_repo import OrderRepo
from pcstore.services.order_service import OrderService
from pcstore.services.payment_service import PaymentService
from tests.fakes import FakeNotificationService


def _pay(db, order_id, user_id):
    return PaymentService(db, FakeNotificationService()).record_payment(order_id, "card", user_id)


class TestCartMutations:

    def test_new_order_is_empty_cart(self, db, make_user):
        user = make_user()
        order = OrderService(db).create_order(user.id)

        assert order["status"] == OrderStatus.CART.value
        assert order["products"] == []
        assert order["total"] == Decimal("0.00")

    def test_add_and_remove_product(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(user.id)

        added = svc.add_product(order["id"], a.id, user.id)
        assert [p["id"] for p in added["products"]] == [a.id]
        assert added["total"] == Decimal("100.00")

        removed = svc.remove_product(order["id"], a.id, user.id)
        assert removed["products"] == []
        assert removed["total"] == Decimal("0.00")

    def test_remove_then_add_restores_product_set(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        b = make_product("B", "50.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id, b.id])

        svc.remove_product(order["id"], a.id, user.id)
        restored = svc.add_product(order["id"], a.id, user.id)

        assert {p["id"] for p in restored["products"]} == {a.id, b.id}
        assert restored["total"] == order["total"]

    def test_adding_same_product_twice_is_noop(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id])

        result = svc.add_product(order["id"], a.id, user.id)

        assert len(result["products"]) == 1

    def test_each_change_bumps_version(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(user.id)

        svc.add_product(order["id"], a.id, user.id)
        svc.remove_product(order["id"], a.id, user.id)

        assert OrderRepo(db).get_order(order["id"]).version == 3

    def test_replace_products(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        b = make_product("B", "50.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id])

        result = svc.replace_products(order["id"], [b.id], user.id)

        assert [p["id"] for p in result["products"]] == [b.id]
        assert result["total"] == Decimal("50.00")

    def test_unknown_product_rejected(self, db, make_user):
        user = make_user()
        svc = OrderService(db)
        order = svc.create_order(user.id)

        with pytest.raises(NotFoundError):
            svc.add_product(order["id"], 999, user.id)

    def test_other_user_cannot_modify(self, db, make_user, make_product):
        alice = make_user("alice")
        bob = make_user("bob")
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(alice.id)

        with pytest.raises(PermissionError):
            svc.add_product(order["id"], a.id, bob.id)


class TestPaidOrderIsImmutable:

    def test_remove_from_paid_order_rejected(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id])
        _pay(db, order["id"], user.id)

        with pytest.raises(InvalidStateError):
            svc.remove_product(order["id"], a.id, user.id)

        assert [p["id"] for p in svc.get_order(order["id"], user.id)["products"]] == [a.id]

    def test_add_to_paid_order_rejected(self, db, make_user, make_product):
        # add is guarded the same way as remove
        user = make_user()
        a = make_product("A", "100.00")
        b = make_product("B", "50.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id])
        _pay(db, order["id"], user.id)

        with pytest.raises(InvalidStateError):
            svc.add_product(order["id"], b.id, user.id)

        assert [p["id"] for p in svc.get_order(order["id"], user.id)["products"]] == [a.id]

    def test_paid_order_cannot_be_deleted(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id])
        _pay(db, order["id"], user.id)

        with pytest.raises(InvalidStateError):
            svc.delete_order(order["id"], user.id)

    def test_mark_paid_detects_stale_version(self, db, make_user):
        user = make_user()
        svc = OrderService(db)
        created = svc.create_order(user.id)
        order = OrderRepo(db).get_order(created["id"])

        OrderRepo(db).update_order_version(order.id, 1, {"version": 2})

        with pytest.raises(ConflictError):
            svc.mark_paid(order)


class TestActiveCart:

    def test_second_cart_rejected(self, db, make_user):
        user = make_user()
        svc = OrderService(db)
        svc.create_order(user.id)

        with pytest.raises(ConflictError):
            svc.create_order(user.id)

    def test_add_to_cart_reuses_active_cart(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        b = make_product("B", "50.00")
        svc = OrderService(db)

        first = svc.add_product_to_cart(user.id, a.id)
        second = svc.add_product_to_cart(user.id, b.id)

        assert first["id"] == second["id"]
        assert second["total"] == Decimal("150.00")
        assert len(svc.list_orders(user.id)) == 1

    def test_new_cart_allowed_after_payment(self, db, make_user, make_product):
        user = make_user()
        a = make_product("A", "100.00")
        svc = OrderService(db)
        order = svc.create_order(user.id, [a.id])
        _pay(db, order["id"], user.id)

        new_order = svc.create_order(user.id)

        assert new_order["id"] != order["id"]
        assert svc.get_active_order(user.id)["id"] == new_order["id"]

    def test_delete_cart(self, db, make_user):
        user = make_user()
        svc = OrderService(db)
        order = svc.create_order(user.id)

        svc.delete_order(order["id"], user.id)

        assert svc.get_active_order(user.id) is None

# pcstore/services/order_service.py
from decimal import Decimal
from typing import Any, Dict, Iterable, List

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from pcstore.data.models.order import OrderModel
from pcstore.repos.order_repo import OrderRepo
from pcstore.repos.product_repo import ProductRepo
from pcstore.repos.user_repo import UserRepo
from pcstore.domain.enums import OrderStatus
from pcstore.domain.exceptions import ConflictError, InvalidStateError, NotFoundError
from pcstore.services.pricing import compute_total
from pcstore.utils.logging import get_logger

logger = get_logger(__name__)


def order_to_dict(order: OrderModel) -> Dict[str, Any]:
    return {
        "id": order.id,
        "user_id": order.user_id,
        "status": order.status,
        "created_at": order.created_at,
        "products": [
            {
                "id": p.id,
                "name": p.name,
                "description": p.description,
                "price": p.price,
                "stock": p.stock,
                "image": p.image,
            }
            for p in order.products
        ],
        "total": compute_total(order.products),
    }


class OrderService:
    """
    Cykl życia zamówienia: CART -> PAID.

    Produkty można dodawać i usuwać tylko w stanie CART, obie ścieżki
    sprawdzają status tak samo. Każda zmiana podbija version (optimistic
    locking), więc dwa równoległe requesty na tym samym zamówieniu nie
    nadpiszą sobie zmian.
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.product_repo = ProductRepo(db)
        self.user_repo = UserRepo(db)

    #query
    def get_order(self, order_id: int, user_id: int, is_admin: bool = False) -> Dict[str, Any]:
        order = self._get(order_id)
        if order.user_id != user_id and not is_admin:
            raise PermissionError("No access to this order")
        return order_to_dict(order)

    def list_orders(self, user_id: int) -> List[Dict[str, Any]]:
        return [order_to_dict(o) for o in self.repo.list_by_user(user_id)]

    def get_active_order(self, user_id: int) -> Dict[str, Any] | None:
        order = self.repo.get_active_order(user_id)
        return order_to_dict(order) if order else None

    def compute_total(self, order: OrderModel) -> Decimal:
        return compute_total(order.products)

    #commands
    def create_order(self, user_id: int, product_ids: Iterable[int] = ()) -> Dict[str, Any]:
        self._require_user(user_id)

        if self.repo.get_active_order(user_id):
            raise ConflictError("User already has an active cart")

        products = self._load_products(product_ids)
        order = self._insert_cart(user_id, products)

        logger.info(f"Created order {order.id} for user {user_id} with {len(products)} products")
        return order_to_dict(order)

    def get_or_create_active_order(self, user_id: int) -> OrderModel:
        existing = self.repo.get_active_order(user_id)
        if existing:
            return existing

        self._require_user(user_id)
        try:
            order = self._insert_cart(user_id, [])
        except ConflictError:
            #ktoś inny właśnie utworzył koszyk dla tego usera
            order = self.repo.get_active_order(user_id)
            if not order:
                raise

        logger.info(f"Active cart for user {user_id} is order {order.id}")
        return order

    def add_product_to_cart(self, user_id: int, product_id: int) -> Dict[str, Any]:
        order = self.get_or_create_active_order(user_id)
        return self.add_product(order.id, product_id, user_id)

    def add_product(self, order_id: int, product_id: int, user_id: int) -> Dict[str, Any]:
        order = self._get_owned(order_id, user_id)
        self._require_cart(order, "Cannot add products to a paid order")

        product = self.product_repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if product in order.products:
            logger.info(f"Product {product_id} already in order {order_id}")
            return order_to_dict(order)

        order.products.append(product)
        self._commit_change(order)

        logger.info(f"Added product {product_id} to order {order_id}")
        return order_to_dict(self._get(order_id))

    def remove_product(self, order_id: int, product_id: int, user_id: int) -> Dict[str, Any]:
        order = self._get_owned(order_id, user_id)
        self._require_cart(order, "Cannot remove products from a paid order")

        product = self.product_repo.get_product(product_id)
        if not product:
            raise NotFoundError("Product not found")

        if product not in order.products:
            return order_to_dict(order)

        order.products.remove(product)
        self._commit_change(order)

        logger.info(f"Removed product {product_id} from order {order_id}")
        return order_to_dict(self._get(order_id))

    def replace_products(self, order_id: int, product_ids: Iterable[int], user_id: int) -> Dict[str, Any]:
        order = self._get_owned(order_id, user_id)
        self._require_cart(order, "Cannot modify a paid order")

        products = self._load_products(product_ids)
        order.products = products
        self._commit_change(order)

        logger.info(f"Replaced products of order {order_id} with {[p.id for p in products]}")
        return order_to_dict(self._get(order_id))

    def mark_paid(self, order: OrderModel) -> None:
        """
        CART -> PAID. Nie commituje - wywoływane tylko przez PaymentService
        wewnątrz jego transakcji.
        """
        rowcount = self.repo.update_order_version(
            order_id=order.id,
            old_version=order.version,
            new_data={"status": OrderStatus.PAID.value, "version": order.version + 1},
            expected_status=OrderStatus.CART.value,
        )
        if rowcount == 0:
            logger.warning(f"Order {order.id} changed while being paid")
            raise ConflictError("Order was modified by another operation")

    def delete_order(self, order_id: int, user_id: int) -> None:
        order = self._get_owned(order_id, user_id)
        #płatności wskazują na opłacone zamówienia
        self._require_cart(order, "Paid orders cannot be deleted")

        try:
            self.repo.delete(order)
            self.repo.commit()
        except Exception:
            self.repo.rollback()
            raise

        logger.info(f"Deleted order {order_id}")

    # helpers
    def _insert_cart(self, user_id: int, products: list) -> OrderModel:
        order = OrderModel(
            user_id=user_id,
            status=OrderStatus.CART.value,
            version=1,
            products=products,
        )
        try:
            self.repo.add(order)
            self.repo.commit()
        except IntegrityError:
            # uq_orders_active_cart
            self.repo.rollback()
            raise ConflictError("User already has an active cart")
        return order

    def _commit_change(self, order: OrderModel) -> None:
        try:
            self.repo.flush()
            rowcount = self.repo.update_order_version(
                order_id=order.id,
                old_version=order.version,
                new_data={"version": order.version + 1},
                expected_status=OrderStatus.CART.value,
            )
            if rowcount == 0:
                self.repo.rollback()
                logger.warning(f"Concurrent modification of order {order.id}")
                raise ConflictError("Order was modified by another operation")
            self.repo.commit()
        except IntegrityError:
            self.repo.rollback()
            raise ConflictError("Order was modified by another operation")
        except Exception:
            self.repo.rollback()
            raise

    def _load_products(self, product_ids: Iterable[int]) -> list:
        ids = list(dict.fromkeys(product_ids or []))
        products = {p.id: p for p in self.product_repo.get_many(ids)}
        missing = [i for i in ids if i not in products]
        if missing:
            raise NotFoundError(f"Products not found: {missing}")
        return [products[i] for i in ids]

    def _require_user(self, user_id: int) -> None:
        if not self.user_repo.get_user(user_id):
            raise NotFoundError("User not found")

    @staticmethod
    def _require_cart(order: OrderModel, message: str) -> None:
        if order.status == OrderStatus.PAID.value:
            raise InvalidStateError(message)

    def _get(self, order_id: int) -> OrderModel:
        order = self.repo.get_order(order_id)
        if not order:
            raise NotFoundError("Order not found")
        return order

    def _get_owned(self, order_id: int, user_id: int) -> OrderModel:
        order = self._get(order_id)
        if order.user_id != user_id:
            raise PermissionError("No access to this order")
        return order

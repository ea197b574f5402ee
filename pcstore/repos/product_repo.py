# pcstore/repos/product_repo.py
from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.orm import Session

from pcstore.data.models.product import ProductModel
from pcstore.data.models.product_specification import ProductSpecificationModel
from pcstore.data.models.order import OrderModel, order_products
from pcstore.domain.enums import OrderStatus


class ProductRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_product(self, product_id: int) -> ProductModel | None:
        return self.db.get(ProductModel, product_id)

    def get_many(self, product_ids) -> list[ProductModel]:
        if not product_ids:
            return []
        return list(
            self.db.execute(
                select(ProductModel).where(ProductModel.id.in_(product_ids))
            ).scalars().all()
        )

    def find_by_name(self, name: str) -> ProductModel | None:
        return self.db.execute(
            select(ProductModel).where(func.lower(ProductModel.name) == name.lower())
        ).scalars().first()

    def list_products(self) -> list[ProductModel]:
        return list(self.db.execute(select(ProductModel).order_by(ProductModel.name)).scalars().all())

    def list_by_category(self, category: str) -> list[ProductModel]:
        return list(
            self.db.execute(
                select(ProductModel)
                .where(ProductModel.category == category)
                .order_by(ProductModel.name)
            ).scalars().all()
        )

    def search(self, text: str) -> list[ProductModel]:
        pattern = f"%{text}%"
        return list(
            self.db.execute(
                select(ProductModel)
                .where(or_(ProductModel.name.ilike(pattern), ProductModel.description.ilike(pattern)))
                .order_by(ProductModel.name)
            ).scalars().all()
        )

    def add(self, product: ProductModel) -> ProductModel:
        self.db.add(product)
        self.db.flush()
        return product

    # ---- linki produkt <-> specyfikacja ----

    def get_link(self, product_id: int, spec_id: int) -> ProductSpecificationModel | None:
        return self.db.get(ProductSpecificationModel, (product_id, spec_id))

    def add_link(self, link: ProductSpecificationModel) -> None:
        self.db.add(link)
        self.db.flush()

    def delete_link(self, link: ProductSpecificationModel) -> None:
        self.db.delete(link)
        self.db.flush()

    # ---- zamówienia ----

    def count_paid_orders_with_product(self, product_id: int) -> int:
        return self.db.execute(
            select(func.count())
            .select_from(order_products.join(OrderModel, OrderModel.id == order_products.c.order_id))
            .where(
                order_products.c.product_id == product_id,
                OrderModel.status == OrderStatus.PAID.value,
            )
        ).scalar_one()

    def remove_from_orders(self, product_id: int) -> list[int]:
        order_ids = list(
            self.db.execute(
                select(order_products.c.order_id).where(order_products.c.product_id == product_id)
            ).scalars().all()
        )
        if order_ids:
            self.db.execute(delete(order_products).where(order_products.c.product_id == product_id))
            self.db.execute(
                update(OrderModel)
                .where(OrderModel.id.in_(order_ids))
                .values(version=OrderModel.version + 1)
            )
        return order_ids

    # ---- optimistic locking ----

    def update_product_version(self, product_id: int, old_version: int, new_data: dict) -> int:
        # update products set ..., version = old + 1 where id = ? and version = old
        return self.db.execute(
            update(ProductModel)
            .where(ProductModel.id == product_id, ProductModel.version == old_version)
            .values(**new_data)
            .execution_options(synchronize_session=False)
        ).rowcount

    def delete(self, product: ProductModel) -> None:
        self.db.delete(product)

    def flush(self) -> None:
        self.db.flush()

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

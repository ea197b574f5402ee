from sqlalchemy import Column, Integer, ForeignKey, String, DateTime, Table, Index, text
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from pcstore.data.database import Base
from pcstore.domain.enums import OrderStatus

order_products = Table(
    "order_products",
    Base.metadata,
    Column("order_id", Integer, ForeignKey("orders.id", ondelete="CASCADE"), primary_key=True),
    Column("product_id", Integer, ForeignKey("products.id"), primary_key=True),
)


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    status = Column(String(20), nullable=False, default=OrderStatus.CART.value)  # CART, PAID
    version = Column(Integer, nullable=False, default=1)
    created_at = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))

    products = relationship("ProductModel", secondary=order_products, order_by="ProductModel.id")

    # max jeden koszyk (CART) na użytkownika
    __table_args__ = (
        Index(
            "uq_orders_active_cart",
            "user_id",
            unique=True,
            sqlite_where=text("status = 'CART'"),
            postgresql_where=text("status = 'CART'"),
        ),
    )

from sqlalchemy import Column, Integer, String, Numeric, Text
from sqlalchemy.orm import relationship

from pcstore.data.database import Base


class ProductModel(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False, unique=True)
    description = Column(Text, nullable=True)

    # price = base_price + suma(additional_price * quantity) po specyfikacjach
    base_price = Column(Numeric(12, 2), nullable=False)
    price = Column(Numeric(12, 2), nullable=False)

    stock = Column(Integer, nullable=False, default=0)
    image = Column(Text, nullable=False, default="")
    category = Column(String(30), nullable=False)
    product_type = Column(String(30), nullable=False)

    version = Column(Integer, nullable=False, default=1)

    specification_links = relationship(
        "ProductSpecificationModel",
        cascade="all, delete-orphan",
    )
    comments = relationship(
        "CommentModel",
        cascade="all, delete-orphan",
    )
    favorites = relationship(
        "FavoriteModel",
        cascade="all, delete-orphan",
    )

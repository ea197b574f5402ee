from sqlalchemy import Column, Integer, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship

from pcstore.data.database import Base


class ProductSpecificationModel(Base):
    __tablename__ = "product_specifications"

    #klucz złożony - jedna para (produkt, specyfikacja)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), primary_key=True)
    specification_id = Column(Integer, ForeignKey("specifications.id"), primary_key=True)

    quantity = Column(Integer, nullable=False, default=1)

    specification = relationship("SpecificationModel", lazy="joined")

    __table_args__ = (CheckConstraint("quantity >= 1", name="ck_product_spec_quantity"),)

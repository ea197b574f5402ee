from sqlalchemy import Column, Integer, String, Numeric, Text

from pcstore.data.database import Base


class SpecificationModel(Base):
    __tablename__ = "specifications"

    id = Column(Integer, primary_key=True)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    brand = Column(String(100), nullable=False)
    spec_type = Column(String(100), nullable=False)

    additional_price = Column(Numeric(12, 2), nullable=False)

from sqlalchemy import Column, Integer, String

from pcstore.data.database import Base
from pcstore.domain.enums import Role


class UserModel(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    username = Column(String(100), nullable=False, unique=True)
    password_hash = Column(String(255), nullable=False)

    first_name = Column(String(100), nullable=False)
    last_name = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True)
    phone = Column(String(30), nullable=True)
    national_id = Column(String(30), nullable=True)

    role = Column(String(20), nullable=False, default=Role.USER.value)

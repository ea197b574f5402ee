# pcstore/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, EmailStr
from typing import List, Optional
from decimal import Decimal
from datetime import datetime

from pcstore.domain.enums import ProductCategory, ProductType


# ---------------- users / auth ----------------

class UserCreate(BaseModel):
    """Schema dla rejestracji użytkownika."""

    username: str = Field(..., min_length=3, max_length=100)
    password: str = Field(..., min_length=6, max_length=128)
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    phone: Optional[str] = Field(None, max_length=30)
    national_id: Optional[str] = Field(None, max_length=30)


class UserUpdate(BaseModel):
    first_name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_name: Optional[str] = Field(None, min_length=1, max_length=100)
    email: Optional[EmailStr] = None
    phone: Optional[str] = Field(None, max_length=30)
    national_id: Optional[str] = Field(None, max_length=30)
    username: Optional[str] = Field(None, min_length=3, max_length=100)


class LoginIn(BaseModel):
    username: str
    password: str


class TokenOut(BaseModel):
    token: str
    token_type: str = "bearer"


class UserRead(BaseModel):
    """Schema dla użytkownika (response)."""

    id: int
    username: str
    first_name: str
    last_name: str
    email: str
    phone: Optional[str] = None
    national_id: Optional[str] = None
    role: str

    model_config = ConfigDict(from_attributes=True)


class UserProfile(UserRead):
    orders: int
    comments: int
    favorites: int


# ---------------- specifications ----------------

class SpecificationIn(BaseModel):
    """Schema dla tworzenia / edycji specyfikacji."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    brand: str = Field(..., min_length=1, max_length=100)
    spec_type: str = Field(..., min_length=1, max_length=100, description="Np. RAM, CPU, GPU")
    additional_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)


class SpecificationOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    brand: str
    spec_type: str
    additional_price: Decimal

    model_config = ConfigDict(from_attributes=True)


class SpecificationLinkOut(BaseModel):
    """Specyfikacja podpięta pod produkt, z ilością."""

    id: int
    name: str
    additional_price: Decimal
    quantity: int


# ---------------- products ----------------

class ProductCreate(BaseModel):
    """Schema dla tworzenia produktu."""

    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    base_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    stock: int = Field(0, ge=0)
    image: str = ""
    category: ProductCategory
    product_type: ProductType
    specification_ids: List[int] = Field(default_factory=list)


class ProductUpdate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: Optional[str] = None
    base_price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=2)
    stock: int = Field(..., ge=0)
    image: str = ""
    category: Optional[ProductCategory] = None
    product_type: Optional[ProductType] = None


class SpecificationLinkIn(BaseModel):
    specification_id: int = Field(..., gt=0)
    quantity: int = Field(1, ge=1, description="Ilość (musi być >= 1)")


class SpecificationIdsIn(BaseModel):
    specification_ids: List[int] = Field(default_factory=list)


class ProductOut(BaseModel):
    """Schema dla produktu (response)."""

    id: int
    name: str
    description: Optional[str] = None
    base_price: Decimal
    price: Decimal
    stock: int
    image: str
    category: str
    product_type: str
    specifications: List[SpecificationLinkOut] = []


# ---------------- orders / payments ----------------

class OrderCreate(BaseModel):
    product_ids: List[int] = Field(default_factory=list)


class OrderProductIn(BaseModel):
    product_id: int = Field(..., gt=0)


class OrderProductOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    stock: int
    image: str


class OrderOut(BaseModel):
    """Schema dla zamówienia (response). Total liczony przy odczycie."""

    id: int
    user_id: Optional[int] = None
    status: str
    created_at: datetime
    products: List[OrderProductOut]
    total: Decimal


class PaymentIn(BaseModel):
    order_id: int = Field(..., gt=0)
    method: str = Field(..., min_length=1, max_length=50)


class PaymentOut(BaseModel):
    id: int
    order_id: int
    method: str
    amount: Decimal
    status: str
    paid_at: datetime

    model_config = ConfigDict(from_attributes=True)


# ---------------- comments / favorites ----------------

class CommentIn(BaseModel):
    product_id: int = Field(..., gt=0)
    content: str = Field(..., min_length=1, max_length=1000)


class CommentUpdate(BaseModel):
    content: str = Field(..., min_length=1, max_length=1000)


class CommentOut(BaseModel):
    id: int
    product_id: int
    product_name: str
    content: str
    user_id: Optional[int] = None
    username: Optional[str] = None
    created_at: datetime


class FavoriteIn(BaseModel):
    product_id: int = Field(..., gt=0)


class FavoriteOut(BaseModel):
    id: int
    name: str
    description: Optional[str] = None
    price: Decimal
    image: str


# ---------------- password reset ----------------

class PasswordResetRequest(BaseModel):
    email: EmailStr


class PasswordResetValidate(BaseModel):
    email: EmailStr
    code: str = Field(..., min_length=6, max_length=6)


class PasswordResetUpdate(PasswordResetValidate):
    new_password: str = Field(..., min_length=6, max_length=128)


class MessageOut(BaseModel):
    message: str

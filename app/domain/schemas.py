# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict
from pydantic.alias_generators import to_camel
from typing import Any, List
from decimal import Decimal
from datetime import datetime


class CamelIn(BaseModel):
    """Request bodies arrive in camelCase from the browser client."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# =====================================================
# USERS
# =====================================================
class RegisterIn(CamelIn):
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)
    first_name: str | None = Field(None, max_length=100)
    last_name: str | None = Field(None, max_length=100)


class LoginIn(CamelIn):
    email: str
    password: str


class UserRead(BaseModel):
    """Schema dla użytkownika (response), bez hasha hasła."""

    id: int
    email: str
    first_name: str | None = None
    last_name: str | None = None

    model_config = ConfigDict(from_attributes=True, alias_generator=to_camel, populate_by_name=True)


class AuthOut(BaseModel):
    message: str
    user: UserRead


class MessageOut(BaseModel):
    message: str


# =====================================================
# PRODUCTS
# =====================================================
class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    price: Decimal = Field(..., ge=0, decimal_places=2)
    category: str | None = Field(None, max_length=100)
    stock: int = Field(0, ge=0)
    image_url: str | None = Field(None, max_length=500)


class ProductOut(BaseModel):
    id: int
    name: str
    description: str | None = None
    price: Decimal
    category: str | None = None
    stock: int
    image_url: str | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# CART
# =====================================================
class CartAddIn(CamelIn):
    user_id: int = Field(..., gt=0)
    product_id: int = Field(..., gt=0)
    quantity: int = Field(1, gt=0)


class CartUpdateIn(CamelIn):
    user_id: int = Field(..., gt=0)
    # ilosc <= 0 usuwa pozycje
    quantity: int


class CartLineOut(BaseModel):
    """Pozycja koszyka złączona z produktem (tylko do wyświetlania)."""

    id: int
    quantity: int
    product_id: int
    name: str
    price: Decimal
    image_url: str | None = None


class CartItemOut(BaseModel):
    id: int
    user_id: int
    product_id: int
    quantity: int
    created_at: datetime | None = None

    model_config = ConfigDict(from_attributes=True)


# =====================================================
# ORDERS
# =====================================================
class OrderCreate(CamelIn):
    user_id: int = Field(..., gt=0)
    shipping_address: Any = None
    payment_method: str | None = Field(None, max_length=50)


class OrderStatusIn(BaseModel):
    status: str


class OrderOut(BaseModel):
    id: int
    user_id: int
    total_amount: Decimal
    status: str
    shipping_address: Any = None
    payment_method: str | None = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class OrderItemOut(BaseModel):
    product_id: int
    name: str | None = None
    quantity: int
    price: Decimal


class OrderDetailOut(OrderOut):
    items: List[OrderItemOut]


class AdminOrderOut(OrderDetailOut):
    email: str
    first_name: str | None = None
    last_name: str | None = None


class HealthOut(BaseModel):
    status: str
    timestamp: datetime | None = None
    error: str | None = None

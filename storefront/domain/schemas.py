# storefront/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_validator, model_validator
from typing import List, Literal
from decimal import Decimal
from datetime import datetime


ORDER_STATUSES = ("pending", "processing", "completed", "cancelled")
MAX_QUANTITY = 999


class CartItemIn(BaseModel):
    """Schema dla dodawania produktu do koszyka."""

    id: str = Field(..., min_length=1, description="ID produktu")
    name: str = Field(..., min_length=1)
    #ceny jak w kolumnach Numeric(10, 2)
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    quantity: int = Field(1, gt=0, le=MAX_QUANTITY, description="Ilosc (1..MAX_QUANTITY)")
    image: str | None = None


class QuantityIn(BaseModel):
    """Ilosc absolutna; <= 0 usuwa pozycje."""

    quantity: int = Field(..., le=MAX_QUANTITY)


class CartItemOut(BaseModel):
    id: str
    name: str
    price: Decimal
    quantity: int
    image: str | None = None

    model_config = ConfigDict(from_attributes=True)


class CartOut(BaseModel):
    session_id: str
    items: List[CartItemOut]
    total_items: int
    total_price: Decimal


class CheckoutIn(BaseModel):
    """Dane kontaktowe, dostawa i platnosc."""

    name: str
    phone: str
    delivery_method: Literal["delivery", "pickup"] = "delivery"
    address: str = ""
    payment_method: str = "efectivo"
    notes: str = ""

    @field_validator("name", "phone", "payment_method")
    @classmethod
    def not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("El campo es obligatorio")
        return value

    @field_validator("address", "notes")
    @classmethod
    def strip_text(cls, value: str) -> str:
        return value.strip()

    @model_validator(mode="after")
    def address_for_delivery(self):
        if self.delivery_method == "delivery" and not self.address:
            raise ValueError("La dirección es obligatoria para delivery")
        return self


class CheckoutOut(BaseModel):
    order_id: str
    total: Decimal
    whatsapp_url: str
    open_delay_ms: int
    title: str
    description: str


class OrderItemOut(BaseModel):
    id: int
    product_id: str | None = None
    product_name: str
    price: Decimal
    quantity: int

    model_config = ConfigDict(from_attributes=True)


class OrderOut(BaseModel):
    id: str
    customer_name: str
    customer_phone: str
    customer_address: str
    delivery_method: str
    payment_method: str
    notes: str
    total: Decimal
    status: str
    created_at: datetime
    items: List[OrderItemOut] = []

    model_config = ConfigDict(from_attributes=True)


class OrderStatusIn(BaseModel):
    status: Literal["pending", "processing", "completed", "cancelled"]


class StatusUpdateOut(BaseModel):
    success: bool
    error: str | None = None
    order: OrderOut | None = None


class ProductIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=200)
    description: str = ""
    price: Decimal = Field(..., ge=0, max_digits=10, decimal_places=2)
    image: str = ""
    category: str = Field(..., min_length=1)


class ProductOut(BaseModel):
    id: str
    name: str
    description: str
    price: Decimal
    image: str
    category: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class UploadOut(BaseModel):
    success: bool
    url: str

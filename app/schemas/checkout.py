from typing import Dict, Literal, Optional
from pydantic import BaseModel, Field, field_validator

from app.services.cart import MAX_LINE_QUANTITY
from app.utils.phone import is_valid_phone
from models.order import ORDER_STATUSES

WeightLabel = Literal["250g", "500g", "1kg"]


def _strip_required(value: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValueError("must not be empty")
    return value


class CheckoutRequest(BaseModel):
    name: str = Field(max_length=100)
    phone: str
    address: str
    email: Optional[str] = Field(default=None, max_length=255)
    delivery_option: Literal["delivery", "pickup"] = "delivery"
    payment_method: Literal["cod"] = "cod"

    @field_validator("name", "address")
    @classmethod
    def not_blank(cls, value):
        return _strip_required(value)

    @field_validator("phone")
    @classmethod
    def ten_digits(cls, value):
        value = (value or "").strip()
        if not is_valid_phone(value):
            raise ValueError("Please enter a valid 10-digit phone number")
        return value

    @field_validator("email")
    @classmethod
    def blank_email_is_none(cls, value):
        if value is None:
            return None
        value = value.strip()
        if not value:
            return None
        if "@" not in value:
            raise ValueError("Please enter a valid email address")
        return value


class CartAdd(BaseModel):
    product_id: int
    weight: WeightLabel = "1kg"
    quantity: int = Field(default=1, ge=1, le=MAX_LINE_QUANTITY)


class CartUpdate(BaseModel):
    product_id: int
    weight: WeightLabel
    quantity: int = Field(le=MAX_LINE_QUANTITY)


class CartRemove(BaseModel):
    product_id: int
    weight: WeightLabel


class OrderStatusUpdate(BaseModel):
    status: Literal[ORDER_STATUSES]


class SettingsUpdate(BaseModel):
    """Known shop settings; unknown keys are dropped."""

    shop_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    shop_phone: Optional[str] = None
    shop_email: Optional[str] = None
    shop_address: Optional[str] = None
    shop_city: Optional[str] = None
    whatsapp_number: Optional[str] = None
    delivery_timing: Optional[str] = None
    sunday_timing: Optional[str] = None

    def changes(self) -> Dict[str, str]:
        return self.model_dump(exclude_none=True)


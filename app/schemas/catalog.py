from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, Field, field_validator, model_validator

from app.services.cart import WEIGHT_OPTIONS

DEFAULT_WEIGHTS = ["250g", "500g", "1kg"]


def _check_weights(value):
    if value is None:
        return value
    unknown = [w for w in value if w not in WEIGHT_OPTIONS]
    if unknown:
        raise ValueError(f"unknown weight options: {', '.join(unknown)}")
    return value


def _not_null(value):
    if value is None:
        raise ValueError("may not be null")
    return value


class ProductCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    name_ta: Optional[str] = None
    category_id: Optional[int] = None
    price: Decimal = Field(gt=0)
    unit: str = "kg"
    image_url: Optional[str] = None
    description: Optional[str] = None
    description_ta: Optional[str] = None
    in_stock: bool = True
    is_offer: bool = False
    offer_price: Optional[Decimal] = Field(default=None, gt=0)
    is_best_seller: bool = False
    is_fresh: bool = True
    weights: List[str] = Field(default_factory=lambda: list(DEFAULT_WEIGHTS))

    @field_validator("weights")
    @classmethod
    def check_weights(cls, value):
        return _check_weights(value)

    @model_validator(mode="after")
    def _offer_price_only_on_offer(self):
        if not self.is_offer:
            self.offer_price = None
        return self


class ProductUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name_ta: Optional[str] = None
    category_id: Optional[int] = None
    price: Optional[Decimal] = Field(default=None, gt=0)
    unit: Optional[str] = None
    image_url: Optional[str] = None
    description: Optional[str] = None
    description_ta: Optional[str] = None
    in_stock: Optional[bool] = None
    is_offer: Optional[bool] = None
    offer_price: Optional[Decimal] = Field(default=None, gt=0)
    is_best_seller: Optional[bool] = None
    is_fresh: Optional[bool] = None
    weights: Optional[List[str]] = None

    @field_validator("weights")
    @classmethod
    def check_weights(cls, value):
        return _check_weights(value)

    @field_validator("name", "price", "unit", "in_stock", "is_offer", "is_best_seller", "is_fresh", "weights")
    @classmethod
    def required_columns(cls, value):
        return _not_null(value)


class CategoryCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    name_ta: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=20)


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    name_ta: Optional[str] = None
    icon: Optional[str] = Field(default=None, max_length=20)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        return _not_null(value)

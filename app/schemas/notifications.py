from decimal import Decimal
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class NoticeItem(_CamelModel):
    name: str
    name_ta: Optional[str] = None
    weight: str
    quantity: int = Field(ge=1)
    price: Decimal = Field(ge=0)


class OrderNotice(_CamelModel):
    """Order snapshot as the relays see it (camelCase on the wire)."""

    order_id: str
    customer_name: str
    customer_phone: str
    customer_address: str
    customer_email: Optional[str] = None
    items: List[NoticeItem]
    total_amount: Decimal
    delivery_option: str = "delivery"
    payment_method: str = "cod"

    @classmethod
    def from_order(cls, order) -> "OrderNotice":
        return cls(
            order_id=order.order_id,
            customer_name=order.customer_name,
            customer_phone=order.phone,
            customer_address=order.address,
            customer_email=order.email,
            items=[NoticeItem.model_validate(i) for i in order.items],
            total_amount=Decimal(str(order.total_amount)),
            delivery_option=order.delivery_option,
            payment_method=order.payment_method,
        )


class WhatsAppRelayRequest(_CamelModel):
    order: OrderNotice
    owner_phone: str = Field(min_length=1)


class EmailRelayRequest(_CamelModel):
    order: OrderNotice

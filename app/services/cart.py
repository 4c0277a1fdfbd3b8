"""Session-scoped shopping cart.

The cart is plain in-memory state; ``load_cart``/``save_cart`` move it in and
out of the signed Flask session so it lives exactly one browser session.
"""
from dataclasses import dataclass, asdict
from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, List, Optional

from app.exceptions import ValidationError

SESSION_KEY = "cart"

# Per-line ceiling, shared with the cart request schemas
MAX_LINE_QUANTITY = 50

# Multipliers applied to the per-kg price
WEIGHT_OPTIONS = {
    "250g": Decimal("0.25"),
    "500g": Decimal("0.5"),
    "1kg": Decimal("1"),
}


def price_for_weight(unit_price, weight: str) -> Decimal:
    """Resolve a per-kg price for one weight option, rounded to whole rupees."""
    try:
        multiplier = WEIGHT_OPTIONS[weight]
    except KeyError:
        raise ValidationError(f"Unknown weight option: {weight}")
    return (Decimal(str(unit_price)) * multiplier).quantize(Decimal("1"), rounding=ROUND_HALF_UP)


@dataclass
class CartItem:
    product_id: int
    name: str
    weight: str
    price: Decimal
    image: Optional[str] = None
    name_ta: Optional[str] = None
    quantity: int = 1

    @property
    def key(self):
        return (self.product_id, self.weight)

    @property
    def line_total(self) -> Decimal:
        return self.price * self.quantity

    def to_dict(self) -> Dict:
        data = asdict(self)
        data["price"] = str(self.price)
        return data

    @classmethod
    def from_dict(cls, data: Dict) -> "CartItem":
        return cls(
            product_id=int(data["product_id"]),
            name=data["name"],
            weight=data["weight"],
            price=Decimal(str(data["price"])),
            image=data.get("image"),
            name_ta=data.get("name_ta"),
            quantity=int(data.get("quantity", 1)),
        )


class Cart:
    """Ordered list of cart lines keyed by (product_id, weight)."""

    def __init__(self, items: Optional[List[CartItem]] = None):
        self.items: List[CartItem] = list(items or [])

    def _find(self, product_id, weight) -> Optional[CartItem]:
        for item in self.items:
            if item.key == (product_id, weight):
                return item
        return None

    def add_item(self, item: CartItem, quantity: int = 1) -> CartItem:
        existing = self._find(item.product_id, item.weight)
        if existing:
            existing.quantity = min(existing.quantity + quantity, MAX_LINE_QUANTITY)
            return existing
        item.quantity = min(quantity, MAX_LINE_QUANTITY)
        self.items.append(item)
        return item

    def remove_item(self, product_id, weight) -> None:
        self.items = [i for i in self.items if i.key != (product_id, weight)]

    def set_quantity(self, product_id, weight, quantity: int) -> None:
        if quantity <= 0:
            self.remove_item(product_id, weight)
            return
        item = self._find(product_id, weight)
        if item:
            item.quantity = min(quantity, MAX_LINE_QUANTITY)

    def clear(self) -> None:
        self.items = []

    @property
    def total_item_count(self) -> int:
        return sum(i.quantity for i in self.items)

    @property
    def total_price(self) -> Decimal:
        return sum((i.line_total for i in self.items), Decimal("0"))

    def is_empty(self) -> bool:
        return not self.items

    def snapshot(self) -> List[Dict]:
        """Detached copy of the lines for an order record."""
        return [
            {
                "product_id": i.product_id,
                "name": i.name,
                "name_ta": i.name_ta,
                "weight": i.weight,
                "quantity": i.quantity,
                "price": float(i.price),
            }
            for i in self.items
        ]

    def to_dict(self) -> Dict:
        return {
            "items": [
                {**i.to_dict(), "price": float(i.price), "line_total": float(i.line_total)}
                for i in self.items
            ],
            "total_items": self.total_item_count,
            "total_price": float(self.total_price),
        }


def load_cart(session) -> Cart:
    raw = session.get(SESSION_KEY) or []
    return Cart([CartItem.from_dict(d) for d in raw])


def save_cart(session, cart: Cart) -> None:
    session[SESSION_KEY] = [i.to_dict() for i in cart.items]
    session.modified = True

from dataclasses import dataclass, field
from typing import Optional

from flask import g, session

from app.services.cart import Cart, load_cart, save_cart
from app.services.shop_settings import ShopSettings, load_settings


@dataclass
class StorefrontContext:
    """Per-request state handed to handlers: shop identity and the shopper's cart."""

    settings: ShopSettings
    cart: Cart
    user: Optional[object] = None
    last_order: Optional[dict] = field(default=None)

    def save(self) -> None:
        save_cart(session, self.cart)
        if self.last_order is not None:
            session["last_order"] = self.last_order


def storefront_context() -> StorefrontContext:
    """Build the context once per request; settings are not cached across requests."""
    ctx = getattr(g, "storefront", None)
    if ctx is None:
        ctx = StorefrontContext(
            settings=load_settings(),
            cart=load_cart(session),
        )
        g.storefront = ctx
    return ctx

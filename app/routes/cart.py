from flask import Blueprint, request
from app.version import API_PREFIX
from app.schemas.checkout import CartAdd, CartUpdate, CartRemove
from app.services import catalog
from app.services.cart import CartItem, price_for_weight
from app.services.context import storefront_context
from app.utils import ok, error, validate_schema

cart_bp = Blueprint("cart", __name__, url_prefix=f"{API_PREFIX}/cart")


def _cart_payload(message="success"):
    ctx = storefront_context()
    return ok(ctx.cart.to_dict(), message=message)


@cart_bp.route("", methods=["GET"])
@cart_bp.route("/", methods=["GET"])
def view_cart():
    return _cart_payload()


@cart_bp.route("/add", methods=["POST"])
@validate_schema(CartAdd)
def add_to_cart():
    data: CartAdd = request.validated_data
    found = catalog.get_product(data.product_id)
    if not found.ok:
        return error(found.error, status=found.status)
    product = found.value
    if not product.in_stock:
        return error("Product is out of stock", status=400)
    if product.weights and data.weight not in product.weights:
        return error(f"{product.name} is not sold as {data.weight}", status=400)

    ctx = storefront_context()
    ctx.cart.add_item(
        CartItem(
            product_id=product.id,
            name=product.name,
            name_ta=product.name_ta,
            weight=data.weight,
            price=price_for_weight(product.current_price, data.weight),
            image=product.image_url,
        ),
        data.quantity,
    )
    ctx.save()
    return _cart_payload(f"{product.name} added to cart")


@cart_bp.route("/update", methods=["POST"])
@validate_schema(CartUpdate)
def update_quantity():
    data: CartUpdate = request.validated_data
    ctx = storefront_context()
    ctx.cart.set_quantity(data.product_id, data.weight, data.quantity)
    ctx.save()
    return _cart_payload("Cart updated")


@cart_bp.route("/remove", methods=["POST"])
@validate_schema(CartRemove)
def remove_item():
    data: CartRemove = request.validated_data
    ctx = storefront_context()
    ctx.cart.remove_item(data.product_id, data.weight)
    ctx.save()
    return _cart_payload("Item removed")


@cart_bp.route("/clear", methods=["POST"])
def clear_cart():
    ctx = storefront_context()
    ctx.cart.clear()
    ctx.save()
    return _cart_payload("Cart cleared")

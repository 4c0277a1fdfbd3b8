import logging
from flask import Blueprint, request, session, current_app
from flask_limiter.util import get_remote_address
from extensions import limiter
from app.version import API_PREFIX
from app.schemas.checkout import CheckoutRequest
from app.services import orders as order_service
from app.services.context import storefront_context
from app.utils import (
    ok,
    error,
    auth_required,
    role_required,
    current_user_optional,
    result_response,
    validate_schema,
)

checkout_bp = Blueprint("checkout", __name__, url_prefix=API_PREFIX)


@checkout_bp.route("/orders", methods=["POST"])
@limiter.limit(
    lambda: current_app.config["ORDER_LIMIT_PER_IP"],
    key_func=get_remote_address,
    error_message="Too many orders from this IP",
)
@validate_schema(CheckoutRequest)
def place_order():
    data: CheckoutRequest = request.validated_data
    ctx = storefront_context()
    user = current_user_optional()
    placed = order_service.place_order(ctx, data, user=user)
    logging.info("Checkout complete for order %s", placed["order"]["order_id"])
    return ok(placed, message="Order placed successfully", status=201)


@checkout_bp.route("/orders/last", methods=["GET"])
def last_order():
    last = session.get("last_order")
    if not last:
        return error("No recent order", status=404)
    return ok(last)


@checkout_bp.route("/orders/mine", methods=["GET"])
@auth_required
@role_required(["customer:view_own_orders", "admin"])
def my_orders():
    result = order_service.list_user_orders(request.user)
    return result_response(result, lambda orders: [o.to_dict() for o in orders])

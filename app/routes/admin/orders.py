from flask import request
from app.schemas.checkout import OrderStatusUpdate
from app.services import orders as order_service
from app.utils import ok, error, result_response, validate_schema
from models.order import ORDER_STATUSES
from . import admin_bp


@admin_bp.route("/orders", methods=["GET"])
def list_orders():
    status = request.args.get("status") or None
    if status and status not in ORDER_STATUSES:
        return error(f"Unknown status: {status}", status=400)
    result = order_service.list_orders(status=status)
    return result_response(result, lambda orders: [o.to_dict() for o in orders])


@admin_bp.route("/orders/<int:order_pk>", methods=["GET"])
def get_order(order_pk):
    return ok(order_service.get_order(order_pk).to_dict())


@admin_bp.route("/orders/<int:order_pk>/status", methods=["POST"])
@validate_schema(OrderStatusUpdate)
def update_status(order_pk):
    data: OrderStatusUpdate = request.validated_data
    order = order_service.update_order_status(order_pk, data.status)
    return ok(order.to_dict(), message=f"Order marked as {order.order_status}")

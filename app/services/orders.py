"""Order placement and back-office order handling."""
import logging
import time
from datetime import datetime, timezone
from typing import Optional

from flask import current_app
from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from models import db
from models.catalog import Product
from models.order import Order, ORDER_STATUSES
from app.exceptions import ValidationError, NotFoundError, InvalidTransitionError
from app.metrics import ORDERS_PLACED
from app.notifications.relay import relay_from_config
from app.schemas.checkout import CheckoutRequest
from app.schemas.notifications import OrderNotice
from app.services.context import StorefrontContext
from app.utils.db import transactional
from app.utils.result import Ok, Err, Result

logger = logging.getLogger(__name__)


def generate_order_id(prefix: str = "JP", now_ms: Optional[int] = None) -> str:
    """Prefix plus the last 8 digits of the millisecond clock."""
    if now_ms is None:
        now_ms = int(time.time() * 1000)
    return f"{prefix}{str(now_ms)[-8:]}"


def _owner_phone(ctx: StorefrontContext) -> str:
    return ctx.settings.whatsapp_number or current_app.config["OWNER_WHATSAPP_NUMBER"]


def notify_order(notice: OrderNotice, ctx: StorefrontContext) -> Optional[dict]:
    """Run the WhatsApp relay. Never raises; the order is already saved."""
    cfg = current_app.config
    try:
        relay = relay_from_config(cfg)
        result = relay.notify_order(
            notice,
            _owner_phone(ctx),
            ctx.settings.shop_name,
            tz_name=cfg.get("SHOP_TIMEZONE", "Asia/Kolkata"),
        )
    except Exception:
        logger.exception("WhatsApp relay failed for order %s", notice.order_id)
        return None
    return result.to_dict()


def enqueue_order_email(notice: OrderNotice) -> None:
    from app.tasks.notifications import send_order_email_task

    payload = notice.model_dump(mode="json", by_alias=True)
    try:
        if current_app.config.get("TESTING"):
            send_order_email_task(payload)
        else:
            send_order_email_task.delay(payload)
    except Exception:
        logger.exception("Could not queue order email for %s", notice.order_id)


def place_order(ctx: StorefrontContext, data: CheckoutRequest, user=None) -> dict:
    """Persist the cart as an order, notify, then empty the cart.

    Raises ValidationError for an empty cart and PersistenceError when the
    order row cannot be written; in both cases the cart is left as it was.
    """
    cart = ctx.cart
    if cart.is_empty():
        raise ValidationError(
            "Your cart is empty",
            errors=[{"field": "cart", "message": "Add items before checking out"}],
        )

    order = Order(
        order_id=generate_order_id(current_app.config.get("ORDER_ID_PREFIX", "JP")),
        user_id=user.id if user else None,
        customer_name=data.name,
        phone=data.phone,
        email=data.email,
        address=data.address,
        items=cart.snapshot(),
        total_amount=cart.total_price,
        delivery_option=data.delivery_option,
        payment_method=data.payment_method,
        order_status="pending",
        payment_status="pending",
    )
    with transactional("Failed to place order. Please try again."):
        db.session.add(order)

    ORDERS_PLACED.labels(order.delivery_option).inc()
    logger.info("Order %s placed (%s items)", order.order_id, cart.total_item_count)

    notice = OrderNotice.from_order(order)
    notifications = notify_order(notice, ctx)
    enqueue_order_email(notice)

    cart.clear()
    ctx.last_order = {
        "order_id": order.order_id,
        "total_amount": float(order.total_amount),
        "delivery_option": order.delivery_option,
        "customer_name": order.customer_name,
    }
    ctx.save()
    return {"order": order.to_dict(), "notifications": notifications}


def get_order(order_pk) -> Order:
    order = db.session.get(Order, order_pk)
    if not order:
        raise NotFoundError("Order not found")
    return order


def update_order_status(order_pk, new_status: str) -> Order:
    order = get_order(order_pk)
    if new_status not in ORDER_STATUSES:
        raise ValidationError(f"Unknown status: {new_status}")
    if new_status not in order.next_statuses:
        raise InvalidTransitionError(
            f"Cannot move order from {order.order_status} to {new_status}"
        )
    with transactional("Failed to update order status"):
        order.order_status = new_status
    logger.info("Order %s moved to %s", order.order_id, new_status)
    return order


def list_orders(status: Optional[str] = None, limit: Optional[int] = None) -> Result:
    try:
        query = Order.query
        if status:
            query = query.filter(Order.order_status == status)
        query = query.order_by(Order.created_at.desc(), Order.id.desc())
        if limit:
            query = query.limit(limit)
        return Ok(query.all())
    except SQLAlchemyError as e:
        logger.error("Error fetching orders: %s", e)
        return Err("Failed to fetch orders", e)


def list_user_orders(user) -> Result:
    try:
        orders = (
            Order.query.filter_by(user_id=user.id)
            .order_by(Order.created_at.desc(), Order.id.desc())
            .all()
        )
    except SQLAlchemyError as e:
        logger.error("Error fetching orders for user %s: %s", user.id, e)
        return Err("Failed to fetch orders", e)
    return Ok(orders)


def dashboard_stats(now: Optional[datetime] = None) -> Result:
    now = now or datetime.now(timezone.utc)
    start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0, tzinfo=None)
    try:
        counts = dict(
            db.session.query(Order.order_status, func.count(Order.id))
            .group_by(Order.order_status)
            .all()
        )
        today = Order.query.filter(Order.created_at >= start_of_day).count()
        revenue = db.session.query(func.coalesce(func.sum(Order.total_amount), 0)).scalar()
        total_products = Product.query.count()
    except SQLAlchemyError as e:
        logger.error("Error computing dashboard stats: %s", e)
        return Err("Failed to load dashboard", e)
    return Ok({
        "total_products": total_products,
        "total_orders": sum(counts.values()),
        "pending_orders": counts.get("pending", 0),
        "delivered_orders": counts.get("delivered", 0),
        "today_orders": today,
        "total_revenue": float(revenue or 0),
    })

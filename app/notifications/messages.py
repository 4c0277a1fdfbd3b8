"""Plain-text WhatsApp bodies for order notifications."""
from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from models.order import DELIVERY_LABELS

CURRENCY = "₹"


def format_amount(amount) -> str:
    value = Decimal(str(amount))
    if value == value.to_integral_value():
        return f"{CURRENCY}{int(value)}"
    return f"{CURRENCY}{value.quantize(Decimal('0.01'))}"


def format_item_line(item) -> str:
    total = Decimal(str(item.price)) * item.quantity
    return f"{item.name} ({item.weight}) x{item.quantity} = {format_amount(total)}"


def format_items(items) -> str:
    return "\n".join(f"• {format_item_line(i)}" for i in items)


def delivery_label(option: str) -> str:
    return DELIVERY_LABELS.get(option, DELIVERY_LABELS["pickup"])


def order_timestamp(tz_name: str = "Asia/Kolkata", now: datetime = None) -> str:
    now = now or datetime.now(ZoneInfo(tz_name))
    return now.strftime("%d %b %Y, %I:%M %p")


def render_owner_message(order, timestamp: str) -> str:
    return "\n".join([
        "🛒 *NEW ORDER RECEIVED!*",
        "━━━━━━━━━━━━━━━",
        "",
        f"*Order ID:* #{order.order_id}",
        f"*Time:* {timestamp}",
        "",
        "👤 *Customer Details:*",
        f"Name: {order.customer_name}",
        f"Phone: {order.customer_phone}",
        f"Address: {order.customer_address}",
        "",
        "📦 *Items Ordered:*",
        format_items(order.items),
        "",
        f"💰 *Total Amount:* {format_amount(order.total_amount)}",
        f"🚚 *Delivery:* {delivery_label(order.delivery_option)}",
        "💳 *Payment:* Cash on Delivery",
        "",
        "Please prepare this order! 🥬🍎",
    ])


def render_customer_message(order, shop_name: str) -> str:
    if order.delivery_option == "delivery":
        closing = "We will deliver to your doorstep soon!"
    else:
        closing = "Your order will be ready for pickup shortly!"
    return "\n".join([
        "✅ *ORDER CONFIRMED!*",
        "",
        f"Hello {order.customer_name}! 👋",
        "",
        f"Your order at *{shop_name}* is confirmed! 🥬🍎",
        "",
        f"*Order ID:* #{order.order_id}",
        "",
        "*Items:*",
        format_items(order.items),
        "",
        f"*Total:* {format_amount(order.total_amount)}",
        f"*Delivery:* {delivery_label(order.delivery_option)}",
        "",
        closing,
        "",
        "Thank you for choosing us! 🌿",
    ])

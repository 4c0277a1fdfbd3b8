from datetime import datetime
from decimal import Decimal
from zoneinfo import ZoneInfo

from app.notifications.messages import (
    format_amount,
    format_item_line,
    format_items,
    order_timestamp,
    render_customer_message,
    render_owner_message,
)
from app.schemas.notifications import OrderNotice


def _order(**overrides):
    data = {
        'orderId': 'JP12345678',
        'customerName': 'Priya',
        'customerPhone': '9876543210',
        'customerAddress': '12 Gandhi Road',
        'items': [
            {'name': 'Tomato', 'weight': '1kg', 'quantity': 2, 'price': 40},
            {'name': 'Onion', 'weight': '500g', 'quantity': 1, 'price': 15},
        ],
        'totalAmount': 95,
        'deliveryOption': 'delivery',
    }
    data.update(overrides)
    return OrderNotice.model_validate(data)


def test_item_line_format():
    order = _order()
    assert format_item_line(order.items[0]) == 'Tomato (1kg) x2 = ₹80'


def test_items_are_bulleted():
    lines = format_items(_order().items).split('\n')
    assert lines == ['• Tomato (1kg) x2 = ₹80', '• Onion (500g) x1 = ₹15']


def test_amounts():
    assert format_amount(Decimal('95')) == '₹95'
    assert format_amount(Decimal('95.50')) == '₹95.50'


def test_owner_message_contents():
    msg = render_owner_message(_order(), '19 Oct 2026, 09:30 AM')
    assert '#JP12345678' in msg
    assert 'Tomato (1kg) x2 = ₹80' in msg
    assert 'Home Delivery' in msg
    assert 'Cash on Delivery' in msg
    assert msg.count('₹95') == 1


def test_customer_message_contents():
    msg = render_customer_message(_order(deliveryOption='pickup'), 'JP.Vegetables & Fruits')
    assert 'Hello Priya!' in msg
    assert '*JP.Vegetables & Fruits*' in msg
    assert 'Store Pickup' in msg
    assert 'ready for pickup' in msg
    assert msg.count('₹95') == 1


def test_timestamp_in_shop_timezone():
    now = datetime(2026, 10, 19, 9, 5, tzinfo=ZoneInfo('Asia/Kolkata'))
    assert order_timestamp(now=now) == '19 Oct 2026, 09:05 AM'

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, Numeric
from sqlalchemy.sql import func
from models import db, BIGINT


ORDER_STATUSES = ("pending", "confirmed", "delivered", "cancelled")

# Forward-only; delivered and cancelled are terminal
ORDER_TRANSITIONS = {
    "pending": ("confirmed", "cancelled"),
    "confirmed": ("delivered", "cancelled"),
    "delivered": (),
    "cancelled": (),
}

DELIVERY_LABELS = {
    "delivery": "Home Delivery",
    "pickup": "Store Pickup",
}


class Order(db.Model):
    __tablename__ = "order"
    __table_args__ = (
        db.Index("ix_order_status_created", "order_status", "created_at"),
    )
    id = Column(BIGINT, primary_key=True)
    order_id = Column(String(20), unique=True, nullable=False)  # human readable, e.g. JP12345678
    user_id = Column(BIGINT, ForeignKey("user_account.id"), nullable=True)

    customer_name = Column(String(100), nullable=False)
    phone = Column(String(15), nullable=False)
    email = Column(String(255), nullable=True)
    address = Column(Text, nullable=False)

    # Snapshot of the cart at submission time; never rewritten
    items = Column(db.JSON, nullable=False)
    total_amount = Column(Numeric(10, 2), nullable=False)

    delivery_option = Column(String(20), nullable=False)  # delivery, pickup
    payment_method = Column(String(10), nullable=False, default="cod")
    order_status = Column(String(20), nullable=False, default="pending")  # pending, confirmed, delivered, cancelled
    payment_status = Column(String(20), nullable=False, default="pending")

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    user = db.relationship("UserAccount", backref="orders", lazy=True)

    @property
    def next_statuses(self):
        return list(ORDER_TRANSITIONS.get(self.order_status, ()))

    def to_dict(self):
        return {
            "id": self.id,
            "order_id": self.order_id,
            "user_id": self.user_id,
            "customer_name": self.customer_name,
            "phone": self.phone,
            "email": self.email,
            "address": self.address,
            "items": list(self.items or []),
            "total_amount": float(self.total_amount),
            "delivery_option": self.delivery_option,
            "payment_method": self.payment_method,
            "order_status": self.order_status,
            "payment_status": self.payment_status,
            "next_statuses": self.next_statuses,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

from datetime import datetime
from models import db, BIGINT


class Category(db.Model):
    __tablename__ = "category"

    id = db.Column(BIGINT, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    name_ta = db.Column(db.String(100), nullable=True)   # Tamil label
    icon = db.Column(db.String(20), nullable=True)        # emoji shown on chips
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    products = db.relationship("Product", backref="category", lazy=True)

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "name_ta": self.name_ta,
            "icon": self.icon,
        }


class Product(db.Model):
    __tablename__ = "product"
    __table_args__ = (
        db.Index("ix_product_stock_category", "in_stock", "category_id"),
    )

    id = db.Column(BIGINT, primary_key=True)
    category_id = db.Column(BIGINT, db.ForeignKey("category.id", ondelete="SET NULL"), nullable=True)

    name = db.Column(db.String(100), nullable=False)
    name_ta = db.Column(db.String(100), nullable=True)
    description = db.Column(db.Text, nullable=True)
    description_ta = db.Column(db.Text, nullable=True)

    # Pricing is per unit (kg); weight options scale it
    price = db.Column(db.Numeric(10, 2), nullable=False)
    offer_price = db.Column(db.Numeric(10, 2), nullable=True)
    unit = db.Column(db.String(20), default="kg")
    weights = db.Column(db.JSON, default=lambda: ["250g", "500g", "1kg"])

    image_url = db.Column(db.String(255), nullable=True)

    in_stock = db.Column(db.Boolean, default=True)
    is_offer = db.Column(db.Boolean, default=False)
    is_best_seller = db.Column(db.Boolean, default=False)
    is_fresh = db.Column(db.Boolean, default=True)

    created_at = db.Column(db.DateTime, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def current_price(self):
        if self.is_offer and self.offer_price:
            return self.offer_price
        return self.price

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "name_ta": self.name_ta,
            "description": self.description,
            "description_ta": self.description_ta,
            "price": float(self.price),
            "offer_price": float(self.offer_price) if self.offer_price is not None else None,
            "current_price": float(self.current_price),
            "unit": self.unit,
            "weights": list(self.weights or []),
            "image_url": self.image_url,
            "in_stock": bool(self.in_stock),
            "is_offer": bool(self.is_offer),
            "is_best_seller": bool(self.is_best_seller),
            "is_fresh": bool(self.is_fresh),
            "category_id": self.category_id,
            "category": self.category.to_dict() if self.category else None,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

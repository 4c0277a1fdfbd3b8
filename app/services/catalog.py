"""Catalog data access.

Every function returns a ``Result``; SQLAlchemy errors are logged here and
turned into ``Err`` so routes never inspect driver exceptions.
"""
import logging
from typing import Optional

from sqlalchemy import or_
from sqlalchemy.exc import SQLAlchemyError
from models import db
from models.catalog import Category, Product
from app.utils.result import Ok, Err, Result, not_found, invalid

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 4


def list_products(
    in_stock: Optional[bool] = True,
    category_id: Optional[int] = None,
    best_seller: Optional[bool] = None,
    offer: Optional[bool] = None,
    limit: Optional[int] = None,
    order_by: str = "newest",
    search: Optional[str] = None,
) -> Result:
    """Filtered product listing. ``search`` matches the English name
    case-insensitively and the Tamil name as typed.
    """
    try:
        query = Product.query
        if in_stock is not None:
            query = query.filter(Product.in_stock.is_(in_stock))
        if category_id is not None:
            query = query.filter(Product.category_id == category_id)
        if best_seller is not None:
            query = query.filter(Product.is_best_seller.is_(best_seller))
        if offer is not None:
            query = query.filter(Product.is_offer.is_(offer))
        if search:
            query = query.filter(or_(
                Product.name.icontains(search, autoescape=True),
                Product.name_ta.contains(search, autoescape=True),
            ))
        if order_by == "name":
            query = query.order_by(Product.name.asc())
        else:
            query = query.order_by(Product.created_at.desc(), Product.id.desc())
        if limit:
            query = query.limit(limit)
        return Ok(query.all())
    except SQLAlchemyError as e:
        logger.error("Error fetching products: %s", e)
        return Err("Failed to fetch products", e)


def best_sellers() -> Result:
    return list_products(best_seller=True, limit=FEATURED_LIMIT)


def offer_products() -> Result:
    return list_products(offer=True, limit=FEATURED_LIMIT)


def get_product(product_id) -> Result:
    try:
        product = db.session.get(Product, product_id)
    except SQLAlchemyError as e:
        logger.error("Error fetching product %s: %s", product_id, e)
        return Err("Failed to fetch product", e)
    if not product:
        return not_found("Product not found")
    return Ok(product)


def list_categories() -> Result:
    try:
        return Ok(Category.query.order_by(Category.name.asc()).all())
    except SQLAlchemyError as e:
        logger.error("Error fetching categories: %s", e)
        return Err("Failed to fetch categories", e)


def _commit(obj, message) -> Result:
    try:
        db.session.commit()
    except SQLAlchemyError as e:
        db.session.rollback()
        logger.error("%s: %s", message, e)
        return Err(message, e)
    return Ok(obj)


def _category_exists(category_id) -> bool:
    return category_id is None or db.session.get(Category, category_id) is not None


def create_product(data: dict) -> Result:
    if not _category_exists(data.get("category_id")):
        return invalid("Category not found")
    product = Product(**data)
    db.session.add(product)
    return _commit(product, "Failed to save product")


def update_product(product_id, patch: dict) -> Result:
    found = get_product(product_id)
    if not found.ok:
        return found
    if "category_id" in patch and not _category_exists(patch["category_id"]):
        return invalid("Category not found")
    product = found.value
    for key, value in patch.items():
        setattr(product, key, value)
    if not product.is_offer:
        product.offer_price = None
    return _commit(product, "Failed to save product")


def delete_product(product_id) -> Result:
    found = get_product(product_id)
    if not found.ok:
        return found
    db.session.delete(found.value)
    return _commit(product_id, "Failed to delete product")


def toggle_stock(product_id) -> Result:
    found = get_product(product_id)
    if not found.ok:
        return found
    product = found.value
    product.in_stock = not product.in_stock
    return _commit(product, "Failed to update stock status")


def get_category(category_id) -> Result:
    try:
        category = db.session.get(Category, category_id)
    except SQLAlchemyError as e:
        logger.error("Error fetching category %s: %s", category_id, e)
        return Err("Failed to fetch category", e)
    if not category:
        return not_found("Category not found")
    return Ok(category)


def create_category(data: dict) -> Result:
    category = Category(**data)
    db.session.add(category)
    return _commit(category, "Failed to save category")


def update_category(category_id, patch: dict) -> Result:
    found = get_category(category_id)
    if not found.ok:
        return found
    category = found.value
    for key, value in patch.items():
        setattr(category, key, value)
    return _commit(category, "Failed to save category")


def delete_category(category_id) -> Result:
    found = get_category(category_id)
    if not found.ok:
        return found
    category = found.value
    # Products outlive their category
    Product.query.filter_by(category_id=category.id).update({"category_id": None})
    db.session.delete(category)
    return _commit(category_id, "Failed to delete category")

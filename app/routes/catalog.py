from flask import Blueprint, request
from app.version import API_PREFIX
from app.services import catalog
from app.services.context import storefront_context
from app.utils import ok, result_response

catalog_bp = Blueprint("catalog", __name__, url_prefix=API_PREFIX)


def _products(items):
    return [p.to_dict() for p in items]


@catalog_bp.route("/products", methods=["GET"])
def list_products():
    category_id = request.args.get("category_id", type=int)
    limit = request.args.get("limit", type=int)
    offer = request.args.get("offer") in ("1", "true", "yes")
    best = request.args.get("best_seller") in ("1", "true", "yes")
    search = (request.args.get("q") or "").strip() or None
    result = catalog.list_products(
        category_id=category_id,
        best_seller=True if best else None,
        offer=True if offer else None,
        limit=limit,
        search=search,
    )
    return result_response(result, _products)


@catalog_bp.route("/products/best-sellers", methods=["GET"])
def best_sellers():
    return result_response(catalog.best_sellers(), _products)


@catalog_bp.route("/products/offers", methods=["GET"])
def offers():
    return result_response(catalog.offer_products(), _products)


@catalog_bp.route("/products/<int:product_id>", methods=["GET"])
def get_product(product_id):
    return result_response(catalog.get_product(product_id), lambda p: p.to_dict())


@catalog_bp.route("/categories", methods=["GET"])
def list_categories():
    return result_response(catalog.list_categories(), lambda cs: [c.to_dict() for c in cs])


@catalog_bp.route("/shop", methods=["GET"])
def shop_info():
    """Public shop settings used by headers, footers and the contact page."""
    ctx = storefront_context()
    return ok(ctx.settings.to_dict())

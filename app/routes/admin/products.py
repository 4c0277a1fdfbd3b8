import logging
from flask import request
from app.schemas.catalog import ProductCreate, ProductUpdate
from app.services import catalog
from app.utils import result_response, validate_schema
from . import admin_bp


def _product(p):
    return p.to_dict()


@admin_bp.route("/products", methods=["GET"])
def list_products():
    result = catalog.list_products(in_stock=None, order_by="name")
    return result_response(result, lambda items: [p.to_dict() for p in items])


@admin_bp.route("/products", methods=["POST"])
@validate_schema(ProductCreate)
def create_product():
    data: ProductCreate = request.validated_data
    result = catalog.create_product(data.model_dump())
    if result.ok:
        logging.info("Product %s created", result.value.id)
    return result_response(result, _product, status=201, message="Product added")


@admin_bp.route("/products/<int:product_id>", methods=["PATCH"])
@validate_schema(ProductUpdate)
def update_product(product_id):
    data: ProductUpdate = request.validated_data
    result = catalog.update_product(product_id, data.model_dump(exclude_unset=True))
    return result_response(result, _product, message="Product updated")


@admin_bp.route("/products/<int:product_id>", methods=["DELETE"])
def delete_product(product_id):
    result = catalog.delete_product(product_id)
    return result_response(result, lambda pid: {"id": pid}, message="Product deleted")


@admin_bp.route("/products/<int:product_id>/toggle-stock", methods=["POST"])
def toggle_stock(product_id):
    result = catalog.toggle_stock(product_id)
    return result_response(result, _product, message="Stock status updated")

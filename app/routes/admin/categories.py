from flask import request
from app.schemas.catalog import CategoryCreate, CategoryUpdate
from app.services import catalog
from app.utils import result_response, validate_schema
from . import admin_bp


@admin_bp.route("/categories", methods=["GET"])
def list_categories():
    return result_response(catalog.list_categories(), lambda cs: [c.to_dict() for c in cs])


@admin_bp.route("/categories", methods=["POST"])
@validate_schema(CategoryCreate)
def create_category():
    data: CategoryCreate = request.validated_data
    result = catalog.create_category(data.model_dump())
    return result_response(result, lambda c: c.to_dict(), status=201, message="Category added")


@admin_bp.route("/categories/<int:category_id>", methods=["PATCH"])
@validate_schema(CategoryUpdate)
def update_category(category_id):
    data: CategoryUpdate = request.validated_data
    result = catalog.update_category(category_id, data.model_dump(exclude_unset=True))
    return result_response(result, lambda c: c.to_dict(), message="Category updated")


@admin_bp.route("/categories/<int:category_id>", methods=["DELETE"])
def delete_category(category_id):
    result = catalog.delete_category(category_id)
    return result_response(result, lambda cid: {"id": cid}, message="Category deleted")

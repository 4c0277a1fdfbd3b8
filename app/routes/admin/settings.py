from flask import request
from app.schemas.checkout import SettingsUpdate
from app.services.shop_settings import read_settings, save_settings
from app.utils import result_response, validate_schema
from . import admin_bp


@admin_bp.route("/settings", methods=["GET"])
def get_settings():
    return result_response(read_settings(), lambda s: s.to_dict())


@admin_bp.route("/settings", methods=["PUT"])
@validate_schema(SettingsUpdate)
def update_settings():
    data: SettingsUpdate = request.validated_data
    return result_response(save_settings(data.changes()), lambda s: s.to_dict(), message="Settings saved")

from app.services import orders as order_service
from app.utils import result_response
from . import admin_bp


@admin_bp.route("/dashboard", methods=["GET"])
def dashboard():
    return result_response(order_service.dashboard_stats())

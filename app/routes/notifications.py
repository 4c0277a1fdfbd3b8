"""Relay endpoints for re-sending order notifications from the back office."""
from flask import Blueprint, request, jsonify, current_app
from app.version import API_PREFIX
from app.notifications.email import EmailSender, send_order_emails
from app.notifications.messages import order_timestamp
from app.notifications.relay import relay_from_config
from app.schemas.notifications import WhatsAppRelayRequest, EmailRelayRequest
from app.services.context import storefront_context
from app.utils import auth_required, role_required, validate_schema

notifications_bp = Blueprint("notifications", __name__, url_prefix=f"{API_PREFIX}/notifications")


@notifications_bp.before_request
@auth_required
@role_required("admin")
def _enforce_admin_role():
    return None


@notifications_bp.route("/whatsapp", methods=["POST"])
@validate_schema(WhatsAppRelayRequest)
def send_whatsapp():
    data: WhatsAppRelayRequest = request.validated_data
    ctx = storefront_context()
    result = relay_from_config(current_app.config).notify_order(
        data.order,
        data.owner_phone,
        ctx.settings.shop_name,
        tz_name=current_app.config.get("SHOP_TIMEZONE", "Asia/Kolkata"),
    )
    return jsonify(result.to_dict()), 200


@notifications_bp.route("/email", methods=["POST"])
@validate_schema(EmailRelayRequest)
def send_email():
    data: EmailRelayRequest = request.validated_data
    ctx = storefront_context()
    result = send_order_emails(
        data.order,
        ctx.settings,
        EmailSender.from_config(current_app.config),
        order_timestamp(current_app.config.get("SHOP_TIMEZONE", "Asia/Kolkata")),
    )
    return jsonify(result.to_dict()), 200

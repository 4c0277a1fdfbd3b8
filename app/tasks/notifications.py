import logging
from contextlib import contextmanager

from celery import shared_task
from flask import current_app, has_app_context

from app.exceptions import NotificationDeliveryError
from app.notifications.email import EmailSender, render_password_reset, send_order_emails
from app.notifications.messages import order_timestamp
from app.schemas.notifications import OrderNotice
from app.services.shop_settings import load_settings

logger = logging.getLogger(__name__)


@contextmanager
def _app_context():
    if has_app_context():
        yield current_app._get_current_object()
        return
    from app import create_app
    app = create_app()
    with app.app_context():
        yield app


@shared_task(bind=True, max_retries=3, default_retry_delay=60)
def send_order_email_task(self, order_payload: dict, roles=None) -> dict:
    """Email the owner and, when an address was given, the customer.

    Network failures are retried for the recipients that were not reached.
    """
    order = OrderNotice.model_validate(order_payload)
    with _app_context() as app:
        result = send_order_emails(
            order,
            load_settings(),
            EmailSender.from_config(app.config),
            order_timestamp(app.config.get("SHOP_TIMEZONE", "Asia/Kolkata")),
            roles=roles or ("owner", "customer"),
        )
    if result.retryable:
        failed = result.retryable
        raise self.retry(
            kwargs={"order_payload": order_payload, "roles": failed},
            exc=NotificationDeliveryError("resend", result.errors[failed[0]]),
        )
    return result.to_dict()


@shared_task
def send_password_reset_task(email: str, link: str) -> bool:
    with _app_context() as app:
        settings = load_settings()
        sender = EmailSender.from_config(app.config)
        sent, err = sender.send(
            email,
            f"Reset your password – {settings.shop_name}",
            render_password_reset(link, settings),
            from_name=settings.shop_name,
        )
    if not sent:
        logger.warning("[Email] password reset not sent: %s", err)
    return sent

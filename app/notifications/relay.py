"""Best-effort order notification relay.

For each recipient the relay walks its transports in order:

    Pending -> TryProvider(i) -> Delivered(i)
                              -> TryProvider(i + 1)   (non-success or exception)
                              -> Logged               (chain exhausted)

``Logged`` is terminal and counts as success with ``method="logged"``: the
message is written to the log for manual follow-up. Owner and customer
deliveries run concurrently and report independently.
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from app.exceptions import NotificationDeliveryError
from app.metrics import NOTIFICATION_COUNTER
from app.notifications.messages import (
    order_timestamp,
    render_customer_message,
    render_owner_message,
)
from app.notifications.transports import Transport, build_transports
from app.telemetry import tracer
from app.utils.phone import clean_phone

logger = logging.getLogger(__name__)

LOGGED = "logged"


@dataclass
class NotificationAttempt:
    role: str
    phone: str
    message: str
    provider: Optional[str] = None
    success: bool = False
    failures: List[str] = field(default_factory=list)

    @property
    def method(self) -> Optional[str]:
        return self.provider


@dataclass
class RelayResult:
    owner: NotificationAttempt
    customer: NotificationAttempt

    @property
    def success(self) -> bool:
        return True

    @property
    def owner_notified(self) -> bool:
        return self.owner.success

    @property
    def customer_notified(self) -> bool:
        return self.customer.success

    def to_dict(self) -> Dict:
        return {
            "success": self.success,
            "ownerNotified": self.owner_notified,
            "customerNotified": self.customer_notified,
            "methods": {
                "owner": self.owner.method,
                "customer": self.customer.method,
            },
        }


class NotificationRelay:
    def __init__(self, transports: Sequence[Transport]):
        self.transports = list(transports)

    def _try(self, transport: Transport, phone: str, message: str):
        try:
            outcome = transport.deliver(phone, message)
        except Exception as e:
            raise NotificationDeliveryError(transport.name, str(e)) from e
        if not outcome.success:
            raise NotificationDeliveryError(transport.name, outcome.detail or "rejected")
        return outcome

    def deliver(self, role: str, phone: str, message: str) -> NotificationAttempt:
        with tracer.start_as_current_span("notification.deliver") as span:
            span.set_attribute("notification.role", role)
            attempt = self._walk_chain(role, phone, message)
            span.set_attribute("notification.method", attempt.provider)
            span.set_attribute("notification.failures", len(attempt.failures))
        return attempt

    def _walk_chain(self, role: str, phone: str, message: str) -> NotificationAttempt:
        recipient = clean_phone(phone)
        attempt = NotificationAttempt(role=role, phone=recipient, message=message)
        logger.info("[WhatsApp] Preparing message for %s", role.upper())

        for transport in self.transports:
            try:
                self._try(transport, recipient, message)
            except NotificationDeliveryError as e:
                logger.warning("[WhatsApp] %s failed for %s: %s", transport.name, role, e)
                attempt.failures.append(str(e))
                continue
            attempt.provider = transport.name
            attempt.success = True
            logger.info("[WhatsApp] %s success for %s", transport.name, role)
            break
        else:
            logger.info("[WhatsApp] NOTIFICATION QUEUED for %s (%s):\n%s", role, recipient, message)
            attempt.provider = LOGGED
            attempt.success = True

        NOTIFICATION_COUNTER.labels(role, attempt.provider).inc()
        return attempt

    def notify_order(self, order, owner_phone: str, shop_name: str,
                     tz_name: str = "Asia/Kolkata") -> RelayResult:
        """Render both messages and deliver them concurrently."""
        logger.info("[WhatsApp] Processing notification for order %s", order.order_id)
        owner_message = render_owner_message(order, order_timestamp(tz_name))
        customer_message = render_customer_message(order, shop_name)

        with ThreadPoolExecutor(max_workers=2, thread_name_prefix="relay") as pool:
            owner_future = pool.submit(self.deliver, "owner", owner_phone, owner_message)
            customer_future = pool.submit(self.deliver, "customer", order.customer_phone, customer_message)
            result = RelayResult(owner=owner_future.result(), customer=customer_future.result())

        logger.info(
            "[WhatsApp] Owner: %s (%s), customer: %s (%s)",
            "SUCCESS" if result.owner_notified else "FAILED",
            result.owner.method,
            "SUCCESS" if result.customer_notified else "FAILED",
            result.customer.method,
        )
        return result


def relay_from_config(config) -> NotificationRelay:
    return NotificationRelay(build_transports(config))

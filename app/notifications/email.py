"""Order emails sent through the Resend HTTP API."""
import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple

import requests
from jinja2 import Environment, PackageLoader, select_autoescape

from app.notifications.messages import delivery_label, format_amount

logger = logging.getLogger(__name__)

_env = Environment(
    loader=PackageLoader("app", "templates/email"),
    autoescape=select_autoescape(["html"]),
)
_env.filters["inr"] = format_amount
_env.filters["delivery_label"] = delivery_label


def render_owner_email(order, settings, timestamp: str) -> str:
    return _env.get_template("owner_order.html").render(order=order, shop=settings, timestamp=timestamp)


def render_customer_email(order, settings, timestamp: str) -> str:
    return _env.get_template("customer_order.html").render(order=order, shop=settings, timestamp=timestamp)


def render_password_reset(link: str, settings) -> str:
    return _env.get_template("password_reset.html").render(link=link, shop=settings)


class EmailSender:
    URL = "https://api.resend.com/emails"

    def __init__(self, api_key: Optional[str], sender: str, timeout: float = 10,
                 session: requests.Session = None):
        self.api_key = api_key
        self.sender = sender
        self.timeout = timeout
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "EmailSender":
        return cls(
            config.get("RESEND_API_KEY"),
            config.get("MAIL_FROM", "onboarding@resend.dev"),
            timeout=config.get("NOTIFY_HTTP_TIMEOUT", 10),
        )

    def deliver(self, to: str, subject: str, html: str, from_name: str = None) -> Tuple[bool, Optional[str]]:
        """Return (sent, error message). Network errors propagate."""
        if not self.api_key:
            return False, "Email provider not configured"
        sender = f"{from_name} <{self.sender}>" if from_name else self.sender
        resp = self.session.post(
            self.URL,
            headers={"Authorization": f"Bearer {self.api_key}"},
            json={"from": sender, "to": [to], "subject": subject, "html": html},
            timeout=self.timeout,
        )
        if not resp.ok:
            try:
                detail = resp.json().get("message")
            except ValueError:
                detail = None
            return False, detail or f"status {resp.status_code}"
        return True, None

    def send(self, to: str, subject: str, html: str, from_name: str = None) -> Tuple[bool, Optional[str]]:
        try:
            return self.deliver(to, subject, html, from_name=from_name)
        except requests.RequestException as e:
            logger.error("[Email] send failed: %s", e)
            return False, str(e)


@dataclass
class EmailResult:
    owner_notified: bool = False
    customer_notified: bool = False
    errors: Dict[str, Optional[str]] = field(default_factory=lambda: {"owner": None, "customer": None})
    # roles that failed on the network and are worth another attempt
    retryable: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict:
        return {
            "success": True,
            "ownerNotified": self.owner_notified,
            "customerNotified": self.customer_notified,
            "errors": dict(self.errors),
        }


def _send(sender: EmailSender, result: EmailResult, role: str, to: str, subject: str, html: str, from_name: str):
    try:
        sent, err = sender.deliver(to, subject, html, from_name=from_name)
    except requests.RequestException as e:
        logger.error("[Email] %s email failed: %s", role, e)
        sent, err = False, str(e)
        result.retryable.append(role)
    setattr(result, f"{role}_notified", sent)
    result.errors[role] = err


def send_order_emails(order, settings, sender: EmailSender, timestamp: str,
                      roles: Iterable[str] = ("owner", "customer")) -> EmailResult:
    """Owner email always (needs shop_email), customer email only when given.

    ``roles`` narrows a retry to the recipients that have not been reached.
    """
    result = EmailResult()
    shop_name = settings.shop_name
    roles = set(roles)

    if "owner" in roles:
        if settings.shop_email:
            html = render_owner_email(order, settings, timestamp)
            _send(sender, result, "owner", settings.shop_email,
                  f"New Order Received – {shop_name}", html, shop_name)
        else:
            result.errors["owner"] = "Shop email not configured in settings"

    if "customer" in roles:
        if order.customer_email:
            html = render_customer_email(order, settings, timestamp)
            _send(sender, result, "customer", order.customer_email,
                  f"Order Confirmed – {shop_name}", html, shop_name)
        else:
            result.errors["customer"] = "No customer email provided"

    logger.info(
        "[Email] Order %s owner: %s, customer: %s",
        order.order_id,
        "SUCCESS" if result.owner_notified else "FAILED",
        "SUCCESS" if result.customer_notified else "FAILED",
    )
    return result

"""WhatsApp delivery providers.

Each transport sends one message to one phone number. A non-success response
comes back as ``DeliveryOutcome(success=False)``; network and client errors
propagate so the relay can move on to the next provider.
"""
import logging
from dataclasses import dataclass
from typing import List, Optional

import requests
from twilio.rest import Client
from twilio.http.http_client import TwilioHttpClient

logger = logging.getLogger(__name__)


@dataclass
class DeliveryOutcome:
    success: bool
    provider: str
    detail: Optional[str] = None


class Transport:
    name = "transport"

    def deliver(self, recipient: str, message: str) -> DeliveryOutcome:
        raise NotImplementedError

    def __repr__(self):
        return f"<{type(self).__name__} {self.name}>"


class CallMeBotTransport(Transport):
    name = "callmebot"
    URL = "https://api.callmebot.com/whatsapp.php"

    def __init__(self, api_key: str, timeout: float = 10, session: requests.Session = None):
        self.api_key = api_key
        self.timeout = timeout
        self.session = session or requests.Session()

    def deliver(self, recipient, message):
        resp = self.session.get(
            self.URL,
            params={"phone": recipient, "text": message, "apikey": self.api_key},
            timeout=self.timeout,
        )
        if resp.ok:
            return DeliveryOutcome(True, self.name)
        return DeliveryOutcome(False, self.name, f"status {resp.status_code}")


class WhatsAppBusinessTransport(Transport):
    name = "whatsapp_business"
    URL = "https://graph.facebook.com/{version}/{phone_id}/messages"

    def __init__(self, token: str, phone_id: str, version: str = "v18.0",
                 timeout: float = 10, session: requests.Session = None):
        self.token = token
        self.url = self.URL.format(version=version, phone_id=phone_id)
        self.timeout = timeout
        self.session = session or requests.Session()

    def deliver(self, recipient, message):
        resp = self.session.post(
            self.url,
            headers={"Authorization": f"Bearer {self.token}"},
            json={
                "messaging_product": "whatsapp",
                "to": recipient,
                "type": "text",
                "text": {"body": message},
            },
            timeout=self.timeout,
        )
        if resp.ok:
            return DeliveryOutcome(True, self.name)
        return DeliveryOutcome(False, self.name, f"status {resp.status_code}")


class TwilioWhatsAppTransport(Transport):
    name = "twilio"

    def __init__(self, client: Client, whatsapp_from: str):
        self.client = client
        self.whatsapp_from = whatsapp_from

    def deliver(self, recipient, message):
        sent = self.client.messages.create(
            from_=self.whatsapp_from,
            to=f"whatsapp:+{recipient}",
            body=message,
        )
        if getattr(sent, "sid", None):
            logger.info("[WhatsApp] Twilio message sent. SID: %s", sent.sid)
            return DeliveryOutcome(True, self.name)
        return DeliveryOutcome(False, self.name, "no message sid")


def build_transports(config) -> List[Transport]:
    """Providers in fallback order; unconfigured ones are left out."""
    timeout = config.get("NOTIFY_HTTP_TIMEOUT", 10)
    transports: List[Transport] = []

    if config.get("CALLMEBOT_API_KEY"):
        transports.append(CallMeBotTransport(config["CALLMEBOT_API_KEY"], timeout=timeout))

    if config.get("WHATSAPP_BUSINESS_TOKEN") and config.get("WHATSAPP_PHONE_ID"):
        transports.append(
            WhatsAppBusinessTransport(
                config["WHATSAPP_BUSINESS_TOKEN"],
                config["WHATSAPP_PHONE_ID"],
                version=config.get("WHATSAPP_API_VERSION", "v18.0"),
                timeout=timeout,
            )
        )

    sid = config.get("TWILIO_ACCOUNT_SID")
    token = config.get("TWILIO_AUTH_TOKEN")
    whatsapp_from = config.get("TWILIO_WHATSAPP_FROM")
    if all([sid, token, whatsapp_from]):
        client = Client(sid, token, http_client=TwilioHttpClient(timeout=timeout))
        transports.append(TwilioWhatsAppTransport(client, whatsapp_from))
    else:
        logger.debug("Twilio credentials missing; twilio transport disabled")

    return transports

import threading
import time

import requests

from app.notifications.relay import NotificationRelay, relay_from_config
from app.notifications.transports import (
    CallMeBotTransport,
    DeliveryOutcome,
    Transport,
    TwilioWhatsAppTransport,
    WhatsAppBusinessTransport,
    build_transports,
)
from app.schemas.notifications import OrderNotice


class Raising(Transport):
    name = 'first'

    def __init__(self):
        self.calls = 0

    def deliver(self, recipient, message):
        self.calls += 1
        raise requests.ConnectionError('provider down')


class Rejecting(Transport):
    name = 'rejecting'

    def deliver(self, recipient, message):
        return DeliveryOutcome(False, self.name, 'status 500')


class Succeeding(Transport):
    name = 'second'

    def __init__(self):
        self.sent = []

    def deliver(self, recipient, message):
        self.sent.append((recipient, message))
        return DeliveryOutcome(True, self.name)


def _order():
    return OrderNotice.model_validate({
        'orderId': 'JP00000001',
        'customerName': 'Priya',
        'customerPhone': '9876543210',
        'customerAddress': '12 Gandhi Road',
        'items': [{'name': 'Tomato', 'weight': '1kg', 'quantity': 2, 'price': 40}],
        'totalAmount': 80,
    })


def test_exception_falls_through_to_next_provider():
    first, second = Raising(), Succeeding()
    attempt = NotificationRelay([first, second]).deliver('owner', '+91 98765-43210', 'hi')
    assert first.calls == 1
    assert attempt.success is True
    assert attempt.method == 'second'
    assert second.sent == [('919876543210', 'hi')]


def test_non_success_response_falls_through():
    second = Succeeding()
    attempt = NotificationRelay([Rejecting(), second]).deliver('customer', '9876543210', 'hi')
    assert attempt.method == 'second'
    assert len(attempt.failures) == 1


def test_all_failing_ends_logged(caplog):
    caplog.set_level('INFO')
    attempt = NotificationRelay([Raising(), Rejecting()]).deliver('owner', '9876543210', 'order body')
    assert attempt.success is True
    assert attempt.method == 'logged'
    assert any('order body' in r.getMessage() for r in caplog.records)


def test_no_providers_is_logged():
    attempt = NotificationRelay([]).deliver('owner', '9876543210', 'x')
    assert attempt.method == 'logged'


def test_recipients_are_independent():
    class OwnerOnlyFails(Transport):
        name = 'selective'

        def deliver(self, recipient, message):
            if 'NEW ORDER' in message:
                raise requests.Timeout('slow')
            return DeliveryOutcome(True, self.name)

    result = NotificationRelay([OwnerOnlyFails()]).notify_order(_order(), '919999999999', 'Shop')
    assert result.to_dict() == {
        'success': True,
        'ownerNotified': True,
        'customerNotified': True,
        'methods': {'owner': 'logged', 'customer': 'selective'},
    }


def test_deliveries_run_concurrently():
    barrier = threading.Barrier(2, timeout=5)

    class Rendezvous(Transport):
        name = 'rendezvous'

        def deliver(self, recipient, message):
            # Only passes if owner and customer are in flight at the same time
            barrier.wait()
            return DeliveryOutcome(True, self.name)

    start = time.monotonic()
    result = NotificationRelay([Rendezvous()]).notify_order(_order(), '919999999999', 'Shop')
    assert time.monotonic() - start < 5
    assert result.owner.method == 'rendezvous'
    assert result.customer.method == 'rendezvous'


class FakeResponse:
    def __init__(self, status=200):
        self.status_code = status
        self.ok = status < 400


class FakeSession:
    def __init__(self, status=200):
        self.status = status
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(('GET', url, kwargs))
        return FakeResponse(self.status)

    def post(self, url, **kwargs):
        self.calls.append(('POST', url, kwargs))
        return FakeResponse(self.status)


def test_callmebot_request_shape():
    session = FakeSession()
    outcome = CallMeBotTransport('key123', timeout=3, session=session).deliver('919876543210', 'hello')
    assert outcome.success
    method, url, kwargs = session.calls[0]
    assert method == 'GET'
    assert url == CallMeBotTransport.URL
    assert kwargs['params'] == {'phone': '919876543210', 'text': 'hello', 'apikey': 'key123'}
    assert kwargs['timeout'] == 3


def test_whatsapp_business_request_shape():
    session = FakeSession(status=401)
    transport = WhatsAppBusinessTransport('tok', 'PID', version='v18.0', session=session)
    outcome = transport.deliver('919876543210', 'hello')
    assert outcome.success is False
    method, url, kwargs = session.calls[0]
    assert url == 'https://graph.facebook.com/v18.0/PID/messages'
    assert kwargs['json']['to'] == '919876543210'
    assert kwargs['json']['text'] == {'body': 'hello'}
    assert kwargs['headers']['Authorization'] == 'Bearer tok'


def test_twilio_transport_uses_whatsapp_address():
    class Messages:
        def __init__(self):
            self.kwargs = None

        def create(self, **kwargs):
            self.kwargs = kwargs

            class Sent:
                sid = 'SM123'
            return Sent()

    class Client:
        messages = Messages()

    client = Client()
    outcome = TwilioWhatsAppTransport(client, 'whatsapp:+14155238886').deliver('919876543210', 'hi')
    assert outcome.success
    assert client.messages.kwargs['to'] == 'whatsapp:+919876543210'


def test_build_transports_order_and_skips_unconfigured():
    assert build_transports({}) == []
    chain = build_transports({
        'CALLMEBOT_API_KEY': 'k',
        'WHATSAPP_BUSINESS_TOKEN': 't',
        'WHATSAPP_PHONE_ID': 'p',
        'TWILIO_ACCOUNT_SID': 'ACxxxxxxxx',
        'TWILIO_AUTH_TOKEN': 'secret',
        'TWILIO_WHATSAPP_FROM': 'whatsapp:+14155238886',
    })
    assert [t.name for t in chain] == ['callmebot', 'whatsapp_business', 'twilio']
    only_business = build_transports({'WHATSAPP_BUSINESS_TOKEN': 't', 'WHATSAPP_PHONE_ID': 'p'})
    assert [t.name for t in only_business] == ['whatsapp_business']


def test_relay_from_config_with_nothing_configured():
    assert relay_from_config({}).transports == []


def test_each_delivery_is_traced(app):
    from opentelemetry import trace
    from opentelemetry.sdk.trace.export import SimpleSpanProcessor
    from opentelemetry.sdk.trace.export.in_memory_span_exporter import InMemorySpanExporter

    exporter = InMemorySpanExporter()
    trace.get_tracer_provider().add_span_processor(SimpleSpanProcessor(exporter))

    NotificationRelay([Raising(), Succeeding()]).deliver('customer', '9876543210', 'hi')

    spans = [s for s in exporter.get_finished_spans() if s.name == 'notification.deliver']
    assert len(spans) == 1
    assert spans[0].attributes['notification.role'] == 'customer'
    assert spans[0].attributes['notification.method'] == 'second'
    assert spans[0].attributes['notification.failures'] == 1
    exporter.shutdown()

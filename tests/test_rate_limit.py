from app import create_app
from app.config import TestingConfig
from extensions import limiter


class LimitedConfig(TestingConfig):
    RATELIMIT_ENABLED = True
    ORDER_LIMIT_PER_IP = '3 per hour'
    LOGIN_LIMIT_PER_IP = '2 per hour'


def test_order_rate_limit():
    app = create_app(LimitedConfig)
    try:
        limiter.reset()
        client = app.test_client()
        for _ in range(4):
            r = client.post('/api/v1/orders', json={})
        assert r.status_code == 429
        assert 'too many orders' in r.get_json()['message'].lower()
    finally:
        limiter.enabled = False


def test_signin_rate_limit():
    app = create_app(LimitedConfig)
    try:
        limiter.reset()
        client = app.test_client()
        for _ in range(3):
            r = client.post('/api/v1/auth/signin', json={'email': 'a@example.com', 'password': 'x'})
        assert r.status_code == 429
    finally:
        limiter.enabled = False

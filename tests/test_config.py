import pytest

from app import create_app
from app.config import (
    DevelopmentConfig,
    ProductionConfig,
    TestingConfig,
    get_config_class,
)


def test_testing_config_selected(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'testing')
    assert get_config_class() is TestingConfig
    assert TestingConfig.SQLALCHEMY_DATABASE_URI.startswith('sqlite://')
    assert TestingConfig.RATELIMIT_ENABLED is False


def test_development_is_default(monkeypatch):
    monkeypatch.delenv('APP_ENV', raising=False)
    assert get_config_class() is DevelopmentConfig
    assert DevelopmentConfig.DEBUG is True


def test_production_requires_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.delenv('SECRET_KEY', raising=False)
    monkeypatch.setenv('DATABASE_URL', 'postgresql://db/shop')
    monkeypatch.setenv('JWT_SECRET', 'x')
    with pytest.raises(RuntimeError) as exc:
        get_config_class()
    assert 'SECRET_KEY' in str(exc.value)


def test_production_with_secrets(monkeypatch):
    monkeypatch.setenv('APP_ENV', 'production')
    monkeypatch.setenv('SECRET_KEY', 's')
    monkeypatch.setenv('DATABASE_URL', 'postgresql://db/shop')
    monkeypatch.setenv('JWT_SECRET', 'x')
    assert get_config_class() is ProductionConfig


def test_order_and_notification_defaults():
    assert TestingConfig.ORDER_ID_PREFIX == 'JP'
    assert TestingConfig.SHOP_TIMEZONE == 'Asia/Kolkata'
    assert TestingConfig.NOTIFY_HTTP_TIMEOUT > 0
    assert TestingConfig.MEDIA_URL_BASE == '/media/'


def test_cors_whitelist(monkeypatch):
    class Whitelisted(TestingConfig):
        CORS_ALLOWED_ORIGINS = 'http://localhost:5173,https://shop.example.com'

    app = create_app(Whitelisted)
    client = app.test_client()
    resp = client.open(
        '/__ok',
        method='OPTIONS',
        headers={'Origin': 'http://localhost:5173', 'Access-Control-Request-Method': 'GET'},
    )
    assert resp.headers.get('Access-Control-Allow-Origin') == 'http://localhost:5173'

    resp = client.open(
        '/__ok',
        method='OPTIONS',
        headers={'Origin': 'https://evil.example.com', 'Access-Control-Request-Method': 'GET'},
    )
    assert resp.headers.get('Access-Control-Allow-Origin') is None


def test_security_and_trace_headers(client):
    resp = client.get('/__ok')
    assert resp.headers['X-Content-Type-Options'] == 'nosniff'
    assert resp.headers['X-Frame-Options'] == 'DENY'
    exposed = resp.headers['Access-Control-Expose-Headers']
    assert 'X-Request-ID' in exposed and 'traceparent' in exposed
    assert 'traceparent' in resp.headers

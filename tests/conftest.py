import os
import sys
import itertools
import pytest

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from models import db
from models.catalog import Category, Product
from models.user import UserAccount

NOTIFY_KEYS = (
    'CALLMEBOT_API_KEY',
    'WHATSAPP_BUSINESS_TOKEN',
    'WHATSAPP_PHONE_ID',
    'TWILIO_ACCOUNT_SID',
    'TWILIO_AUTH_TOKEN',
    'TWILIO_WHATSAPP_FROM',
    'RESEND_API_KEY',
)


@pytest.fixture(scope='session')
def app_instance(tmp_path_factory):
    os.environ.setdefault('APP_ENV', 'testing')
    os.environ.setdefault('DATABASE_URL', 'sqlite:///:memory:')
    from app import create_app
    app = create_app()
    app.config.update(
        TESTING=True,
        SQLALCHEMY_DATABASE_URI='sqlite:///:memory:',
        SQLALCHEMY_TRACK_MODIFICATIONS=False,
        MEDIA_ROOT=str(tmp_path_factory.mktemp('media')),
        **{key: None for key in NOTIFY_KEYS},
    )
    return app


@pytest.fixture(scope='function')
def app(app_instance):
    with app_instance.app_context():
        db.drop_all()
        db.create_all()
        yield app_instance
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    return app.test_client()


@pytest.fixture()
def unique_order_ids(monkeypatch):
    """Distinct order ids even when several orders land in the same millisecond."""
    from app.services import orders as order_service
    counter = itertools.count(10000001)
    monkeypatch.setattr(order_service, 'generate_order_id', lambda prefix='JP': f'{prefix}{next(counter)}')


def make_account(email, role='customer', password='secret123'):
    user = UserAccount(email=email, role=role, name=email.split('@')[0])
    user.set_password(password)
    db.session.add(user)
    db.session.commit()
    return user


def bearer(user):
    from app.utils import create_access_token
    return {'Authorization': f'Bearer {create_access_token(user.id, user.role)}'}


@pytest.fixture()
def admin_headers(app):
    return bearer(make_account('owner@example.com', role='admin'))


@pytest.fixture()
def customer(app):
    return make_account('shopper@example.com')


@pytest.fixture()
def customer_headers(customer):
    return bearer(customer)


@pytest.fixture()
def catalog(app):
    veg = Category(name='Vegetables', name_ta='காய்கறிகள்', icon='🥬')
    fruit = Category(name='Fruits', icon='🍎')
    db.session.add_all([veg, fruit])
    db.session.flush()
    tomato = Product(name='Tomato', category_id=veg.id, price=40, is_best_seller=True)
    onion = Product(name='Onion', category_id=veg.id, price=35, is_offer=True, offer_price=30)
    apple = Product(name='Apple', category_id=fruit.id, price=181)
    mango = Product(name='Mango', category_id=fruit.id, price=120, in_stock=False)
    db.session.add_all([tomato, onion, apple, mango])
    db.session.commit()
    return {'veg': veg, 'fruit': fruit, 'tomato': tomato, 'onion': onion, 'apple': apple, 'mango': mango}


@pytest.fixture()
def account_factory(app):
    return make_account


@pytest.fixture()
def headers_for(app):
    return bearer

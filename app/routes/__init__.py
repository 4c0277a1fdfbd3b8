from .catalog import catalog_bp
from .cart import cart_bp
from .checkout import checkout_bp
from .auth import auth_bp
from .notifications import notifications_bp
from .media import media_bp
from .admin import admin_bp


__all__ = [
    'catalog_bp',
    'cart_bp',
    'checkout_bp',
    'auth_bp',
    'notifications_bp',
    'media_bp',
    'admin_bp',
]

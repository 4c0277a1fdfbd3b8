import pytest

from app.auth.permissions import role_has_scope


@pytest.mark.parametrize('role,action,allowed', [
    ('customer', 'place_order', True),
    ('customer', 'view_own_orders', True),
    ('customer', 'manage_catalog', False),
    ('admin', 'manage_catalog', True),
    ('courier', 'view_own_orders', False),
])
def test_role_scopes(role, action, allowed):
    assert role_has_scope(role, action) is allowed


def test_scoped_customer_routes(client, customer_headers, admin_headers):
    assert client.get('/api/v1/orders/mine', headers=customer_headers).status_code == 200
    assert client.get('/api/v1/orders/mine', headers=admin_headers).status_code == 200
    r = client.patch('/api/v1/auth/me', json={'name': 'Meena'}, headers=customer_headers)
    assert r.status_code == 200


def test_unknown_role_is_forbidden(client, account_factory, headers_for):
    courier = account_factory('rider@example.com', role='courier')
    r = client.get('/api/v1/orders/mine', headers=headers_for(courier))
    assert r.status_code == 403
    assert client.get('/api/v1/admin/orders', headers=headers_for(courier)).status_code == 403

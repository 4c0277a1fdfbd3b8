from app.services import catalog as catalog_service


def test_storefront_lists_in_stock_only(client, catalog):
    r = client.get('/api/v1/products')
    assert r.status_code == 200
    names = {p['name'] for p in r.get_json()['data']}
    assert names == {'Tomato', 'Onion', 'Apple'}


def test_filter_by_category(client, catalog):
    r = client.get(f"/api/v1/products?category_id={catalog['fruit'].id}")
    assert [p['name'] for p in r.get_json()['data']] == ['Apple']


def test_best_sellers_and_offers(client, catalog):
    best = client.get('/api/v1/products/best-sellers').get_json()['data']
    assert [p['name'] for p in best] == ['Tomato']
    offers = client.get('/api/v1/products/offers').get_json()['data']
    assert [p['name'] for p in offers] == ['Onion']
    assert offers[0]['current_price'] == 30.0


def test_featured_lists_are_capped(app, catalog):
    from models import db
    from models.catalog import Product
    db.session.add_all([Product(name=f'Greens {i}', price=20, is_best_seller=True) for i in range(6)])
    db.session.commit()
    result = catalog_service.best_sellers()
    assert result.ok
    assert len(result.value) == catalog_service.FEATURED_LIMIT


def test_product_detail_and_missing(client, catalog):
    r = client.get(f"/api/v1/products/{catalog['tomato'].id}")
    body = r.get_json()['data']
    assert body['name'] == 'Tomato'
    assert body['category']['name'] == 'Vegetables'
    r = client.get('/api/v1/products/9999')
    assert r.status_code == 404
    assert r.get_json()['message'] == 'Product not found'


def test_categories_sorted_by_name(client, catalog):
    r = client.get('/api/v1/categories')
    assert [c['name'] for c in r.get_json()['data']] == ['Fruits', 'Vegetables']


def test_read_failure_becomes_err(app, monkeypatch):
    from sqlalchemy.exc import OperationalError
    from models.catalog import Category

    class BrokenQuery:
        def order_by(self, *args):
            raise OperationalError('SELECT', {}, Exception('no such table'))

    monkeypatch.setattr(Category, 'query', BrokenQuery())
    result = catalog_service.list_categories()
    assert result.ok is False
    assert result.status == 500
    assert result.error == 'Failed to fetch categories'


def test_public_shop_settings(client):
    data = client.get('/api/v1/shop').get_json()['data']
    assert data['whatsapp_number'] == '919876543210'
    assert data['sunday_timing'].startswith('Sunday')


def test_search_matches_english_and_tamil_names(client, catalog):
    from models import db
    catalog['tomato'].name_ta = 'தக்காளி'
    db.session.commit()

    r = client.get('/api/v1/products', query_string={'q': 'TOM'})
    assert [p['name'] for p in r.get_json()['data']] == ['Tomato']
    r = client.get('/api/v1/products', query_string={'q': 'தக்'})
    assert [p['name'] for p in r.get_json()['data']] == ['Tomato']
    r = client.get('/api/v1/products', query_string={'q': '  '})
    assert len(r.get_json()['data']) == 3


def test_search_keeps_stock_filter_and_literal_wildcards(app, catalog):
    # Mango is out of stock
    result = catalog_service.list_products(search='man')
    assert result.ok and result.value == []
    result = catalog_service.list_products(search='%')
    assert result.ok and result.value == []

def test_health_check(client):
    response = client.get('/health')
    assert response.status_code == 200
    json_data = response.get_json()
    assert json_data.get('status') == 'ok'
    assert json_data.get('database') == 'ok'


def test_metrics_endpoint(client):
    client.get('/health')
    response = client.get('/metrics')
    assert response.status_code == 200
    assert b'flask_http_request' in response.data


def test_api_docs_spec(client):
    response = client.get('/apispec.json')
    assert response.status_code == 200
    paths = response.get_json().get('paths', {})
    assert all(p.startswith('/api/v1/') for p in paths)

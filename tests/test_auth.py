from app.tasks import notifications as tasks
from models.user import UserAccount


def _signup(client, email='new@example.com', password='secret123'):
    return client.post('/api/v1/auth/signup', json={'email': email, 'password': password, 'name': 'New'})


def test_signup_and_signin(client):
    r = _signup(client, email='New@Example.com')
    assert r.status_code == 201
    data = r.get_json()['data']
    assert data['user']['email'] == 'new@example.com'
    assert data['user']['role'] == 'customer'
    assert data['access_token'] and data['refresh_token']

    r = client.post('/api/v1/auth/signin', json={'email': 'new@example.com', 'password': 'secret123'})
    assert r.status_code == 200
    token = r.get_json()['data']['access_token']

    me = client.get('/api/v1/auth/me', headers={'Authorization': f'Bearer {token}'})
    assert me.get_json()['data']['email'] == 'new@example.com'


def test_signup_validation(client):
    r = client.post('/api/v1/auth/signup', json={'email': 'x@example.com', 'password': '123'})
    assert r.status_code == 400
    r = client.post('/api/v1/auth/signup', json={'email': 'not-an-email', 'password': 'secret123'})
    assert r.status_code == 400
    _signup(client)
    r = _signup(client)
    assert r.status_code == 400
    assert 'already exists' in r.get_json()['message']


def test_signin_wrong_password(client):
    _signup(client)
    r = client.post('/api/v1/auth/signin', json={'email': 'new@example.com', 'password': 'wrong-one'})
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid email or password'


def test_refresh_issues_new_access_token(client):
    tokens = _signup(client).get_json()['data']
    r = client.post('/api/v1/auth/refresh', json={'refresh_token': tokens['refresh_token']})
    assert r.status_code == 200
    assert r.get_json()['data']['access_token']

    # an access token is not a refresh token
    r = client.post('/api/v1/auth/refresh', json={'refresh_token': tokens['access_token']})
    assert r.status_code == 401


def test_signout_requires_token(client):
    assert client.post('/api/v1/auth/signout').status_code == 401
    tokens = _signup(client).get_json()['data']
    r = client.post('/api/v1/auth/signout', headers={'Authorization': f"Bearer {tokens['access_token']}"})
    assert r.status_code == 200


def test_is_admin(client, admin_headers, customer_headers):
    assert client.get('/api/v1/auth/is-admin', headers=admin_headers).get_json()['data']['is_admin'] is True
    assert client.get('/api/v1/auth/is-admin', headers=customer_headers).get_json()['data']['is_admin'] is False
    assert client.get('/api/v1/auth/is-admin').status_code == 401


def test_profile_update(client, customer_headers):
    r = client.patch('/api/v1/auth/me', json={'phone': '9876543210', 'address': 'Anna Nagar'}, headers=customer_headers)
    assert r.status_code == 200
    assert r.get_json()['data']['address'] == 'Anna Nagar'
    r = client.patch('/api/v1/auth/me', json={'phone': '123'}, headers=customer_headers)
    assert r.status_code == 400


def test_password_reset_flow(client, monkeypatch):
    _signup(client)
    links = []
    monkeypatch.setattr(tasks.EmailSender, 'send', lambda self, to, subject, html, from_name=None: (links.append((to, html)) or (True, None)))

    r = client.post('/api/v1/auth/password-reset', json={'email': 'new@example.com'})
    assert r.status_code == 200
    assert len(links) == 1
    to, html = links[0]
    assert to == 'new@example.com'
    token = html.split('token=')[1].split('"')[0]

    r = client.post('/api/v1/auth/password-update', json={'password': 'brandnew1', 'reset_token': token})
    assert r.status_code == 200
    assert UserAccount.query.filter_by(email='new@example.com').one().check_password('brandnew1')

    # the link stops working once the password changed
    r = client.post('/api/v1/auth/password-update', json={'password': 'another1', 'reset_token': token})
    assert r.status_code == 401


def test_password_reset_unknown_email_same_answer(client):
    r = client.post('/api/v1/auth/password-reset', json={'email': 'ghost@example.com'})
    assert r.status_code == 200
    assert 'If an account exists' in r.get_json()['message']


def test_password_update_when_signed_in(client, customer, customer_headers):
    r = client.post('/api/v1/auth/password-update', json={'password': 'changed1'}, headers=customer_headers)
    assert r.status_code == 200
    r = client.post('/api/v1/auth/password-update', json={'password': 'changed1'})
    assert r.status_code == 401

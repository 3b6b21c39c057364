"""
Tests for login, session handling, role checks and CSRF protection
"""

import pytest

from cmms.test.conftest import TEST_PASSWORD, login_user, make_app


def test_login_and_current_user(client):
    response = login_user(client, 'manager')
    assert response.status_code == 200
    body = response.get_json()
    assert body['username'] == 'manager'
    assert body['role'] == 'MANAGER'
    assert 'password_hash' not in body

    response = client.get('/api/user')
    assert response.status_code == 200
    assert response.get_json()['username'] == 'manager'


def test_login_rejects_bad_credentials(client):
    assert login_user(client, 'admin', 'wrong').status_code == 401
    assert login_user(client, 'nobody').status_code == 401


def test_login_requires_fields(client):
    response = client.post('/api/login', json={'username': 'admin'})
    assert response.status_code == 400
    assert response.get_json() == {'message': 'Validation error', 'errors': {'password': ['This field is required']}}


def test_disabled_account_cannot_log_in(app, client):
    from cmms import db
    from cmms.data.core.user_info.user import User

    with app.app_context():
        User.query.filter_by(username='tech').first().is_active = False
        db.session.commit()

    assert login_user(client, 'tech').status_code == 403


def test_logout(admin_client):
    assert admin_client.post('/api/logout').status_code == 200
    assert admin_client.get('/api/user').status_code == 401


def test_api_requires_login(client):
    for path in ('/api/assets', '/api/work-orders', '/api/maintenance-schedules',
                 '/api/dashboard/maintenance-tasks', '/api/maintenance-calendar', '/api/maintenance-analytics'):
        response = client.get(path)
        assert response.status_code == 401, f"{path} should require login"
        assert response.get_json() == {'message': 'Authentication required'}


def test_users_are_admin_only(admin_client, manager_client, technician_client):
    assert technician_client.get('/api/users').status_code == 403
    assert manager_client.get('/api/users').status_code == 403

    response = admin_client.get('/api/users')
    assert response.status_code == 200
    assert [u['username'] for u in response.get_json()] == ['admin', 'manager', 'tech']


def test_create_user_enforces_password_policy(admin_client):
    response = admin_client.post('/api/users', json={'username': 'newtech', 'password': 'short'})
    assert response.status_code == 400
    assert 'password' in response.get_json()['errors']

    response = admin_client.post('/api/users', json={'username': 'newtech', 'password': 'Str0ng!Pass', 'role': 'technician'})
    assert response.status_code == 201
    assert response.get_json()['role'] == 'TECHNICIAN'

    response = admin_client.post('/api/users', json={'username': 'newtech', 'password': 'Str0ng!Pass'})
    assert response.status_code == 400
    assert response.get_json()['errors'] == {'username': ['Username already exists']}


def test_unknown_route_is_json_404(admin_client):
    response = admin_client.get('/api/does-not-exist')
    assert response.status_code == 404
    assert 'message' in response.get_json()


def test_security_headers(client):
    response = client.get('/api/csrf-token')
    assert response.headers['X-Frame-Options'] == 'SAMEORIGIN'
    assert response.headers['X-Content-Type-Options'] == 'nosniff'


def test_csrf_token_required_when_enabled():
    app = make_app(WTF_CSRF_ENABLED=True)
    client = app.test_client()

    response = client.post('/api/login', json={'username': 'admin', 'password': TEST_PASSWORD})
    assert response.status_code == 400
    assert 'CSRF' in response.get_json()['message']

    token = client.get('/api/csrf-token').get_json()['csrf_token']
    response = client.post(
        '/api/login',
        json={'username': 'admin', 'password': TEST_PASSWORD},
        headers={'X-CSRFToken': token}
    )
    assert response.status_code == 200


def test_missing_secret_key_stops_startup():
    with pytest.raises(RuntimeError):
        make_app(SECRET_KEY=None)

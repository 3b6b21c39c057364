"""
Pytest configuration and fixtures for the CMMS tests

The app fixture does not keep an application context pushed: test client
requests would otherwise share flask.g, and with it the logged-in user.
Tests that work on the database directly use app_ctx; the factory fixtures
open their own context and return row ids.
"""
import os

# Configure before the cmms package configures its logger
os.environ.setdefault('SECRET_KEY', 'test_secret_key_for_cmms_testing')
os.environ.setdefault('CMMS_LOG_TO_FILE', 'False')
os.environ.setdefault('CMMS_LOG_LEVEL', 'WARNING')

from datetime import date, datetime  # noqa: E402

import pytest  # noqa: E402

from cmms import create_app  # noqa: E402
from cmms import db as _db  # noqa: E402

TEST_PASSWORD = 'TestPass123!'

TEST_CONFIG = {
    'TESTING': True,
    'SQLALCHEMY_DATABASE_URI': 'sqlite://',
    'WTF_CSRF_ENABLED': False,
    'RATELIMIT_ENABLED': False,
    'SESSION_COOKIE_SECURE': False,
    'REMEMBER_COOKIE_SECURE': False,
    'MAINTENANCE_STRATEGY': 'fixed',
    'MAINTENANCE_HORIZON_MONTHS': 12,
    'ADMIN_USERNAME': 'admin',
    'ADMIN_PASSWORD': TEST_PASSWORD,
}


def make_app(**overrides):
    config = dict(TEST_CONFIG)
    config.update(overrides)
    app = create_app(config)

    with app.app_context():
        _db.create_all()
        _seed_users()

    return app


def _seed_users():
    from cmms.data.core.user_info.user import User, UserRole

    for username, role in (('admin', UserRole.ADMIN), ('manager', UserRole.MANAGER), ('tech', UserRole.TECHNICIAN)):
        User.create_from_dict({'username': username, 'password': TEST_PASSWORD, 'role': role})


@pytest.fixture(scope='function')
def app():
    """Create Flask application over a fresh in-memory database"""
    app = make_app()
    yield app
    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def app_ctx(app):
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


def login_user(client, username='admin', password=TEST_PASSWORD):
    """Helper function to login a user"""
    return client.post('/api/login', json={'username': username, 'password': password})


def _logged_in(app, username):
    client = app.test_client()
    response = login_user(client, username)
    assert response.status_code == 200, f"Login as {username} failed: {response.get_json()}"
    return client


@pytest.fixture(scope='function')
def admin_client(app):
    return _logged_in(app, 'admin')


@pytest.fixture(scope='function')
def manager_client(app):
    return _logged_in(app, 'manager')


@pytest.fixture(scope='function')
def technician_client(app):
    return _logged_in(app, 'tech')


@pytest.fixture
def today():
    return date(2024, 3, 15)


def _insert(app, instance):
    with app.app_context():
        _db.session.add(instance)
        _db.session.commit()
        return instance.id


@pytest.fixture
def make_asset(app):
    from cmms.data.core.asset_info.asset import Asset

    def _make(name='Pump P-1', **fields):
        return _insert(app, Asset(name=name, **fields))
    return _make


@pytest.fixture
def make_schedule(app, make_asset):
    from cmms.data.maintenance.maintenance_schedules import MaintenanceSchedule

    def _make(asset_id=None, title='Inspect', frequency='MONTHLY', start_date=date(2024, 1, 1), **fields):
        if asset_id is None:
            asset_id = make_asset()
        return _insert(app, MaintenanceSchedule(
            title=title,
            asset_id=asset_id,
            frequency=frequency,
            start_date=start_date,
            **fields
        ))
    return _make


@pytest.fixture
def make_completion(app):
    from cmms.data.maintenance.maintenance_completions import MaintenanceCompletion

    def _make(schedule_id, completed_date, notes=None):
        if not isinstance(completed_date, datetime):
            completed_date = datetime.combine(completed_date, datetime.min.time())
        return _insert(app, MaintenanceCompletion(schedule_id=schedule_id, completed_date=completed_date, notes=notes))
    return _make


@pytest.fixture
def make_work_order(app):
    from cmms.data.work_orders.work_order import WorkOrder

    def _make(title='Fix leak', due_date=datetime(2024, 3, 20, 12, 0), **fields):
        return _insert(app, WorkOrder(title=title, due_date=due_date, **fields))
    return _make


@pytest.fixture
def make_problem_button(app):
    from cmms.data.problems.problem_button import ProblemButton

    def _make(label='Leak', **fields):
        return _insert(app, ProblemButton(label=label, **fields))
    return _make

"""
Pytest configuration and fixtures for the equipment dashboard tests
"""
import os
import tempfile

# Must be set before the package is imported: the logger opens its file on first use
os.environ.setdefault('LOG_DIR', tempfile.mkdtemp(prefix='medequip-logs-'))
os.environ.setdefault('SECRET_KEY', 'test-secret-key')

import pytest

from medequip import create_app
from medequip import db as _db
from medequip.buisness.assets.asset_manager import AssetManager
from medequip.buisness.notifications.notifier import Notifier
from medequip.data.storage.local_store import LocalCollectionStore

ADMIN_PASSWORD = 'admin1234'


class RecordingNotifier(Notifier):
    """Keeps every message instead of sending it"""

    def __init__(self):
        self.messages = []

    def notify(self, message):
        self.messages.append(message)


class StubViewer:
    """Stand-in for a logged in user in business-layer tests"""

    def __init__(self, username='nurse', role='Staff', department=None):
        self.username = username
        self.role = role
        self.department = department

    @property
    def is_admin(self):
        return self.role == 'Admin'


@pytest.fixture(scope='function')
def app():
    """Create Flask application for testing, backed by an in-memory database"""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'SQLALCHEMY_DATABASE_URI': 'sqlite://',
        'WTF_CSRF_ENABLED': False,
        'RATELIMIT_ENABLED': False,
        'ENABLE_HTTPS': False,
        'FORCE_HTTPS_REDIRECT': False,
        'ADMIN_PASSWORD': ADMIN_PASSWORD,
        'SEED_SAMPLE_DATA': True,
    })
    app.extensions['medequip.notifier'] = RecordingNotifier()
    yield app

    with app.app_context():
        _db.session.remove()
        _db.drop_all()


@pytest.fixture(scope='function')
def app_context(app):
    with app.app_context():
        yield app


@pytest.fixture(scope='function')
def notifier(app):
    return app.extensions['medequip.notifier']


@pytest.fixture(scope='function')
def client(app):
    """Create Flask test client"""
    return app.test_client()


@pytest.fixture(scope='function')
def authenticated_client(client):
    """Create test client logged in as the built-in admin"""
    login_user(client)
    return client


@pytest.fixture(scope='function')
def local_store(app_context):
    """Local store without sample records"""
    return LocalCollectionStore(seed_samples=False)


@pytest.fixture(scope='function')
def seeded_store(app_context):
    """Local store serving the built-in sample records"""
    return LocalCollectionStore(seed_samples=True)


@pytest.fixture(scope='function')
def asset_manager(local_store):
    return AssetManager(local_store)


def login_user(client, username='admin', password=ADMIN_PASSWORD):
    """Helper function to login a user"""
    return client.post('/login', data={
        'username': username,
        'password': password
    }, follow_redirects=True)

"""
Shared pytest fixtures for LifeTrack tests.
"""

import pytest
import os
import sys

# Ensure the project root is on sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))


class TestConfig:
    """Test configuration backed by an unseeded in-memory store."""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = None
    MONTHLY_BUDGET = 1000
    LOG_LEVEL = 'WARNING'

    @staticmethod
    def init_storage(app):
        from storage import MemStorage
        app.storage = MemStorage(seed=False)


class SQLiteTestConfig(TestConfig):
    """Test configuration backed by DatabaseStorage on in-memory SQLite."""
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    @staticmethod
    def init_storage(app):
        from config import Config
        Config.init_storage(app)


@pytest.fixture
def app():
    """Create application for testing."""
    from app import create_app
    application = create_app(config_class=TestConfig)
    yield application


@pytest.fixture
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture
def sqlite_app():
    """Application on DatabaseStorage with tables created and an app context pushed."""
    from app import create_app
    from models import db
    application = create_app(config_class=SQLiteTestConfig)
    with application.app_context():
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture(params=['memory', 'database'])
def storage(request):
    """Each storage backend in turn, for tests of the shared contract."""
    if request.param == 'memory':
        from storage import MemStorage
        yield MemStorage(seed=False)
    else:
        application = request.getfixturevalue('sqlite_app')
        yield application.storage


@pytest.fixture
def user(client):
    """A user created through the API."""
    response = client.post('/api/users', json={
        'username': 'tester',
        'password': 'secret-pass',
        'displayName': 'Test User',
    })
    assert response.status_code == 201
    return response.get_json()

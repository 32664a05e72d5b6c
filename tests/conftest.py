"""
Shared fixtures for the test suite.

MongoDB is replaced by an in-memory ``mongomock`` client that is handed to the
application factory, so no server is needed.
"""

import mongomock
import pytest

from todoapp.app import create_app
from todoapp.services.auth_service import AuthService
from todoapp.services.task_service import TaskService
from todoapp.stores.task_store import TaskStore
from todoapp.stores.user_store import UserStore
from todoapp.utils.db import ensure_indexes

TEST_DB_NAME = "todoapp_test"
PASSWORD = "password123"


@pytest.fixture
def mongo_client():
    return mongomock.MongoClient()


@pytest.fixture
def db(mongo_client):
    database = mongo_client[TEST_DB_NAME]
    ensure_indexes(database)
    return database


@pytest.fixture
def user_store(db):
    return UserStore(db)


@pytest.fixture
def task_store(db):
    return TaskStore(db)


@pytest.fixture
def auth_service(user_store):
    return AuthService(user_store)


@pytest.fixture
def task_service(task_store):
    return TaskService(task_store)


@pytest.fixture
def alice(auth_service):
    auth_service.signup("alice123", PASSWORD, PASSWORD)
    return auth_service.login("alice123", PASSWORD)


@pytest.fixture
def bob(auth_service):
    auth_service.signup("bob456", PASSWORD, PASSWORD)
    return auth_service.login("bob456", PASSWORD)


@pytest.fixture
def app(mongo_client, db):
    return create_app("todoapp.config.TestConfig", mongo_client=mongo_client)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def logged_in_client(app, alice):
    """A test client already signed in as ``alice``."""
    c = app.test_client()
    c.post("/auth/login", data={"username": alice.username, "password": PASSWORD})
    return c



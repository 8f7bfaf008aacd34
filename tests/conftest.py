"""
Pytest fixtures for the user management service.

MongoDB is replaced by mongomock; collections are dropped around every test.
"""

import mongomock
import pytest
from fastapi.testclient import TestClient
from mongoengine import connect, disconnect
from mongoengine.connection import get_db

from app.models.auth_log import AuthLog
from app.models.token import Token
from app.models.user import User
from app.services.auth import hash_password
from app.utils.base import UserStatus, UserType
from app.utils.config.env import Settings
from main import create_app


PASSWORD = "Secret123!"


@pytest.fixture(scope="session")
def settings():
    return Settings(
        _env_file=None,
        mongo_db="user_management_test",
        jwt_secret_key="test-secret-key",
        bcrypt_rounds=4,
    )


@pytest.fixture(scope="session", autouse=True)
def mongo(settings):
    connect(
        settings.mongo_db,
        host="mongodb://localhost",
        alias="default",
        mongo_client_class=mongomock.MongoClient,
        tz_aware=True,
    )
    yield
    disconnect(alias="default")


def _drop_all():
    for document in (AuthLog, Token, User):
        document.drop_collection()
    get_db()["counters"].drop()


@pytest.fixture(autouse=True)
def clean_db(mongo):
    _drop_all()
    yield
    _drop_all()


@pytest.fixture
def client(settings):
    app = create_app(settings, lifespan=None)
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def make_user():
    """Factory inserting a user directly into the store."""

    def _make_user(
        username,
        password=PASSWORD,
        user_type=UserType.CUSTOMER,
        status=UserStatus.ACTIVE,
        email=None,
        mobile=None,
        full_name=None,
    ):
        user = User(
            full_name=full_name or username.title(),
            username=username,
            email=email,
            mobile=mobile,
            password=hash_password(password, rounds=4),
            user_type=user_type.value,
            status=status.value,
        )
        user.save()
        return user

    return _make_user


@pytest.fixture
def login(client):
    """Log in through the API and return the bearer token."""

    def _login(username, password=PASSWORD):
        resp = client.post("/api/users/login", json={"username": username, "password": password})
        body = resp.json()
        assert body["success"], body
        return body["data"]["token"]

    return _login


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def super_admin(make_user):
    return make_user("rootadmin", user_type=UserType.SUPER_ADMIN, email="root@example.com")


@pytest.fixture
def customer(make_user):
    return make_user("jane.doe", email="jane@example.com", mobile="9876543210")


@pytest.fixture
def admin_headers(super_admin, login):
    return bearer(login(super_admin.username))


@pytest.fixture
def customer_headers(customer, login):
    return bearer(login(customer.username))

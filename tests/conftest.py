import datetime

import pytest

from config import TestConfig
from medportal import create_app, db


class NoSeedConfig(TestConfig):
    SEED_DOCTORS = False


@pytest.fixture
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def empty_app():
    app = create_app(NoSeedConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def storage(empty_app):
    with empty_app.app_context():
        yield empty_app.extensions["storage"]


def register(client, username, role="patient", password="secret123"):
    resp = client.post("/api/register", json={
        "username": username,
        "password": password,
        "role": role,
        "name": username.title(),
        "email": f"{username}@example.com",
    })
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()


@pytest.fixture
def patient_client(app):
    client = app.test_client()
    client.user = register(client, "alice")
    return client


@pytest.fixture
def admin_client(app):
    client = app.test_client()
    client.user = register(client, "root", role="admin")
    return client


@pytest.fixture
def future_date():
    return (datetime.datetime.now() + datetime.timedelta(days=7)).replace(microsecond=0)

from __future__ import annotations

import pytest

from src.uniattend.uniattend.auth.service import SessionUser

from tests.fakes import FakeStore


@pytest.fixture
def store():
    return FakeStore().seed()


@pytest.fixture
def container(store):
    return store.container()


@pytest.fixture
def as_session_user(store):
    def _make(user_id: int) -> SessionUser:
        return SessionUser.from_user(store.users.get_by_id(user_id))

    return _make


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    from src.uniattend.uniattend.main import create_app

    flask_app = create_app(container=container)
    flask_app.config["TESTING"] = True
    return flask_app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(unique_id: str, password: str):
        return client.post("/login", data={"unique_id": unique_id, "password": password})

    return _login

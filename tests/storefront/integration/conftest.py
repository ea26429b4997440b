"""HTTP fixtures: a FastAPI app with every storefront router mounted."""

from uuid import uuid4

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from storefront.api.routing import mount
from storefront.user.tokens import issue_token


@pytest.fixture()
def client():
    return TestClient(mount(FastAPI()))


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def register(client):
    """Register a customer over HTTP; returns ``(user_id, headers)``."""

    def _register(name="Jane Doe", email=None, password="s3cret-pass"):
        email = email or f"shopper-{uuid4().hex[:8]}@example.com"
        response = client.post("/auth/register", json={"name": name, "email": email, "password": password})
        assert response.status_code == 201, response.text
        body = response.json()
        return body["user_id"], bearer(body["token"])

    return _register


@pytest.fixture()
def customer(register):
    return register()


@pytest.fixture()
def admin_headers(make_user):
    user_id = make_user(name="Admin", email="admin@shop.test", role="admin")
    return bearer(issue_token(user_id, "admin@shop.test"))

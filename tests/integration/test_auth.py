"""Integration tests for JWT authentication and the ``/api/v1/me`` probe."""

import pytest
from django.contrib.auth import get_user_model

pytestmark = pytest.mark.integration

User = get_user_model()


@pytest.fixture()
def credentials():
    User.objects.create_user(username="caixa", password="testpass123")
    return {"username": "caixa", "password": "testpass123"}


class TestJWT:
    def test_obtain_token_pair(self, api_client, credentials):
        response = api_client.post("/api/v1/auth/token/", credentials, format="json")
        assert response.status_code == 200
        assert "access" in response.data
        assert "refresh" in response.data

    def test_wrong_password(self, api_client, credentials):
        credentials["password"] = "wrong"
        response = api_client.post("/api/v1/auth/token/", credentials, format="json")
        assert response.status_code == 401

    def test_access_token_authenticates(self, api_client, credentials):
        tokens = api_client.post(
            "/api/v1/auth/token/", credentials, format="json"
        ).data
        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 200

    def test_refresh(self, api_client, credentials):
        tokens = api_client.post(
            "/api/v1/auth/token/", credentials, format="json"
        ).data
        response = api_client.post(
            "/api/v1/auth/token/refresh/", {"refresh": tokens["refresh"]}, format="json"
        )
        assert response.status_code == 200
        assert "access" in response.data

    def test_garbage_token_rejected(self, api_client):
        api_client.credentials(HTTP_AUTHORIZATION="Bearer not-a-token")
        response = api_client.get("/api/v1/orders/")
        assert response.status_code == 401


class TestMe:
    def test_regular_user(self, auth_client):
        response = auth_client.get("/api/v1/me")
        assert response.status_code == 200
        assert response.data == {"user": "atendente", "is_admin": False}

    def test_staff_user(self, staff_client):
        response = staff_client.get("/api/v1/me")
        assert response.data["is_admin"] is True

    def test_anonymous(self, api_client):
        assert api_client.get("/api/v1/me").status_code == 401

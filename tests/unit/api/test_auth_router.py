"""Unit tests for admin sign-in."""

from fastapi import status

from tests.fixtures.services import (
    ADMIN_EMAIL,
    ADMIN_PASSWORD,
    ADMIN_TOKEN,
    CUSTOMER_EMAIL,
    CUSTOMER_PASSWORD,
)


class TestAdminLogin:
    def test_admin_receives_session(self, client):
        """Test an admin signs in and receives a session."""
        response = client.post(
            "/admin/login", json={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD}
        )

        assert response.status_code == status.HTTP_200_OK
        body = response.json()
        assert body["success"] is True
        assert body["access_token"] == ADMIN_TOKEN
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == 3600

    def test_bad_credentials(self, client):
        """Test bad credentials get 401 with the provider message."""
        response = client.post(
            "/admin/login", json={"email": ADMIN_EMAIL, "password": "wrong"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json() == {"success": False, "detail": "Invalid login credentials"}

    def test_valid_account_outside_allow_list(self, client):
        """Test a valid non-admin account gets 403."""
        response = client.post(
            "/admin/login", json={"email": CUSTOMER_EMAIL, "password": CUSTOMER_PASSWORD}
        )

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.json() == {
            "success": False,
            "detail": "Access denied. Admin access required.",
        }

    def test_missing_password(self, client):
        """Test a body without a password is a validation error."""
        response = client.post("/admin/login", json={"email": ADMIN_EMAIL})
        assert response.status_code == 422


class TestAdminMe:
    def test_returns_the_admin(self, client, admin_headers):
        """Test the current admin is returned for an admin token."""
        response = client.get("/admin/me", headers=admin_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["email"] == ADMIN_EMAIL

    def test_non_admin(self, client, customer_headers):
        """Test a non-admin token is refused."""
        response = client.get("/admin/me", headers=customer_headers)
        assert response.status_code == status.HTTP_403_FORBIDDEN
